"""Facet filtering for photo collections.

Filtering is a narrowing projection: a photo is kept only when it satisfies
every selected tag, every selected category and the title search at once.
Input order is preserved and the input sequence is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from loguru import logger

from core.models import Category, FilterCriteria, Photo, Tag


def _matches_tags(photo: Photo, tag_ids: frozenset[str]) -> bool:
    return not tag_ids or tag_ids <= photo.tag_ids


def _matches_categories(photo: Photo, category_ids: frozenset[str]) -> bool:
    return not category_ids or category_ids <= photo.category_ids


def _matches_search(photo: Photo, needle: str) -> bool:
    return not needle or needle in photo.title.casefold()


def matches(photo: Photo, criteria: FilterCriteria) -> bool:
    """Return True if `photo` satisfies all facets of `criteria`."""
    return (
        _matches_tags(photo, criteria.tag_ids)
        and _matches_categories(photo, criteria.category_ids)
        and _matches_search(photo, criteria.search.casefold())
    )


def filter_photos(photos: Iterable[Photo], criteria: FilterCriteria) -> list[Photo]:
    """Return the photos matching `criteria`, in input order.

    The result is a new list holding the same `Photo` objects (no copies).
    """
    return [p for p in photos if matches(p, criteria)]


def build_options(entities: Iterable[Tag | Category]) -> list[tuple[str, str]]:
    """Return `(value, label)` pairs for selection widgets, in catalog order."""
    return [(e.id, e.name) for e in entities]


def names_for(ids: Iterable[str], entities: Iterable[Tag | Category]) -> list[str]:
    """Resolve `ids` to display names, keeping catalog order.

    Unknown ids are skipped.
    """
    wanted = set(ids)
    return [e.name for e in entities if e.id in wanted]


class FilterService:
    """Applies `FilterCriteria` to photo sequences."""

    def filter(self, photos: Sequence[Photo], criteria: FilterCriteria) -> list[Photo]:
        """Filter `photos` and log the narrowing at debug level.

        Args:
            photos: Photos in display order.
            criteria: Selected tags, categories and search text.
        """
        result = filter_photos(photos, criteria)
        logger.debug(
            "Filter tags={} categories={} search={!r}: {} -> {} photos",
            sorted(criteria.tag_ids),
            sorted(criteria.category_ids),
            criteria.search,
            len(photos),
            len(result),
        )
        return result
