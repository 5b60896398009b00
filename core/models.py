"""Core domain models for the photo catalog and slideshow."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Photo:
    """A single catalog photo. Never mutated by the core."""

    id: str
    title: str
    path: str
    created_at: datetime
    description: str | None = None
    tag_ids: frozenset[str] = field(default_factory=frozenset)
    category_ids: frozenset[str] = field(default_factory=frozenset)
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Tag:
    """A tag referenced from `Photo.tag_ids`."""

    id: str
    name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class Category:
    """A category referenced from `Photo.category_ids`."""

    id: str
    name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class FilterCriteria:
    """Selected facets; an empty facet places no constraint."""

    tag_ids: frozenset[str] = field(default_factory=frozenset)
    category_ids: frozenset[str] = field(default_factory=frozenset)
    search: str = ""

    @property
    def is_empty(self) -> bool:
        """True when no facet is constrained."""
        return not self.tag_ids and not self.category_ids and not self.search


@dataclass(frozen=True)
class DisplayPhoto:
    """The part of a photo the slideshow renders."""

    id: str
    path: str
    title: str


@dataclass
class Catalog:
    """Read-only collection handed over by the catalog repository."""

    photos: list[Photo] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
