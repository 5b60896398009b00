"""ViewModel for the gallery: catalog loading, filtering and slideshow start."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from app.viewmodels.photo_vm import PhotoVM
from app.viewmodels.presentation_vm import PresentationController
from core.models import Catalog, FilterCriteria, Photo
from core.services.filter_service import FilterService, build_options, names_for


class GalleryVM:
    """Main gallery view-model.

    Holds the loaded catalog and the current filter criteria, and exposes the
    filtered photos in catalog order.
    """

    def __init__(
        self,
        repo,
        presentation: PresentationController,
        filter_service: FilterService | None = None,
    ) -> None:
        """Create a GalleryVM.

        Args:
            repo: Repository with a `load(path) -> Catalog` method.
            presentation: Controller the slideshow is opened on.
            filter_service: Filtering service (defaults to `FilterService`).
        """
        self._repo = repo
        self._presentation = presentation
        self._filter = filter_service or FilterService()
        self.catalog = Catalog()
        self._criteria = FilterCriteria()
        self._filtered: list[Photo] = []
        self._source_path: str | None = None
        self._by_id: dict[str, Photo] = {}

    def load(self, path: str | Path) -> None:
        """Load the catalog at `path`, keeping the current criteria."""
        catalog = self._repo.load(path)
        self.catalog = catalog
        self._source_path = str(path)
        self._by_id = {p.id: p for p in catalog.photos}
        self._refilter()

    def get_source_path(self) -> str | None:
        """Return the last-loaded catalog path, if available."""
        return self._source_path

    # Criteria

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def set_search(self, text: str) -> None:
        self._set_criteria(FilterCriteria(self._criteria.tag_ids, self._criteria.category_ids, text))

    def set_selected_tags(self, tag_ids: Iterable[str]) -> None:
        self._set_criteria(
            FilterCriteria(frozenset(tag_ids), self._criteria.category_ids, self._criteria.search)
        )

    def set_selected_categories(self, category_ids: Iterable[str]) -> None:
        self._set_criteria(
            FilterCriteria(self._criteria.tag_ids, frozenset(category_ids), self._criteria.search)
        )

    def clear_filters(self) -> None:
        self._set_criteria(FilterCriteria())

    # Derived data

    @property
    def filtered(self) -> list[Photo]:
        """Photos matching the current criteria, in catalog order."""
        return list(self._filtered)

    @property
    def tag_options(self) -> list[tuple[str, str]]:
        return build_options(self.catalog.tags)

    @property
    def category_options(self) -> list[tuple[str, str]]:
        return build_options(self.catalog.categories)

    def photo_by_id(self, photo_id: str) -> Photo | None:
        return self._by_id.get(photo_id)

    def tag_names_for(self, photo: Photo) -> list[str]:
        return names_for(photo.tag_ids, self.catalog.tags)

    def category_names_for(self, photo: Photo) -> list[str]:
        return names_for(photo.category_ids, self.catalog.categories)

    @property
    def photo_count(self) -> int:
        """Number of photos in the loaded catalog."""
        return len(self.catalog.photos)

    # Slideshow

    @property
    def can_start_slideshow(self) -> bool:
        return bool(self._filtered)

    def start_slideshow(self) -> bool:
        """Open the slideshow on the filtered photos.

        Returns:
            False when nothing matches the current criteria.
        """
        sequence = [PhotoVM(p).to_display() for p in self._filtered]
        return self._presentation.open(sequence)

    def _set_criteria(self, criteria: FilterCriteria) -> None:
        if criteria == self._criteria:
            return
        self._criteria = criteria
        self._refilter()

    def _refilter(self) -> None:
        self._filtered = self._filter.filter(self.catalog.photos, self._criteria)
        logger.debug("Gallery shows {} of {} photos", len(self._filtered), self.photo_count)
