from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.photo_vm import PhotoVM
from app.viewmodels.presentation_vm import PresentationController
from core.models import Catalog, Category, DisplayPhoto, Tag
from infrastructure.audio_session import AudioSession


class _StubRepo:
    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.paths: list[str] = []

    def load(self, path):
        self.paths.append(str(path))
        return self.catalog


@pytest.fixture()
def presentation(fake_timer, make_backend) -> PresentationController:
    return PresentationController(
        fake_timer, lambda on_error: AudioSession(make_backend(), on_error=on_error)
    )


@pytest.fixture()
def catalog(make_photo) -> Catalog:
    return Catalog(
        photos=[
            make_photo(title="Beach Sunset", tags=("t1", "t2"), categories=("c1",)),
            make_photo(title="Harbor", tags=("t1",)),
            make_photo(title="sunset hills", tags=("t2",), categories=("c1",)),
        ],
        tags=[Tag("t1", "Sea"), Tag("t2", "Evening")],
        categories=[Category("c1", "Travel")],
    )


@pytest.fixture()
def vm(catalog, presentation) -> GalleryVM:
    gallery = GalleryVM(_StubRepo(catalog), presentation)
    gallery.load("catalog.json")
    return gallery


def test_load_shows_everything(vm, catalog) -> None:
    assert vm.filtered == catalog.photos
    assert vm.photo_count == 3
    assert vm.get_source_path() == "catalog.json"
    assert vm.tag_options == [("t1", "Sea"), ("t2", "Evening")]
    assert vm.category_options == [("c1", "Travel")]


def test_facets_combine(vm, catalog) -> None:
    vm.set_search("SUNSET")
    assert [p.title for p in vm.filtered] == ["Beach Sunset", "sunset hills"]

    vm.set_selected_tags(["t1"])
    assert [p.title for p in vm.filtered] == ["Beach Sunset"]

    vm.set_selected_tags([])
    vm.set_selected_categories(["c1"])
    assert [p.title for p in vm.filtered] == ["Beach Sunset", "sunset hills"]

    vm.clear_filters()
    assert vm.filtered == catalog.photos
    assert vm.criteria.is_empty


def test_lookup_helpers(vm, catalog) -> None:
    first = catalog.photos[0]

    assert vm.photo_by_id(first.id) is first
    assert vm.photo_by_id("missing") is None
    assert vm.tag_names_for(first) == ["Sea", "Evening"]
    assert vm.category_names_for(first) == ["Travel"]


def test_start_slideshow_uses_filtered_sequence(vm, presentation, catalog) -> None:
    vm.set_selected_tags(["t2"])

    assert vm.start_slideshow() is True

    assert presentation.is_open
    assert presentation.length == 2
    assert presentation.current_photo == PhotoVM(catalog.photos[0]).to_display()


def test_start_slideshow_refused_when_nothing_matches(vm, presentation) -> None:
    vm.set_search("no such title")

    assert not vm.can_start_slideshow
    assert vm.start_slideshow() is False
    assert not presentation.is_open


def test_photo_vm_display_helpers(make_photo) -> None:
    photo = make_photo(title="Beach", description="Waves")
    photo_vm = PhotoVM(photo)

    assert photo_vm.to_display() == DisplayPhoto(id=photo.id, path=photo.path, title="Beach")
    assert photo_vm.description == "Waves"
    assert photo_vm.title == "Beach"


def test_photo_vm_date_label(make_photo) -> None:
    photo = make_photo()
    photo = type(photo)(
        id=photo.id,
        title=photo.title,
        path=photo.path,
        created_at=datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc),
    )

    assert PhotoVM(photo).date_label == "March 5, 2024"
