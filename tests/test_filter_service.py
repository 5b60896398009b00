from __future__ import annotations

from core.models import Category, FilterCriteria, Tag
from core.services.filter_service import (
    FilterService,
    build_options,
    filter_photos,
    matches,
    names_for,
)


def _criteria(tags=(), categories=(), search="") -> FilterCriteria:
    return FilterCriteria(frozenset(tags), frozenset(categories), search)


def test_tag_facet_keeps_only_tagged_photos(make_photo) -> None:
    a = make_photo(tags=("t1",))
    b = make_photo(tags=("t2",))

    assert filter_photos([a, b], _criteria(tags=["t1"])) == [a]


def test_search_is_case_insensitive_and_keeps_order(make_photo) -> None:
    a = make_photo(title="Sunset")
    b = make_photo(title="Beach Sunset")
    c = make_photo(title="Mountains")

    assert filter_photos([a, b, c], _criteria(search="sunset")) == [a, b]
    assert filter_photos([a, b, c], _criteria(search="SUNSET")) == [a, b]


def test_tags_are_conjunctive(make_photo) -> None:
    both = make_photo(tags=("t1", "t2"))
    only_one = make_photo(tags=("t1",))
    extra = make_photo(tags=("t1", "t2", "t3"))

    result = filter_photos([both, only_one, extra], _criteria(tags=["t1", "t2"]))

    assert result == [both, extra]


def test_categories_are_conjunctive(make_photo) -> None:
    a = make_photo(categories=("c1", "c2"))
    b = make_photo(categories=("c2",))

    assert filter_photos([a, b], _criteria(categories=["c1", "c2"])) == [a]
    assert filter_photos([a, b], _criteria(categories=["c2"])) == [a, b]


def test_all_facets_must_match(make_photo) -> None:
    hit = make_photo(title="Golden Sunset", tags=("t1",), categories=("c1",))
    wrong_tag = make_photo(title="Golden Sunset", tags=("t2",), categories=("c1",))
    wrong_category = make_photo(title="Golden Sunset", tags=("t1",), categories=("c2",))
    wrong_title = make_photo(title="Harbor", tags=("t1",), categories=("c1",))
    photos = [hit, wrong_tag, wrong_category, wrong_title]
    criteria = _criteria(tags=["t1"], categories=["c1"], search="sun")

    assert filter_photos(photos, criteria) == [hit]
    assert [matches(p, criteria) for p in photos] == [True, False, False, False]


def test_empty_criteria_returns_everything_in_order(make_photo) -> None:
    photos = [make_photo() for _ in range(5)]

    result = filter_photos(photos, FilterCriteria())

    assert result == photos
    assert result is not photos
    assert all(r is p for r, p in zip(result, photos))


def test_result_is_an_ordered_subsequence(make_photo) -> None:
    photos = [make_photo(tags=("t1",) if i % 2 else ()) for i in range(10)]

    result = filter_photos(photos, _criteria(tags=["t1"]))

    positions = [photos.index(p) for p in result]
    assert positions == sorted(positions)
    assert len(result) == 5


def test_filter_is_idempotent_and_does_not_mutate(make_photo) -> None:
    photos = [
        make_photo(title="Sunset", tags=("t1",)),
        make_photo(title="Sunrise", tags=("t1", "t2")),
        make_photo(title="Sunset bay", tags=("t2",)),
    ]
    snapshot = list(photos)
    criteria = _criteria(tags=["t1"], search="sun")

    once = filter_photos(photos, criteria)
    twice = filter_photos(once, criteria)

    assert once == twice
    assert filter_photos(photos, criteria) == once
    assert photos == snapshot


def test_unknown_tag_matches_nothing(make_photo) -> None:
    photos = [make_photo(tags=("t1",)), make_photo()]

    assert filter_photos(photos, _criteria(tags=["missing"])) == []


def test_search_only_looks_at_title(make_photo) -> None:
    photo = make_photo(title="Harbor", description="a sunset over the harbor")

    assert filter_photos([photo], _criteria(search="sunset")) == []


def test_filter_service_delegates(make_photo) -> None:
    a = make_photo(tags=("t1",))
    b = make_photo()

    assert FilterService().filter([a, b], _criteria(tags=["t1"])) == [a]


def test_criteria_is_empty() -> None:
    assert FilterCriteria().is_empty
    assert not _criteria(search="x").is_empty
    assert not _criteria(tags=["t"]).is_empty


def test_options_and_names_keep_catalog_order() -> None:
    tags = [Tag("t2", "Beach"), Tag("t1", "Night"), Tag("t3", "Family")]
    categories = [Category("c1", "Travel")]

    assert build_options(tags) == [("t2", "Beach"), ("t1", "Night"), ("t3", "Family")]
    assert build_options(categories) == [("c1", "Travel")]
    assert names_for({"t3", "t2", "unknown"}, tags) == ["Beach", "Family"]
