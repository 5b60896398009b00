from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path

from loguru import logger
import pytest

from infrastructure.json_repository import JsonCatalogRepository, is_remote_path

UTC = timezone.utc


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _catalog(photos, tags=None, categories=None) -> dict:
    return {"photos": photos, "tags": tags or [], "categories": categories or []}


def test_load_parses_rows_and_orders_newest_first(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        _catalog(
            [
                {
                    "id": "a",
                    "title": "Old",
                    "description": None,
                    "path": "images/a.jpg",
                    "tags": ["t1"],
                    "categories": ["c1"],
                    "created_at": "2023-01-01T10:00:00Z",
                    "updated_at": "2023-01-02T10:00:00+00:00",
                },
                {
                    "id": "b",
                    "title": "New",
                    "description": "Harbor at dusk",
                    "path": "https://cdn.example.com/b.jpg",
                    "tags": [],
                    "categories": [],
                    "created_at": "2024-06-01T08:30:00",
                },
            ],
            tags=[{"id": "t1", "name": "Sunset", "created_at": "2023-01-01T00:00:00Z"}],
            categories=[{"id": "c1", "name": "Travel"}],
        ),
    )

    catalog = JsonCatalogRepository().load(path)

    assert [p.id for p in catalog.photos] == ["b", "a"]
    new, old = catalog.photos
    assert new.path == "https://cdn.example.com/b.jpg"
    assert new.description == "Harbor at dusk"
    assert new.created_at == datetime(2024, 6, 1, 8, 30, tzinfo=UTC)
    assert old.path == str(tmp_path / "images" / "a.jpg")
    assert old.tag_ids == frozenset({"t1"})
    assert old.category_ids == frozenset({"c1"})
    assert old.description is None
    assert old.updated_at == datetime(2023, 1, 2, 10, tzinfo=UTC)
    assert [(t.id, t.name) for t in catalog.tags] == [("t1", "Sunset")]
    assert [(c.id, c.name) for c in catalog.categories] == [("c1", "Travel")]


def test_malformed_rows_are_skipped(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        _catalog(
            [
                {"id": "ok", "title": "Fine", "path": "/x.jpg", "created_at": "2024-01-01T00:00:00Z"},
                {"id": "no-date", "title": "Broken", "path": "/y.jpg"},
                {"id": "bad-tags", "path": "/z.jpg", "tags": "t1", "created_at": "2024-01-01"},
                {"title": "no id", "path": "/w.jpg", "created_at": "2024-01-01"},
                "not an object",
            ],
            tags=[{"id": "t1"}, {"id": "t2", "name": "Kept"}],
        ),
    )

    catalog = JsonCatalogRepository().load(path)

    assert [p.id for p in catalog.photos] == ["ok"]
    assert [t.name for t in catalog.tags] == ["Kept"]


@pytest.mark.parametrize("data", [[], {"photos": []}, {"photos": [], "tags": []}])
def test_invalid_documents_raise(tmp_path: Path, data) -> None:
    path = _write(tmp_path, data)

    with pytest.raises(ValueError):
        JsonCatalogRepository().load(path)


def test_missing_file_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        JsonCatalogRepository().load(tmp_path / "missing.json")


def test_url_paths_are_kept_and_reported(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        _catalog(
            [
                {"id": "web", "path": "https://cdn.example.com/a.jpg", "created_at": "2024-01-02"},
                {"id": "local", "path": "a.jpg", "created_at": "2024-01-01"},
            ]
        ),
    )
    warnings: list[str] = []
    handler_id = logger.add(lambda m: warnings.append(str(m)), level="WARNING", format="{message}")
    try:
        catalog = JsonCatalogRepository().load(path)
    finally:
        logger.remove(handler_id)

    assert [p.path for p in catalog.photos] == [
        "https://cdn.example.com/a.jpg",
        str(tmp_path / "a.jpg"),
    ]
    assert is_remote_path(catalog.photos[0].path)
    assert not is_remote_path(catalog.photos[1].path)
    assert any("1 photo(s) with URL paths" in w for w in warnings)
