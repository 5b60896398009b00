"""JSON catalog loading for photos, tags and categories.

The catalog is an export of the gallery database with the same field names:

    {
      "photos": [{"id", "title", "description", "path", "tags",
                  "categories", "created_at", "updated_at"}, ...],
      "tags": [{"id", "name", "created_at"}, ...],
      "categories": [{"id", "name", "created_at"}, ...]
    }

Relative photo paths resolve against the catalog file's directory. Only local
files render; URL paths are kept as-is and reported with a warning, and the
gallery shows a placeholder for them. Rows that cannot be parsed are logged
and skipped.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import Catalog, Category, Photo, Tag

REQUIRED_KEYS = ("photos", "tags", "categories")


def _parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Returns None if the value is empty or invalid.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Invalid datetime: {}", value)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _id_set(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set)):
        raise ValueError(f"expected a list of ids, got {value!r}")
    return frozenset(str(v) for v in value)


def is_remote_path(path: str) -> bool:
    return "://" in path


def _resolve_image_path(raw: str, base_dir: Path) -> str:
    if is_remote_path(raw):
        return raw
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return str(p)


class JsonCatalogRepository:
    """Load a read-only `Catalog` from a JSON export."""

    def load(self, json_path: str | Path) -> Catalog:
        """Read the catalog at `json_path`.

        Photos are returned newest first by `created_at`.

        Raises:
            OSError: The file cannot be read.
            ValueError: The document is not a catalog object.
        """
        path = Path(json_path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"catalog must be a JSON object: {path}")
        missing = [k for k in REQUIRED_KEYS if k not in data]
        if missing:
            raise ValueError(f"catalog missing required keys: {missing}")

        base_dir = path.parent
        photos = list(self._iter_photos(data["photos"], base_dir))
        photos.sort(key=lambda p: p.created_at, reverse=True)
        tags = [Tag(id=i, name=n, created_at=c) for i, n, c in self._iter_named(data["tags"], "tag")]
        categories = [
            Category(id=i, name=n, created_at=c)
            for i, n, c in self._iter_named(data["categories"], "category")
        ]
        logger.info(
            "Loaded catalog {}: {} photos, {} tags, {} categories",
            path,
            len(photos),
            len(tags),
            len(categories),
        )
        remote = sum(1 for p in photos if is_remote_path(p.path))
        if remote:
            logger.warning(
                "Catalog {} has {} photo(s) with URL paths; only local files can be displayed",
                path,
                remote,
            )
        return Catalog(photos=photos, tags=tags, categories=categories)

    def _iter_photos(self, rows: Any, base_dir: Path) -> Iterator[Photo]:
        for row in rows or []:
            try:
                if not isinstance(row, dict):
                    raise TypeError("photo row is not an object")
                photo_id = str(row["id"])
                created_at = _parse_datetime(row.get("created_at"))
                if created_at is None:
                    raise ValueError("missing created_at")
                raw_path = str(row.get("path") or "")
                if not raw_path:
                    raise ValueError("missing path")
                yield Photo(
                    id=photo_id,
                    title=str(row.get("title") or ""),
                    description=row.get("description") or None,
                    path=_resolve_image_path(raw_path, base_dir),
                    tag_ids=_id_set(row.get("tags")),
                    category_ids=_id_set(row.get("categories")),
                    created_at=created_at,
                    updated_at=_parse_datetime(row.get("updated_at")),
                )
            except (ValueError, TypeError, KeyError) as ex:
                logger.error("Catalog photo row error: {} | row={}", ex, row)
                continue

    def _iter_named(self, rows: Any, kind: str) -> Iterator[tuple[str, str, datetime | None]]:
        for row in rows or []:
            try:
                yield str(row["id"]), str(row["name"]), _parse_datetime(row.get("created_at"))
            except (TypeError, KeyError, AttributeError) as ex:
                logger.error("Catalog {} row error: {} | row={}", kind, ex, row)
                continue
