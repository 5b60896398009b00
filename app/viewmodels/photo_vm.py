"""Lightweight view model wrapper around `Photo`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.models import DisplayPhoto, Photo


def format_date_label(photo: Photo) -> str:
    """Long date such as "March 5, 2024"."""
    dt = photo.created_at
    return f"{dt:%B} {dt.day}, {dt.year}"


@dataclass
class PhotoVM:
    """Expose convenient properties for bindings/templates."""

    record: Photo

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def title(self) -> str:
        """Title, or the image file name when the title is blank."""
        return self.record.title or Path(self.record.path).name

    @property
    def description(self) -> str:
        return self.record.description or ""

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def date_label(self) -> str:
        return format_date_label(self.record)

    def to_display(self) -> DisplayPhoto:
        """Project to the fields the slideshow renders."""
        return DisplayPhoto(id=self.record.id, path=self.record.path, title=self.record.title)
