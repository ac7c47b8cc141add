"""Row types that make up the flat gallery list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from gallerypi.db.queries import MediaItem

# Maximum number of columns the gallery view lays out.
MAX_COLS = 6


@dataclass
class GalleryThumb:
    item_id: int
    path: str
    thumb_path: str | None
    thumb_ready: bool
    media_type: str
    mtime: int

    @classmethod
    def from_item(cls, item: MediaItem) -> GalleryThumb:
        return cls(
            item_id=item.id,
            path=item.path,
            thumb_path=item.thumb_path,
            thumb_ready=item.thumb_ready,
            media_type=item.media_type,
            mtime=item.mtime,
        )


@dataclass
class MonthHeader:
    label: str
    year: int
    month: int

    is_header: ClassVar[bool] = True


@dataclass
class ImageRow:
    items: list[GalleryThumb] = field(default_factory=list)

    is_header: ClassVar[bool] = False


GalleryRow = MonthHeader | ImageRow