"""Building the flat gallery row sequence and its view data."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from itertools import groupby, islice
from typing import Any

from gallerypi.db.queries import MediaItem
from gallerypi.gallery.row_types import GalleryRow, GalleryThumb, ImageRow, MonthHeader
from gallerypi.util.timefmt import format_month_label


@dataclass
class ThumbnailData:
    """One cell of an image row as shown in the view."""

    item_id: int
    media_type: str
    thumb_image: Any = None
    thumb_ready: bool = False


@dataclass
class GalleryRowData:
    """One row as shown in the view: a month header or a row of thumbnails."""

    is_header: bool
    header_label: str = ""
    items: list[ThumbnailData] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.items)


def _chunks(values: Iterable[GalleryThumb], size: int) -> Iterator[list[GalleryThumb]]:
    it = iter(values)
    while chunk := list(islice(it, size)):
        yield chunk


def build_rows(
    items: Sequence[MediaItem], n_cols: int
) -> tuple[list[GalleryRow], list[tuple[int, int, str, int]], dict[int, tuple[int, int]]]:
    """Build rows, month entries and item positions from pre-sorted items.

    Items must be ordered year DESC, month DESC, media_date ASC. Returns the rows,
    (year, month, label, row_index) per month, and item_id -> (row_idx, col_idx).
    """
    if n_cols < 1:
        raise ValueError("n_cols must be at least 1")

    rows: list[GalleryRow] = []
    month_entries: list[tuple[int, int, str, int]] = []
    positions: dict[int, tuple[int, int]] = {}

    for (year, month), group in groupby(items, key=lambda i: (i.year, i.month)):
        label = format_month_label(year, month)
        month_entries.append((year, month, label, len(rows)))
        rows.append(MonthHeader(label=label, year=year, month=month))
        for chunk in _chunks(map(GalleryThumb.from_item, group), n_cols):
            row_idx = len(rows)
            positions.update({thumb.item_id: (row_idx, col) for col, thumb in enumerate(chunk)})
            rows.append(ImageRow(items=chunk))

    return rows, month_entries, positions


def row_to_view(row: GalleryRow) -> GalleryRowData:
    """Convert a gallery row into its view data, with no thumbnails loaded."""
    match row:
        case MonthHeader(label=label):
            return GalleryRowData(is_header=True, header_label=label)
        case ImageRow(items=items):
            return GalleryRowData(
                is_header=False,
                items=[ThumbnailData(item_id=t.item_id, media_type=t.media_type) for t in items],
            )
    raise TypeError(f"not a gallery row: {row!r}")