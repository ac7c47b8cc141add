"""Gallery state: rows, month index, visible-row queries and live thumbnail cells."""

from __future__ import annotations

import logging
import random
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from gallerypi.db import queries
from gallerypi.db.queries import MediaItem
from gallerypi.gallery import model
from gallerypi.gallery.model import GalleryRowData
from gallerypi.gallery.month_model import MonthEntry
from gallerypi.gallery.row_types import GalleryRow, GalleryThumb, ImageRow, MonthHeader

if TYPE_CHECKING:
    from gallerypi.db.database import Database

log = logging.getLogger(__name__)

HEADER_ROW_HEIGHT = 48.0
ROW_PADDING = 4.0
CELL_SPACING = 2.0


def _cumulative_tops(rows: Sequence[GalleryRow], image_row_h: float) -> list[float]:
    tops: list[float] = []
    y = 0.0
    for row in rows:
        tops.append(y)
        y += HEADER_ROW_HEIGHT if isinstance(row, MonthHeader) else image_row_h
    return tops


class GalleryController:
    """Holds the gallery rows built from the database and the live view rows."""

    def __init__(self, n_cols: int) -> None:
        self.n_cols = n_cols
        self.rows: list[GalleryRow] = []
        # Y offset (px) of the top of each row.
        self.row_tops: list[float] = []
        # Width last used for row_tops; negative forces the first recompute.
        self.last_lv_width = -1.0
        self.month_entries: list[MonthEntry] = []
        self.all_items: list[MediaItem] = []
        # item_id -> (row_idx, col_idx)
        self.item_positions: dict[int, tuple[int, int]] = {}
        # The live view rows; replaced in place so holders see updates.
        self.row_model: list[GalleryRowData] = []

    def reload(self, db: Database, thumb_size: float) -> None:
        """Load all items from the database and rebuild rows and the view model."""
        self.all_items = queries.get_all_items_ordered(db.conn)
        rows, month_data, positions = model.build_rows(self.all_items, self.n_cols)
        self.rows = rows
        self.month_entries = [
            MonthEntry(year, month, row_idx) for year, month, _label, row_idx in month_data
        ]
        log.info("Gallery reload month entries %d", len(self.month_entries))
        self.item_positions = positions
        self.row_tops = _cumulative_tops(self.rows, thumb_size + ROW_PADDING)
        self.row_model[:] = [model.row_to_view(row) for row in self.rows]

    def build_month_model(self) -> list[MonthEntry]:
        """Return the month entries for the jump-to-month list."""
        return list(self.month_entries)

    def ensure_row_tops(self, lv_width: float, thumb_size: float) -> None:
        """Recompute row offsets for a list-view width; changes under 1px are ignored."""
        if abs(lv_width - self.last_lv_width) < 1.0:
            return
        self.last_lv_width = lv_width
        cols = max(self.n_cols, 1)
        gaps = max(self.n_cols - 1, 0)
        cell_size = min((lv_width - ROW_PADDING - gaps * CELL_SPACING) / cols, thumb_size)
        self.row_tops = _cumulative_tops(self.rows, cell_size + ROW_PADDING)

    def _cell(self, item_id: int) -> Any:
        position = self.item_positions.get(item_id)
        if position is None:
            return None
        row_idx, col_idx = position
        if row_idx >= len(self.row_model):
            return None
        items = self.row_model[row_idx].items
        return items[col_idx] if col_idx < len(items) else None

    def clear_thumbnail(self, item_id: int) -> None:
        """Drop a loaded thumbnail image from the live model."""
        cell = self._cell(item_id)
        if cell is not None and cell.thumb_ready:
            cell.thumb_image = None
            cell.thumb_ready = False

    def update_thumbnail(self, item_id: int, image: Any) -> None:
        """Put a loaded thumbnail image into the live model."""
        cell = self._cell(item_id)
        if cell is not None:
            cell.thumb_image = image
            cell.thumb_ready = True

    def row_index_for_month(self, year: int, month: int) -> int | None:
        return next(
            (e.row_index for e in self.month_entries if e.year == year and e.month == month),
            None,
        )

    def random_month(self) -> MonthEntry | None:
        """Pick a month at random, or None when the gallery is empty."""
        if not self.month_entries:
            return None
        return random.choice(self.month_entries)

    def items_in_month(self, year: int, month: int) -> list[MediaItem]:
        return [i for i in self.all_items if i.year == year and i.month == month]

    def item_by_id(self, item_id: int) -> MediaItem | None:
        return next((i for i in self.all_items if i.id == item_id), None)

    def rows_in_view(
        self, scroll_y: float, viewport_h: float, buffer_rows: int
    ) -> list[GalleryThumb]:
        """Thumbs of the rows overlapping the viewport, widened by buffer_rows each side."""
        if not self.row_tops:
            return []
        view_top = scroll_y
        view_bot = scroll_y + viewport_h
        first = max(bisect_left(self.row_tops, view_top) - (buffer_rows + 1), 0)
        last = min(bisect_right(self.row_tops, view_bot) + buffer_rows, len(self.rows))
        return [
            thumb
            for row in self.rows[first:last]
            if isinstance(row, ImageRow)
            for thumb in row.items
        ]