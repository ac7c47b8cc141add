"""Navigation between the images of one month in the full-screen viewer."""

from __future__ import annotations

import os

from PIL import Image

from gallerypi.db.queries import MediaItem


class ViewerController:
    """Tracks the month's items and which one is shown."""

    def __init__(self) -> None:
        self.month_items: list[MediaItem] = []
        self.current_index = 0

    def open(self, item_id: int, month_items: list[MediaItem]) -> None:
        """Show item_id among month_items; an unknown id starts at the first item."""
        self.current_index = next(
            (idx for idx, item in enumerate(month_items) if item.id == item_id), 0
        )
        self.month_items = list(month_items)

    def current_item(self) -> MediaItem | None:
        if 0 <= self.current_index < len(self.month_items):
            return self.month_items[self.current_index]
        return None

    def go_next(self) -> MediaItem | None:
        if self.current_index + 1 < len(self.month_items):
            self.current_index += 1
            return self.month_items[self.current_index]
        return None

    def go_prev(self) -> MediaItem | None:
        if self.current_index > 0:
            self.current_index -= 1
            return self.month_items[self.current_index]
        return None


def load_image(path: str | os.PathLike[str]) -> Image.Image:
    """Load a full-resolution image as RGBA."""
    with Image.open(path) as img:
        return img.convert("RGBA")