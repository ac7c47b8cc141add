"""Queries over the media index."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass


@dataclass
class MediaItem:
    id: int
    path: str
    mtime: int
    media_date: int
    year: int
    month: int
    media_type: str
    width: int | None = None
    height: int | None = None
    thumb_path: str | None = None
    thumb_ready: bool = False


@dataclass(frozen=True)
class MonthGroup:
    year: int
    month: int
    count: int


_ITEM_COLUMNS = (
    "id, path, mtime, media_date, year, month, media_type, width, height, thumb_path, thumb_ready"
)


def _row_to_item(row: tuple) -> MediaItem:
    *fields, thumb_ready = row
    return MediaItem(*fields, thumb_ready=thumb_ready != 0)


def upsert_item(conn: sqlite3.Connection, item: MediaItem) -> None:
    """Insert an item, or update every field of the existing row with the same path."""
    with conn:
        conn.execute(
            """INSERT INTO media_items
                (path, mtime, media_date, year, month, media_type, width, height, thumb_path, thumb_ready)
             VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
             ON CONFLICT(path) DO UPDATE SET
                mtime=excluded.mtime,
                media_date=excluded.media_date,
                year=excluded.year,
                month=excluded.month,
                media_type=excluded.media_type,
                width=excluded.width,
                height=excluded.height,
                thumb_path=excluded.thumb_path,
                thumb_ready=excluded.thumb_ready""",
            (
                item.path,
                item.mtime,
                item.media_date,
                item.year,
                item.month,
                item.media_type,
                item.width,
                item.height,
                item.thumb_path,
                int(item.thumb_ready),
            ),
        )


def get_existing_mtime(conn: sqlite3.Connection, path: str) -> int | None:
    row = conn.execute("SELECT mtime FROM media_items WHERE path = ?", (path,)).fetchone()
    return None if row is None else row[0]


def mark_thumb_ready(conn: sqlite3.Connection, item_id: int, thumb_path: str) -> None:
    with conn:
        conn.execute(
            "UPDATE media_items SET thumb_path = ?, thumb_ready = 1 WHERE id = ?",
            (thumb_path, item_id),
        )


def get_items_by_month(conn: sqlite3.Connection, year: int, month: int) -> list[MediaItem]:
    rows = conn.execute(
        f"SELECT {_ITEM_COLUMNS} FROM media_items "
        "WHERE year = ? AND month = ? ORDER BY media_date ASC",
        (year, month),
    )
    return [_row_to_item(row) for row in rows]


def get_all_items_ordered(conn: sqlite3.Connection) -> list[MediaItem]:
    """All items, newest month first, oldest first within a month."""
    rows = conn.execute(
        f"SELECT {_ITEM_COLUMNS} FROM media_items "
        "ORDER BY year DESC, month DESC, media_date ASC"
    )
    return [_row_to_item(row) for row in rows]


def get_month_groups(conn: sqlite3.Connection) -> list[MonthGroup]:
    rows = conn.execute(
        "SELECT year, month, COUNT(*) FROM media_items "
        "GROUP BY year, month ORDER BY year DESC, month DESC"
    )
    return [MonthGroup(year, month, count) for year, month, count in rows]


def get_items_needing_thumbnails(conn: sqlite3.Connection) -> list[tuple[int, str]]:
    """(id, path) of images without a thumbnail, newest first."""
    rows = conn.execute(
        "SELECT id, path FROM media_items "
        "WHERE thumb_ready = 0 AND media_type = 'image' ORDER BY media_date DESC"
    )
    return [(item_id, path) for item_id, path in rows]