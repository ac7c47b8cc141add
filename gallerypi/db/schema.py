"""Database schema for the media index."""

from __future__ import annotations

import sqlite3

_TABLE = "media_items"

_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "INTEGER PRIMARY KEY"),
    ("path", "TEXT NOT NULL UNIQUE"),
    ("mtime", "INTEGER NOT NULL"),
    ("media_date", "INTEGER NOT NULL"),
    ("year", "INTEGER NOT NULL"),
    ("month", "INTEGER NOT NULL"),
    ("media_type", "TEXT NOT NULL"),
    ("width", "INTEGER"),
    ("height", "INTEGER"),
    ("thumb_path", "TEXT"),
    ("thumb_ready", "INTEGER NOT NULL DEFAULT 0"),
)

_INDEXES: dict[str, str] = {
    "idx_date": "year DESC, month DESC, media_date DESC",
    "idx_thumb": "thumb_ready",
    "idx_path": "path",
}


def _statements() -> list[str]:
    columns = ", ".join(f"{name} {kind}" for name, kind in _COLUMNS)
    table = f"CREATE TABLE IF NOT EXISTS {_TABLE} ({columns})"
    indexes = [
        f"CREATE INDEX IF NOT EXISTS {name} ON {_TABLE}({cols})"
        for name, cols in _INDEXES.items()
    ]
    return [table, *indexes]


def initialize(conn: sqlite3.Connection) -> None:
    """Create the media table and its indexes if they do not exist."""
    conn.executescript(";\n".join(_statements()) + ";")