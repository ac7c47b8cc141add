"""SQLite database holding the media index."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Any

from gallerypi.db import schema

_PRAGMAS = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;
PRAGMA cache_size=-8000;
PRAGMA temp_store=MEMORY;
"""


class Database:
    """An open, initialised media index database."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path, isolation_level=None)
        try:
            self.conn.executescript(_PRAGMAS)
            schema.initialize(self.conn)
        except sqlite3.Error:
            self.conn.close()
            raise

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()