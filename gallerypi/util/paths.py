"""Filesystem locations used by the application."""

from __future__ import annotations

import os
from pathlib import Path

from gallerypi.config import cache_dir, config_path, db_path, thumb_dir

__all__ = ["cache_dir", "config_path", "db_path", "thumb_dir", "ensure_thumb_dir"]


def ensure_thumb_dir(directory: str | os.PathLike[str] | None = None) -> Path:
    """Create the thumbnail cache directory if needed and return it."""
    path = Path(directory) if directory is not None else thumb_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path