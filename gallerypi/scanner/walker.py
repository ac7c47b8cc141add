"""Finding supported media files under a directory."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp"})
VIDEO_EXTENSIONS = frozenset({"mp4"})


@dataclass(frozen=True)
class MediaFile:
    path: Path
    media_type: str


def _classify(path: Path) -> MediaFile | None:
    ext = path.suffix[1:].lower()
    if ext in IMAGE_EXTENSIONS:
        return MediaFile(path, "image")
    if ext in VIDEO_EXTENSIONS:
        return MediaFile(path, "video")
    return None


def _regular_file(path: Path) -> bool:
    return path.is_file() and not path.is_symlink()


def walk_media(directory: str | os.PathLike[str]) -> Iterator[MediaFile]:
    """Yield every supported media file under directory; symlinks are not followed."""
    root = Path(directory)
    if _regular_file(root):
        media = _classify(root)
        if media is not None:
            yield media
        return
    for dirpath, _dirnames, filenames in os.walk(root, followlinks=False):
        for name in filenames:
            path = Path(dirpath) / name
            if not _regular_file(path):
                continue
            media = _classify(path)
            if media is not None:
                yield media