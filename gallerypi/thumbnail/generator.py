"""Square JPEG thumbnails, generated on demand by a background worker."""

from __future__ import annotations

import logging
import os
import platform
import queue
import sqlite3
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from gallerypi.config import thumb_dir as default_thumb_dir
from gallerypi.db import queries
from gallerypi.util.hashing import thumb_cache_key

if TYPE_CHECKING:
    from gallerypi.config import Config

log = logging.getLogger(__name__)

JPEG_QUALITY = 85
JOB_QUEUE_SIZE = 256
RESULT_QUEUE_SIZE = 256
# Short pause between jobs on ARM boards to keep them from throttling.
_ARM_PAUSE = 0.005


@dataclass(frozen=True)
class GenJob:
    item_id: int
    path: str
    mtime: int


def _is_arm64() -> bool:
    return platform.machine().lower() in {"aarch64", "arm64"}


def generate_thumbnail(
    source_path: str | os.PathLike[str],
    source_mtime: int,
    thumb_dir: str | os.PathLike[str],
    thumb_size: int,
) -> Path:
    """Write a center-cropped square JPEG thumbnail and return its path.

    The file name is derived from the source path and mtime; an existing file is reused.
    """
    source = Path(source_path)
    key = thumb_cache_key(str(source), source_mtime)
    thumb_path = Path(thumb_dir) / f"{key}.jpg"
    if thumb_path.exists():
        return thumb_path

    with Image.open(source) as opened:
        img = opened.convert("RGBA")

    width, height = img.size
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    square = img.crop((left, top, left + side, top + side))
    resized = square.resize((thumb_size, thumb_size), Image.Resampling.LANCZOS)
    resized.convert("RGB").save(thumb_path, format="JPEG", quality=JPEG_QUALITY)
    return thumb_path


def _run_generator(
    jobs: queue.Queue,
    results: queue.Queue,
    db_path: Path,
    directory: Path,
    thumb_size: int,
) -> None:
    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as exc:
        log.error("Thumb generator failed to open DB: %s", exc)
        return
    pause = _is_arm64()
    try:
        while (job := jobs.get()) is not None:
            if pause:
                time.sleep(_ARM_PAUSE)
            try:
                thumb_path = generate_thumbnail(job.path, job.mtime, directory, thumb_size)
            except Exception as exc:
                log.warning("Failed to generate thumb for %s: %s", job.path, exc)
                continue
            thumb_str = str(thumb_path)
            try:
                queries.mark_thumb_ready(conn, job.item_id, thumb_str)
            except sqlite3.Error as exc:
                log.warning("Failed to mark thumb ready for id %d: %s", job.item_id, exc)
                continue
            results.put((job.item_id, thumb_str))
    finally:
        conn.close()


def start_on_demand_generator(
    config: Config,
    db_path: str | os.PathLike[str],
    thumb_dir: str | os.PathLike[str] | None = None,
) -> tuple[queue.Queue, queue.Queue]:
    """Start the thumbnail worker thread and return (jobs, results).

    Put GenJob items on jobs; (item_id, thumb_path) pairs arrive on results.
    Putting None on jobs stops the worker.
    """
    directory = Path(thumb_dir) if thumb_dir is not None else default_thumb_dir()
    jobs: queue.Queue = queue.Queue(maxsize=JOB_QUEUE_SIZE)
    results: queue.Queue = queue.Queue(maxsize=RESULT_QUEUE_SIZE)
    worker = threading.Thread(
        target=_run_generator,
        args=(jobs, results, Path(db_path), directory, config.gallery.thumbnail_size),
        name="thumb-gen",
        daemon=True,
    )
    worker.start()
    return jobs, results