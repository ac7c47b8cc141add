"""Loading thumbnails from disk in the background, with an LRU cache."""

from __future__ import annotations

import logging
import queue
import threading
from collections import OrderedDict
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

log = logging.getLogger(__name__)

WORK_QUEUE_SIZE = 64
RESULT_QUEUE_SIZE = 64
_POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class _LoadJob:
    item_id: int
    thumb_path: Path


@dataclass(frozen=True)
class LoadResult:
    """Decoded RGBA pixels of one thumbnail."""

    item_id: int
    pixels: bytes
    width: int
    height: int


def _load_thumb(job: _LoadJob) -> LoadResult:
    with Image.open(job.thumb_path) as opened:
        img = opened.convert("RGBA")
    width, height = img.size
    return LoadResult(job.item_id, img.tobytes(), width, height)


class ThumbnailLoader:
    """An LRU cache of thumbnail images backed by a loader thread."""

    def __init__(self, cache_capacity: int) -> None:
        if cache_capacity < 1:
            raise ValueError("cache_capacity must be at least 1")
        self._capacity = cache_capacity
        self._cache: OrderedDict[int, Image.Image] = OrderedDict()
        self._work: queue.Queue = queue.Queue(maxsize=WORK_QUEUE_SIZE)
        self._results: queue.Queue = queue.Queue(maxsize=RESULT_QUEUE_SIZE)
        self._stop = threading.Event()
        self._worker = threading.Thread(target=self._run, name="thumb-loader", daemon=True)
        self._worker.start()

    def request(self, item_id: int, thumb_path: str) -> Image.Image | None:
        """Return the cached image, or queue a load of thumb_path and return None."""
        img = self._cache.get(item_id)
        if img is not None:
            self._cache.move_to_end(item_id)
            return img
        path = Path(thumb_path)
        if path.exists():
            with suppress(queue.Full):
                self._work.put_nowait(_LoadJob(item_id, path))
        return None

    def poll_results(self) -> list[tuple[int, Image.Image]]:
        """Return every load finished since the last poll, adding each to the cache."""
        out: list[tuple[int, Image.Image]] = []
        while True:
            try:
                result = self._results.get_nowait()
            except queue.Empty:
                return out
            img = Image.frombytes("RGBA", (result.width, result.height), result.pixels)
            self._cache[result.item_id] = img
            self._cache.move_to_end(result.item_id)
            while len(self._cache) > self._capacity:
                self._cache.popitem(last=False)
            out.append((result.item_id, img))

    def close(self) -> None:
        """Stop the loader thread."""
        self._stop.set()
        self._worker.join()

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                job = self._work.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            try:
                result = _load_thumb(job)
            except Exception as exc:
                log.warning("Failed to load %s: %s", job.thumb_path, exc)
                continue
            while not self._stop.is_set():
                try:
                    self._results.put(result, timeout=_POLL_INTERVAL)
                    break
                except queue.Full:
                    continue