"""Scanning the media directory into the database."""

from __future__ import annotations

import logging
import os
import queue
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gallerypi.db import queries
from gallerypi.scanner import exif
from gallerypi.scanner.walker import walk_media
from gallerypi.util.timefmt import timestamp_to_year_month

if TYPE_CHECKING:
    from gallerypi.db.database import Database

log = logging.getLogger(__name__)

BATCH_SIZE = 50
PROGRESS_EVERY = 100


@dataclass(frozen=True)
class Progress:
    scanned: int
    total_estimate: int


@dataclass(frozen=True)
class BatchComplete:
    new_items: int


@dataclass(frozen=True)
class Complete:
    total: int


@dataclass(frozen=True)
class ScanError:
    message: str


ScanEvent = Progress | BatchComplete | Complete | ScanError


class Scanner:
    """Indexes media files into the database, reporting progress on a queue."""

    def __init__(self, media_dir: str | os.PathLike[str], events: queue.Queue) -> None:
        self.media_dir = Path(media_dir)
        self.events = events

    def _offer(self, event: ScanEvent) -> None:
        try:
            self.events.put_nowait(event)
        except queue.Full:
            pass

    def run(self, db: Database) -> int:
        """Scan the media directory; return the number of media files found."""
        log.info("Starting scan of %s", self.media_dir)
        count = 0
        new_items = 0

        for media_file in walk_media(self.media_dir):
            count += 1
            path_str = str(media_file.path)
            try:
                path_str.encode("utf-8")
            except UnicodeEncodeError:
                continue

            try:
                mtime = exif.file_mtime(media_file.path)
            except OSError as exc:
                log.warning("Failed to get mtime for %s: %s", media_file.path, exc)
                continue

            try:
                existing = queries.get_existing_mtime(db.conn, path_str)
            except sqlite3.Error as exc:
                log.warning("DB check failed for %s: %s", media_file.path, exc)
                continue
            if existing == mtime:
                continue

            media_date = exif.extract_date(media_file.path, mtime)
            year, month = timestamp_to_year_month(media_date)
            item = queries.MediaItem(
                id=0,
                path=path_str,
                mtime=mtime,
                media_date=media_date,
                year=year,
                month=month,
                media_type=media_file.media_type,
            )
            try:
                queries.upsert_item(db.conn, item)
            except sqlite3.Error as exc:
                log.warning("Failed to insert item: %s", exc)
                continue

            new_items += 1
            if new_items % BATCH_SIZE == 0:
                self._offer(BatchComplete(new_items=new_items))
            elif count % PROGRESS_EVERY == 0:
                self._offer(Progress(scanned=count, total_estimate=count + PROGRESS_EVERY))

        log.info("Scan complete: %d files found, %d new/updated", count, new_items)
        self.events.put(Complete(total=count))
        return count