"""Command-line entry point: load the configuration and index the media library."""

from __future__ import annotations

import argparse
import logging
import os
import queue
import sqlite3
import sys
from pathlib import Path

from gallerypi.config import Config, ConfigError, db_path
from gallerypi.db.database import Database
from gallerypi.db.queries import get_month_groups
from gallerypi.scanner.scan import Scanner
from gallerypi.util.paths import ensure_thumb_dir
from gallerypi.util.timefmt import format_month_label

log = logging.getLogger("gallerypi")

LOG_ENV = "GALLERYPI_LOG"


def _setup_logging() -> None:
    name = os.environ.get(LOG_ENV, "info").upper()
    level = logging.getLevelNamesMapping().get(name, logging.INFO)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gallerypi", description="Index a photo and video library by month."
    )
    parser.add_argument("--config", type=Path, help="configuration file to use")
    parser.add_argument("--db", type=Path, help="metadata database to use")
    parser.add_argument("--thumb-dir", type=Path, help="thumbnail cache directory")
    parser.add_argument("--no-scan", action="store_true", help="do not scan the media directory")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Load the config, scan the media directory and print each month's item count."""
    args = _parser().parse_args(argv)
    _setup_logging()
    log.info("GalleryPi starting")

    try:
        config = Config.load(args.config)
    except ConfigError as exc:
        log.error("%s", exc)
        return 1
    log.info("Media dir: %s", config.gallery.media_dir)

    try:
        ensure_thumb_dir(args.thumb_dir)
        with Database(args.db if args.db is not None else db_path()) as db:
            if config.performance.scan_on_startup and not args.no_scan:
                Scanner(config.gallery.media_dir, queue.Queue()).run(db)
            groups = get_month_groups(db.conn)
    except (OSError, sqlite3.Error) as exc:
        log.error("%s", exc)
        return 1

    for group in groups:
        print(f"{format_month_label(group.year, group.month)}\t{group.count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())