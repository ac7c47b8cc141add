"""Capture dates from EXIF data, with the file modification time as fallback."""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from pathlib import Path

from PIL import Image

_EXIF_IFD = 0x8769
_DATE_TIME_ORIGINAL = 0x9003

_YEAR_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def extract_date(path: str | os.PathLike[str], mtime: int) -> int:
    """Return the EXIF DateTimeOriginal as a Unix timestamp, or mtime if unavailable."""
    found = _try_exif_date(Path(path))
    return mtime if found is None else found


def _try_exif_date(path: Path) -> int | None:
    try:
        with Image.open(path) as img:
            exif = img.getexif()
            value = exif.get_ifd(_EXIF_IFD).get(_DATE_TIME_ORIGINAL)
            if value is None:
                value = exif.get(_DATE_TIME_ORIGINAL)
    except Exception:
        return None
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if not isinstance(value, str):
        return None
    return parse_exif_datetime(value)


def _parse(text: str, pattern: re.Pattern[str]) -> int | None:
    return int(text) if pattern.fullmatch(text) else None


def parse_exif_datetime(text: str) -> int | None:
    """Parse "YYYY:MM:DD HH:MM:SS" as UTC and return a Unix timestamp."""
    s = text.rstrip("\0").strip()
    if len(s) < 19:
        return None
    parts = (
        _parse(s[0:4], _YEAR_RE),
        _parse(s[5:7], _UNSIGNED_RE),
        _parse(s[8:10], _UNSIGNED_RE),
        _parse(s[11:13], _UNSIGNED_RE),
        _parse(s[14:16], _UNSIGNED_RE),
        _parse(s[17:19], _UNSIGNED_RE),
    )
    if any(p is None for p in parts):
        return None
    year, month, day, hour, minute, second = parts
    try:
        dt = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError:
        return None
    return int(dt.timestamp())


def file_mtime(path: str | os.PathLike[str]) -> int:
    """Return the file's modification time in whole seconds; pre-epoch gives 0."""
    ns = os.stat(path).st_mtime_ns
    return ns // 1_000_000_000 if ns >= 0 else 0