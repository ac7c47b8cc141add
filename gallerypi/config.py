"""Application configuration stored as TOML, plus the standard storage locations."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

log = logging.getLogger(__name__)

APP_NAME = "gallerypi"

_U8_MAX = 2**8 - 1
_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is malformed."""


def _default_media_dir() -> Path:
    pictures = platformdirs.user_pictures_dir()
    return Path(pictures) if pictures else Path("~/Pictures")


def _default_gen_threads() -> int:
    cpus = os.cpu_count() or 1
    return 2 if cpus <= 4 else 4


def _take(table: dict[str, Any], section: str, name: str, kind: type, upper: int | None = None) -> Any:
    """Fetch a required field from a section table, checking its type and range."""
    if name not in table:
        raise ConfigError(f"missing field `{name}` in [{section}]")
    value = table[name]
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"[{section}] {name}: expected a boolean, got {value!r}")
        return value
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"[{section}] {name}: expected an integer, got {value!r}")
        if value < 0 or (upper is not None and value > upper):
            raise ConfigError(f"[{section}] {name}: value {value} out of range")
        return value
    if kind is Path:
        if not isinstance(value, str):
            raise ConfigError(f"[{section}] {name}: expected a string path, got {value!r}")
        return Path(value)
    raise TypeError(f"unsupported field kind {kind!r}")


@dataclass
class GalleryConfig:
    media_dir: Path = field(default_factory=_default_media_dir)
    grid_columns: int = 4
    thumbnail_size: int = 256

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> GalleryConfig:
        return cls(
            media_dir=_take(table, "gallery", "media_dir", Path),
            grid_columns=_take(table, "gallery", "grid_columns", int, _U8_MAX),
            thumbnail_size=_take(table, "gallery", "thumbnail_size", int, _U32_MAX),
        )

    def _to_table(self) -> dict[str, Any]:
        return {
            "media_dir": str(self.media_dir),
            "grid_columns": self.grid_columns,
            "thumbnail_size": self.thumbnail_size,
        }


@dataclass
class PerformanceConfig:
    thumb_gen_threads: int = field(default_factory=_default_gen_threads)
    thumb_cache_entries: int = 150
    scan_on_startup: bool = True

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> PerformanceConfig:
        return cls(
            thumb_gen_threads=_take(table, "performance", "thumb_gen_threads", int, _USIZE_MAX),
            thumb_cache_entries=_take(table, "performance", "thumb_cache_entries", int, _USIZE_MAX),
            scan_on_startup=_take(table, "performance", "scan_on_startup", bool),
        )

    def _to_table(self) -> dict[str, Any]:
        return {
            "thumb_gen_threads": self.thumb_gen_threads,
            "thumb_cache_entries": self.thumb_cache_entries,
            "scan_on_startup": self.scan_on_startup,
        }


@dataclass
class UiConfig:
    fullscreen: bool = True

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> UiConfig:
        return cls(fullscreen=_take(table, "ui", "fullscreen", bool))

    def _to_table(self) -> dict[str, Any]:
        return {"fullscreen": self.fullscreen}


@dataclass
class VideoConfig:
    hardware_decode: bool = True
    default_volume: int = 80
    loop_videos: bool = True

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> VideoConfig:
        return cls(
            hardware_decode=_take(table, "video", "hardware_decode", bool),
            default_volume=_take(table, "video", "default_volume", int, _U8_MAX),
            loop_videos=_take(table, "video", "loop_videos", bool),
        )

    def _to_table(self) -> dict[str, Any]:
        return {
            "hardware_decode": self.hardware_decode,
            "default_volume": self.default_volume,
            "loop_videos": self.loop_videos,
        }


_SECTIONS = {
    "gallery": GalleryConfig,
    "performance": PerformanceConfig,
    "ui": UiConfig,
    "video": VideoConfig,
}


@dataclass
class Config:
    gallery: GalleryConfig = field(default_factory=GalleryConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    video: VideoConfig = field(default_factory=VideoConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a config from parsed TOML; absent sections take their defaults."""
        sections: dict[str, Any] = {}
        for name, section_cls in _SECTIONS.items():
            if name not in data:
                continue
            table = data[name]
            if not isinstance(table, dict):
                raise ConfigError(f"[{name}] must be a table")
            sections[name] = section_cls._from_table(table)
        return cls(**sections)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name)._to_table() for name in _SECTIONS}

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Config:
        """Load the config file, or return defaults when it does not exist."""
        path = Path(path) if path is not None else config_path()
        if not path.exists():
            log.info("No config file found at %s, using defaults", path)
            return cls()
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read config at {path}: {exc}") from exc
        try:
            data = tomllib.loads(contents)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Failed to parse config at {path}: {exc}") from exc
        config = cls.from_dict(data)
        log.info("Loaded config from %s", path)
        return config

    def save(self, path: str | os.PathLike[str] | None = None) -> None:
        path = Path(path) if path is not None else config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")


def config_path() -> Path:
    base = platformdirs.user_config_dir() or "~/.config"
    return Path(base) / APP_NAME / "config.toml"


def cache_dir() -> Path:
    base = platformdirs.user_cache_dir() or "~/.cache"
    return Path(base) / APP_NAME


def thumb_dir() -> Path:
    return cache_dir() / "thumbs"


def db_path() -> Path:
    return cache_dir() / "metadata.db"