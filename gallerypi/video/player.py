"""Video playback in an external mpv process controlled over its JSON IPC socket."""

from __future__ import annotations

import logging
import os
import platform
import socket
import subprocess
import threading
import time
from collections.abc import Callable
from contextlib import suppress
from itertools import islice
from pathlib import Path
from typing import Any, TypeVar

from gallerypi.config import VideoConfig

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SOCKET = Path("/tmp/gallerypi-mpv.sock")
_WRITE_TIMEOUT = 0.1
_QUERY_TIMEOUT = 0.08
_QUIT_GRACE = 0.15
_MAX_REPLY_LINES = 5

_QUIT = '{"command": ["quit"]}'
_CYCLE_PAUSE = '{"command": ["cycle", "pause"]}'


class VideoError(RuntimeError):
    """Raised when mpv cannot be started or does not answer."""


def _is_arm64() -> bool:
    return platform.machine().lower() in {"aarch64", "arm64"}


def mpv_args(config: VideoConfig, socket: str | os.PathLike[str], path: str) -> list[str]:
    """The full mpv command line for playing path with the given settings."""
    if config.hardware_decode:
        hwdec = "v4l2m2m-copy" if _is_arm64() else "auto-safe"
    else:
        hwdec = "no"
    return [
        "mpv",
        "--fullscreen",
        f"--input-ipc-server={socket}",
        "--osc=yes",
        "--osd-level=1",
        "--touch-devices=auto",
        "--hwdec",
        hwdec,
        "--loop-file",
        "yes" if config.loop_videos else "no",
        f"--volume={config.default_volume}",
        "--no-terminal",
        "--input-default-bindings=yes",
        str(path),
    ]


def parse_data_f64(json_line: str) -> float | None:
    """Extract the number after "data": in an mpv reply line."""
    pos = json_line.find('"data":')
    if pos < 0:
        return None
    after = json_line[pos + 7 :].strip()
    ends = [i for i in (after.find(","), after.find("}")) if i >= 0]
    end = min(ends) if ends else len(after)
    try:
        return float(after[:end].strip())
    except ValueError:
        return None


def _float_reply(line: str) -> float | None:
    if '"data"' in line and '"error": "success"' in line:
        return parse_data_f64(line)
    return None


def _bool_reply(line: str) -> bool | None:
    if '"data": true' in line:
        return True
    if '"data": false' in line:
        return False
    return None


def _watch_exit(child: Any, sock: Path, exited: threading.Event) -> None:
    with suppress(Exception):
        child.wait()
    with suppress(OSError):
        sock.unlink()
    exited.set()


class VideoController:
    """Starts mpv for a file and relays play/pause, seek and volume to it."""

    def __init__(self, config: VideoConfig) -> None:
        self.config = config
        self.ipc_socket = DEFAULT_SOCKET
        self._exited: threading.Event | None = None
        self.position = 0.0
        self.duration = 0.0
        self.paused = False

    @property
    def is_running(self) -> bool:
        return self._exited is not None

    @property
    def is_playing(self) -> bool:
        return not self.paused and self.is_running

    def open(self, path: str) -> None:
        """Stop any current playback and start mpv on path."""
        self.stop()
        sock = Path(f"/tmp/gallerypi-mpv-{os.getpid()}.sock")
        try:
            child = subprocess.Popen(mpv_args(self.config, sock, path))
        except OSError as exc:
            raise VideoError(f"Failed to launch mpv: {exc}") from exc

        self.ipc_socket = sock
        self.position = 0.0
        self.duration = 0.0
        self.paused = False

        exited = threading.Event()
        threading.Thread(target=_watch_exit, args=(child, sock, exited), daemon=True).start()
        self._exited = exited

    def check_exited(self) -> bool:
        """Return True once after mpv has exited."""
        if self._exited is not None and self._exited.is_set():
            self._exited = None
            return True
        return False

    def stop(self) -> None:
        with suppress(OSError):
            self._ipc_send(_QUIT)
        time.sleep(_QUIT_GRACE)
        with suppress(OSError):
            self.ipc_socket.unlink()
        self._exited = None

    def toggle_pause(self) -> None:
        with suppress(OSError):
            self._ipc_send(_CYCLE_PAUSE)

    def seek(self, position: float) -> None:
        with suppress(OSError):
            self._ipc_send(f'{{"command": ["seek", {position:.3f}, "absolute"]}}')

    def set_volume(self, volume: float) -> None:
        """Set the volume from a 0..1 fraction."""
        vol = min(max(volume * 100.0, 0.0), 100.0)
        with suppress(OSError):
            self._ipc_send(f'{{"command": ["set_property", "volume", {vol:.1f}]}}')

    def poll_state(self) -> None:
        """Refresh position, duration (until known) and pause state from mpv."""
        with suppress(OSError, VideoError):
            self.position = self._ipc_get("time-pos", _float_reply)
        if self.duration <= 0.0:
            with suppress(OSError, VideoError):
                self.duration = self._ipc_get("duration", _float_reply)
        with suppress(OSError, VideoError):
            self.paused = self._ipc_get("pause", _bool_reply)

    def _connect(self, timeout: float) -> socket.socket:
        conn = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            conn.settimeout(timeout)
            conn.connect(str(self.ipc_socket))
        except OSError:
            conn.close()
            raise
        return conn

    def _ipc_send(self, cmd: str) -> None:
        with self._connect(_WRITE_TIMEOUT) as conn:
            conn.sendall(f"{cmd}\n".encode())

    def _ipc_get(self, prop: str, parse: Callable[[str], T | None]) -> T:
        cmd = f'{{"command": ["get_property", "{prop}"]}}'
        with self._connect(_QUERY_TIMEOUT) as conn:
            conn.sendall(f"{cmd}\n".encode())
            with conn.makefile("r", encoding="utf-8", errors="replace", newline="\n") as reader:
                for line in islice(reader, _MAX_REPLY_LINES):
                    value = parse(line)
                    if value is not None:
                        return value
        raise VideoError(f"No response for property {prop}")