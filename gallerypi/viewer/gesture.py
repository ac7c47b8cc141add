"""Zoom and pan state for the image viewer."""

from __future__ import annotations

from dataclasses import dataclass

MIN_SCALE = 1.0
MAX_SCALE = 8.0


@dataclass
class ZoomPanState:
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def apply_zoom(self, delta: float) -> None:
        """Multiply the scale by delta, clamped; at no zoom the pan is cleared."""
        self.scale = min(max(self.scale * delta, MIN_SCALE), MAX_SCALE)
        if self.scale <= MIN_SCALE:
            self.offset_x = 0.0
            self.offset_y = 0.0

    def reset(self) -> None:
        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0