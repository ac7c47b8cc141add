"""Month entries for the jump-to-month list."""

from __future__ import annotations

from dataclasses import dataclass, field

from gallerypi.util.timefmt import format_month_label


@dataclass
class MonthEntry:
    year: int
    month: int
    row_index: int
    label: str = field(init=False)

    def __post_init__(self) -> None:
        self.label = format_month_label(self.year, self.month)