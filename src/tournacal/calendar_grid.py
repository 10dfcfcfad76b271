from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime

WEEKDAY_LABELS = ("M", "T", "W", "T", "F", "S", "S")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True, slots=True)
class DayCell:
    day: int
    current: bool


@dataclass(frozen=True, slots=True)
class DisplayWindow:
    """The fixed run of months, in a single year, that tournaments are shown for."""

    year: int
    first_month: int
    last_month: int

    def __post_init__(self) -> None:
        if not 1 <= self.first_month <= self.last_month <= 12:
            raise ValueError(
                f"Invalid display window months: {self.first_month}..{self.last_month}"
            )

    def contains(self, instant: datetime) -> bool:
        return instant.year == self.year and self.first_month <= instant.month <= self.last_month

    def months(self) -> list[int]:
        return list(range(self.first_month, self.last_month + 1))

    def clamp(self, month: int) -> int:
        return max(self.first_month, min(self.last_month, month))

    def step(self, month: int, delta: int) -> int:
        return self.clamp(month + delta)

    def title(self, month: int) -> str:
        return f"{MONTH_NAMES[month - 1]} {self.year}"


def build_grid(year: int, month: int) -> list[DayCell]:
    """Return the day cells of a Monday-first, seven-column month view.

    Leading cells repeat the end of the previous month. Trailing cells are
    numbered 1, 2, ... only to fill the last row.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    # monthrange counts weekdays from Monday=0, which is already the column offset.
    offset, days_in_month = calendar.monthrange(year, month)
    prev_year, prev_month = (year - 1, 12) if month == 1 else (year, month - 1)
    days_in_prev = calendar.monthrange(prev_year, prev_month)[1]

    cells = [DayCell(day=days_in_prev - offset + 1 + i, current=False) for i in range(offset)]
    cells.extend(DayCell(day=day, current=True) for day in range(1, days_in_month + 1))
    next_day = 1
    while len(cells) % 7:
        cells.append(DayCell(day=next_day, current=False))
        next_day += 1
    return cells


def grid_rows(cells: list[DayCell]) -> list[list[DayCell]]:
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def is_selectable(cell: DayCell, highlighted: set[int]) -> bool:
    return cell.current and cell.day in highlighted
