"""Filtering, calendar highlighting and pagination over normalized tournaments.

Everything here is a pure function of its inputs except ``Paginator``, which
holds the current page size and the in-flight flag for page growth.
Month and day matching use the unshifted UTC start date.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from .calendar_grid import DisplayWindow
from .errors import InvalidTimestamp
from .models import ALL_SPORTS, Tournament
from .timeutil import parse_instant

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    search_text: str = ""
    sport_filter: int | str = ALL_SPORTS.id
    selected_month: int | None = None
    selected_day: int | None = None

    def __post_init__(self) -> None:
        if self.selected_day is not None and self.selected_month is None:
            raise ValueError("selected_day requires selected_month")


def visible_tournaments(
    tournaments: list[Tournament],
    criteria: FilterCriteria,
    window: DisplayWindow,
) -> list[Tournament]:
    query = criteria.search_text.lower()
    wanted_sport = _sport_key(criteria.sport_filter)
    out: list[Tournament] = []
    for tournament in tournaments:
        if query and query not in tournament.name.lower():
            continue
        if criteria.sport_filter != ALL_SPORTS.id and _sport_key(tournament.sport_id) != wanted_sport:
            continue
        start = _start_instant(tournament)
        if start is None or not window.contains(start):
            continue
        if criteria.selected_day is not None and (
            start.month != criteria.selected_month or start.day != criteria.selected_day
        ):
            continue
        out.append(tournament)
    return out


def highlight_days(tournaments: list[Tournament], month: int, window: DisplayWindow) -> set[int]:
    days: set[int] = set()
    for tournament in tournaments:
        start = _start_instant(tournament)
        if start is not None and window.contains(start) and start.month == month:
            days.add(start.day)
    return days


class Paginator:
    """Grows the visible page in fixed steps, one growth at a time."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        step: int | None = None,
        settle_seconds: float = 1.0,
    ) -> None:
        self.initial_size = page_size
        self.step = step or page_size
        self.settle_seconds = settle_seconds
        self.page_size = page_size
        self.is_loading = False
        self._generation = 0

    def visible_count(self, total: int) -> int:
        return min(self.page_size, total)

    def page(self, items: list[Tournament]) -> list[Tournament]:
        return items[: self.page_size]

    def request_more(self, total: int) -> bool:
        if self.is_loading or self.page_size >= total:
            return False
        self.is_loading = True
        return True

    def settle(self, total: int) -> None:
        self.page_size = max(self.page_size, min(self.page_size + self.step, total))
        self.is_loading = False

    async def load_more(self, total: int) -> bool:
        if not self.request_more(total):
            return False
        generation = self._generation
        try:
            await asyncio.sleep(self.settle_seconds)
        except asyncio.CancelledError:
            if generation == self._generation:
                self.is_loading = False
            raise
        # A reset while sleeping discards this growth.
        if generation != self._generation:
            return False
        self.settle(total)
        LOGGER.debug("Page size grown to %d of %d", self.page_size, total)
        return True

    def reset(self) -> None:
        self.page_size = self.initial_size
        self.is_loading = False
        self._generation += 1


def _start_instant(tournament: Tournament) -> datetime | None:
    try:
        return parse_instant(tournament.start_date)
    except InvalidTimestamp:
        return None


def _sport_key(value: int | str | None) -> int | str | None:
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value
