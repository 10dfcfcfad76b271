from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from .calendar_grid import DayCell, build_grid
from .client import StapuboxClient
from .config import Settings
from .engine import FilterCriteria, Paginator, highlight_days, visible_tournaments
from .errors import MalformedPayload, TransportFailure
from .models import ALL_SPORTS, Sport, Tournament
from .store import TournamentCache

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Notice:
    level: str
    title: str
    text: str


class CalendarScreen:
    """State behind one tournament calendar screen.

    The rendering layer reads from this object and forwards user actions to
    it. The liked set and the expanded map live here, keyed by tournament id,
    rather than on the tournaments themselves.
    """

    def __init__(self, client: StapuboxClient, cache: TournamentCache, settings: Settings) -> None:
        self.client = client
        self.cache = cache
        self.settings = settings
        self.window = settings.window

        self.sports: list[Sport] = [ALL_SPORTS]
        self.tournaments: list[Tournament] = []
        self.cached_tournaments: list[Tournament] | None = None
        self.error: str | None = None
        self.is_loading = True
        self.notices: list[Notice] = []

        self.liked: set[int] = set()
        self.expanded: dict[int, bool] = {}

        self.current_month = self.window.first_month
        self.selected_day: int | None = None
        self.search_text = ""
        self.sport_filter: int | str = ALL_SPORTS.id
        self.paginator = Paginator(
            page_size=settings.page_size,
            settle_seconds=settings.load_more_delay_seconds,
        )

    async def start(self) -> None:
        await self.load_cached()
        self.liked = await asyncio.to_thread(self.cache.load_liked_ids)
        await asyncio.gather(self.refresh_sports(), self.refresh_tournaments())

    async def load_cached(self) -> None:
        cached = await asyncio.to_thread(self.cache.load_cached_tournaments)
        if cached is None:
            return
        self.cached_tournaments = cached
        self.tournaments = cached
        self.is_loading = False
        LOGGER.info("Loaded %d tournaments from cache", len(cached))

    async def refresh_sports(self) -> None:
        try:
            self.sports = await self.client.fetch_sports()
        except (TransportFailure, MalformedPayload) as exc:
            LOGGER.error("Error fetching sports: %s", exc)
            self.sports = [ALL_SPORTS]
            self._notify("error", "Error", "Failed to load sports list.")

    async def refresh_tournaments(self, now: datetime | None = None) -> None:
        self.is_loading = True
        self.error = None
        try:
            tournaments = await self.client.fetch_tournaments(now=now)
        except (TransportFailure, MalformedPayload) as exc:
            LOGGER.error("Error fetching tournaments: %s", exc)
            self.error = "Failed to load tournaments. Showing cached data if available."
            if self.cached_tournaments is None:
                self.cached_tournaments = await asyncio.to_thread(self.cache.load_cached_tournaments)
            self.tournaments = self.cached_tournaments or []
            self._notify("error", "Error", "Failed to load tournaments.")
        else:
            self.tournaments = tournaments
            self.cached_tournaments = tournaments
            await asyncio.to_thread(self.cache.save_tournaments, tournaments)
        finally:
            self.is_loading = False

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            search_text=self.search_text,
            sport_filter=self.sport_filter,
            selected_month=self.current_month,
            selected_day=self.selected_day,
        )

    def filtered(self) -> list[Tournament]:
        return visible_tournaments(self.tournaments, self.criteria, self.window)

    def visible_page(self) -> list[Tournament]:
        return self.paginator.page(self.filtered())

    def highlighted_days(self) -> set[int]:
        return highlight_days(self.tournaments, self.current_month, self.window)

    def grid(self) -> list[DayCell]:
        return build_grid(self.window.year, self.current_month)

    @property
    def title(self) -> str:
        return self.window.title(self.current_month)

    async def load_more(self) -> bool:
        return await self.paginator.load_more(len(self.filtered()))

    def change_month(self, delta: int) -> None:
        self.current_month = self.window.step(self.current_month, delta)
        self.selected_day = None
        self.paginator.reset()

    def select_day(self, day: int | None) -> None:
        if day is not None and day in self.highlighted_days():
            self.selected_day = day
            return
        self.selected_day = None
        self.paginator.reset()

    def select_sport(self, sport_id: int | str) -> None:
        self.sport_filter = sport_id
        self.selected_day = None

    def set_search(self, text: str) -> None:
        self.search_text = text

    def toggle_expand(self, tournament_id: int) -> None:
        self.expanded[tournament_id] = not self.expanded.get(tournament_id, False)

    def is_expanded(self, tournament_id: int) -> bool:
        return self.expanded.get(tournament_id, False)

    def toggle_like(self, tournament_id: int) -> None:
        liked = set(self.liked)
        if tournament_id in liked:
            liked.discard(tournament_id)
            self._notify("success", "Unliked", "Tournament removed from likes.")
        else:
            liked.add(tournament_id)
            self._notify("success", "Liked", "Tournament added to likes.")
        self.liked = liked
        self.cache.save_liked_ids(liked)

    def is_liked(self, tournament_id: int) -> bool:
        return tournament_id in self.liked

    def drain_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def _notify(self, level: str, title: str, text: str) -> None:
        self.notices.append(Notice(level=level, title=title, text=text))
