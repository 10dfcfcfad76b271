from __future__ import annotations

from dataclasses import dataclass
from os import getenv

from .calendar_grid import DisplayWindow


@dataclass(slots=True)
class Settings:
    sports_url: str
    tournaments_url: str
    timeout_seconds: float
    cache_dir: str
    window_year: int
    window_first_month: int
    window_last_month: int
    page_size: int
    load_more_delay_seconds: float

    @property
    def window(self) -> DisplayWindow:
        return DisplayWindow(self.window_year, self.window_first_month, self.window_last_month)

    @classmethod
    def from_env(cls) -> "Settings":
        sports_url = getenv("TOURNACAL_SPORTS_URL", "https://stapubox.com/sportslist").strip()
        tournaments_url = getenv(
            "TOURNACAL_TOURNAMENTS_URL",
            "https://stapubox.com/tournament/demo",
        ).strip()
        cache_dir = getenv("TOURNACAL_CACHE_DIR", "~/.cache/tournacal").strip()

        timeout = float(getenv("TOURNACAL_TIMEOUT_SECONDS", "20"))
        year = int(getenv("TOURNACAL_WINDOW_YEAR", "2025"))
        first_month = int(getenv("TOURNACAL_WINDOW_FIRST_MONTH", "8"))
        last_month = int(getenv("TOURNACAL_WINDOW_LAST_MONTH", "10"))
        page_size = int(getenv("TOURNACAL_PAGE_SIZE", "10"))
        if page_size <= 0:
            raise ValueError("TOURNACAL_PAGE_SIZE must be positive")
        delay = float(getenv("TOURNACAL_LOAD_MORE_DELAY_SECONDS", "1.0"))
        DisplayWindow(year, first_month, last_month)  # validates the month range

        return cls(
            sports_url=sports_url,
            tournaments_url=tournaments_url,
            timeout_seconds=timeout,
            cache_dir=cache_dir,
            window_year=year,
            window_first_month=first_month,
            window_last_month=last_month,
            page_size=page_size,
            load_more_delay_seconds=delay,
        )
