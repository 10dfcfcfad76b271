from __future__ import annotations

import asyncio
import logging

from dotenv import load_dotenv

from .client import StapuboxClient
from .config import Settings
from .formatters import format_calendar, format_tournaments
from .screen import CalendarScreen
from .store import JsonFileStore, TournamentCache


async def render_once(settings: Settings) -> str:
    client = StapuboxClient(
        sports_url=settings.sports_url,
        tournaments_url=settings.tournaments_url,
        timeout_seconds=settings.timeout_seconds,
    )
    cache = TournamentCache(JsonFileStore(settings.cache_dir))
    screen = CalendarScreen(client, cache, settings)
    await screen.start()

    parts = []
    for notice in screen.drain_notices():
        parts.append(f"[{notice.title}] {notice.text}")
    if screen.error:
        parts.append(screen.error)
    parts.append("Sports: " + ", ".join(sport.name for sport in screen.sports))
    parts.append(format_calendar(screen.title, screen.grid(), screen.highlighted_days(), screen.selected_day))
    parts.append(format_tournaments(screen.visible_page(), screen.liked, screen.expanded))
    return "\n\n".join(parts)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()
    settings = Settings.from_env()
    print(asyncio.run(render_once(settings)))


if __name__ == "__main__":
    main()
