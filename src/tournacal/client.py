from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from .errors import MalformedPayload, TransportFailure
from .models import Sport, Tournament
from .normalizer import normalize_sports, normalize_tournaments

LOGGER = logging.getLogger(__name__)


class StapuboxClient:
    def __init__(
        self,
        sports_url: str = "https://stapubox.com/sportslist",
        tournaments_url: str = "https://stapubox.com/tournament/demo",
        timeout_seconds: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.sports_url = sports_url
        self.tournaments_url = tournaments_url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def fetch_sports(self) -> list[Sport]:
        payload = await self._get_json(self.sports_url)
        sports = normalize_sports(payload)
        LOGGER.info("Sports: %d entries (including All)", len(sports))
        return sports

    async def fetch_tournaments(self, now: datetime | None = None) -> list[Tournament]:
        payload = await self._get_json(self.tournaments_url)
        return normalize_tournaments(payload, now=now)

    async def _get_json(self, url: str) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise TransportFailure(f"GET {url} failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedPayload(f"GET {url} returned invalid JSON") from exc
