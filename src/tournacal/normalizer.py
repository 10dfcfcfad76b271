from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from .errors import InvalidTimestamp, MalformedPayload
from .models import ALL_SPORTS, Sport, Tournament
from .timeutil import parse_instant

LOGGER = logging.getLogger(__name__)


def ensure_success(payload: Any) -> list[Any]:
    if not isinstance(payload, dict):
        raise MalformedPayload(f"Expected a JSON object, got {type(payload).__name__}")
    status = payload.get("status")
    if status != "success":
        raise MalformedPayload(f"API status is {status!r}: {payload.get('err') or payload.get('msg')!r}")
    data = payload.get("data")
    if not isinstance(data, list):
        raise MalformedPayload("API payload has no data list")
    return data


def normalize_sports(payload: Any) -> list[Sport]:
    sports = [Sport.from_dict(raw) for raw in ensure_success(payload)]
    return [ALL_SPORTS, *sports]


def normalize_tournaments(payload: Any, now: datetime | None = None) -> list[Tournament]:
    """Flatten the per-sport tournament payload into one sorted list.

    Every tournament is stamped with the sport it was listed under. The list
    is ordered by start date; an unparseable start date sorts as ``now``.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    tournaments: list[Tournament] = []
    for raw_sport in ensure_success(payload):
        sport = Sport.from_dict(raw_sport)
        records = raw_sport.get("tournaments")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise MalformedPayload(f"Sport {sport.name!r}: tournaments must be a list")
        tournaments.extend(Tournament.from_dict(raw, sport) for raw in records)

    tournaments.sort(key=lambda t: sort_instant(t, now))
    LOGGER.info("Normalized %d tournaments", len(tournaments))
    return tournaments


def load_tournament_records(records: Any) -> list[Tournament]:
    if not isinstance(records, list):
        raise MalformedPayload("Cached tournaments must be a list")
    return [Tournament.from_dict(raw) for raw in records]


def sort_instant(tournament: Tournament, now: datetime) -> datetime:
    try:
        return parse_instant(tournament.start_date)
    except InvalidTimestamp:
        return now
