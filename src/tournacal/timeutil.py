"""Timestamp parsing and display formatting.

Raw timestamps from the API are treated as UTC. Two conventions coexist:

* filtering and calendar matching use the unshifted UTC instant
  (``parse_instant``, ``day_of_month``);
* everything shown to the user is rendered at a fixed UTC+05:30
  (``to_display_instant``, ``format_date``, ``format_time``).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from .errors import InvalidTimestamp
from .models import Match, Tournament

LOGGER = logging.getLogger(__name__)

DISPLAY_OFFSET = timezone(timedelta(hours=5, minutes=30), "IST")
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_instant(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidTimestamp(raw)
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError as exc:
        raise InvalidTimestamp(raw) from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_display_instant(value: str | datetime) -> datetime:
    instant = parse_instant(value) if isinstance(value, str) else _as_utc(value)
    return instant.astimezone(DISPLAY_OFFSET)


def format_date(value: str | datetime) -> str:
    shown = to_display_instant(value)
    return f"{shown.day:02d} {_MONTH_ABBR[shown.month - 1]} {shown.year}"


def format_time(value: str | datetime) -> str:
    shown = to_display_instant(value)
    hour = shown.hour % 12 or 12
    suffix = "AM" if shown.hour < 12 else "PM"
    return f"{hour:02d}:{shown.minute:02d} {suffix}"


def day_of_month(raw: str) -> int:
    return parse_instant(raw).day


def match_instant(match: Match, tournament: Tournament) -> datetime | None:
    """Return the instant a match is shown at, or None if nothing parses.

    A missing or malformed match time falls back to the tournament's start
    date.
    """
    if match.start_time:
        try:
            return parse_instant(match.start_time)
        except InvalidTimestamp:
            LOGGER.warning(
                "Invalid start_time for match %s in tournament %s: %r",
                match.id,
                tournament.name,
                match.start_time,
            )
    try:
        return parse_instant(tournament.start_date)
    except InvalidTimestamp:
        return None


def display_span(tournament: Tournament, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return the (start, end) UTC instants a tournament covers.

    The span starts from the tournament's own bounds and widens to include
    every match. An unparseable start becomes ``now``; an unparseable or
    missing end becomes the start.
    """
    try:
        start = parse_instant(tournament.start_date)
    except InvalidTimestamp:
        LOGGER.warning("Invalid start_date for tournament %s: %r", tournament.name, tournament.start_date)
        start = _as_utc(now) if now else datetime.now(timezone.utc)

    end = start
    if tournament.end_date:
        try:
            end = parse_instant(tournament.end_date)
        except InvalidTimestamp:
            LOGGER.warning("Invalid end_date for tournament %s: %r", tournament.name, tournament.end_date)

    instants = [i for i in (match_instant(m, tournament) for m in tournament.matches) if i is not None]
    if instants:
        start = min(start, *instants)
        end = max(end, *instants)
    return start, end


def format_date_range(tournament: Tournament, now: datetime | None = None) -> str:
    start, end = display_span(tournament, now)
    return f"{format_date(start)} - {format_date(end)}"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
