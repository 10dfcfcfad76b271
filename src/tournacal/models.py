from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any

from .errors import MalformedPayload

LOGGER = logging.getLogger(__name__)

SPORT_ID_KEYS = ("sport_id", "sport_code", "id")
SPORT_NAME_KEYS = ("sport_name", "name")
IMAGE_KEYS = ("tournament_img_url", "img_url", "image_url")


@dataclass(slots=True)
class Match:
    id: int
    stage: str = ""
    team_a: str = ""
    team_b: str = ""
    start_time: str = ""
    venue: str = ""
    status: str | None = None

    @classmethod
    def from_dict(cls, raw: Any, position: int = 0) -> "Match":
        """Build a match, keeping it even when its id is unusable.

        The id only tells matches apart within a tournament, so a missing or
        non-integer id falls back to the match's 1-based position.
        """
        if not isinstance(raw, dict):
            raise MalformedPayload(f"Match record must be an object, got {type(raw).__name__}")
        try:
            match_id = _require_int(raw, "id", "match")
        except MalformedPayload as exc:
            LOGGER.warning("%s; using position %d as the match id", exc, position)
            match_id = position
        return cls(
            id=match_id,
            stage=_text(raw.get("stage")),
            team_a=_text(raw.get("team_a")),
            team_b=_text(raw.get("team_b")),
            start_time=_text(raw.get("start_time")),
            venue=_text(raw.get("venue")),
            status=raw.get("status"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "stage": self.stage,
            "team_a": self.team_a,
            "team_b": self.team_b,
            "start_time": self.start_time,
            "venue": self.venue,
        }
        if self.status is not None:
            out["status"] = self.status
        return out


@dataclass(slots=True)
class Tournament:
    id: int
    name: str
    start_date: str
    image_url: str = ""
    level: str = ""
    end_date: str | None = None
    matches: list[Match] = field(default_factory=list)
    sport_id: int | str | None = None
    sport_name: str = ""

    @classmethod
    def from_dict(cls, raw: Any, sport: "Sport | None" = None) -> "Tournament":
        if not isinstance(raw, dict):
            raise MalformedPayload(f"Tournament record must be an object, got {type(raw).__name__}")
        matches = raw.get("matches")
        if matches is None:
            matches = []
        if not isinstance(matches, list):
            raise MalformedPayload(f"Tournament {raw.get('id')!r}: matches must be a list")
        name = raw.get("name")
        if not isinstance(name, str):
            raise MalformedPayload(f"Tournament {raw.get('id')!r} has no name")
        end_date = raw.get("end_date")
        return cls(
            id=_require_int(raw, "id", "tournament"),
            name=name,
            start_date=_text(raw.get("start_date")),
            image_url=_text(_first_present(raw, IMAGE_KEYS)),
            level=_text(raw.get("level")),
            end_date=None if end_date is None else _text(end_date),
            matches=[Match.from_dict(m, position) for position, m in enumerate(matches, start=1)],
            sport_id=sport.id if sport else raw.get("sport_id"),
            sport_name=sport.name if sport else _text(raw.get("sport_name")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "tournament_img_url": self.image_url,
            "level": self.level,
            "start_date": self.start_date,
            "matches": [m.to_dict() for m in self.matches],
            "sport_id": self.sport_id,
            "sport_name": self.sport_name,
        }
        if self.end_date is not None:
            out["end_date"] = self.end_date
        return out


@dataclass(frozen=True, slots=True)
class Sport:
    id: int | str
    name: str

    @classmethod
    def from_dict(cls, raw: Any) -> "Sport":
        """Build a sport from any known payload variant.

        The identifier is read from the first known alias. When none is
        present a synthetic id is derived from the name, so the same sport
        gets the same id on every fetch. A record with neither is rejected.
        """
        if not isinstance(raw, dict):
            raise MalformedPayload(f"Sport record must be an object, got {type(raw).__name__}")
        name = _first_present(raw, SPORT_NAME_KEYS)
        sport_id = _first_present(raw, SPORT_ID_KEYS)
        if name is None and sport_id is None:
            raise MalformedPayload(
                f"Sport record has none of the fields {SPORT_ID_KEYS + SPORT_NAME_KEYS}"
            )
        name = _text(name)
        if sport_id is None:
            sport_id = synthetic_sport_id(name)
        return cls(id=sport_id, name=name)


ALL_SPORTS = Sport(id="ALL", name="All")


def synthetic_sport_id(name: str) -> str:
    digest = hashlib.sha1(name.strip().lower().encode("utf-8")).hexdigest()
    return f"sport_{digest[:9]}"


def _first_present(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def _require_int(raw: dict[str, Any], key: str, kind: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool):
        raise MalformedPayload(f"{kind} {key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedPayload(f"{kind} {key} must be an integer, got {value!r}") from exc


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
