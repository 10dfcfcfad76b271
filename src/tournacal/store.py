from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from .errors import CacheUnavailable, MalformedPayload
from .models import Tournament
from .normalizer import load_tournament_records

LOGGER = logging.getLogger(__name__)

TOURNAMENTS_KEY = "tournaments"
LIKED_KEY = "likedTournaments"


class JsonFileStore:
    """Key/value blob store keeping each key in ``<directory>/<key>.json``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheUnavailable(f"Cannot read {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise CacheUnavailable(f"Cannot write {path}: {exc}") from exc


class TournamentCache:
    """Best-effort persistence of the last tournament list and the liked set.

    Nothing here raises: read failures look like an empty cache and write
    failures are only logged.
    """

    def __init__(self, store: JsonFileStore) -> None:
        self.store = store

    def load_cached_tournaments(self) -> list[Tournament] | None:
        try:
            raw = self.store.get_item(TOURNAMENTS_KEY)
            if raw is None:
                return None
            return load_tournament_records(json.loads(raw))
        except (CacheUnavailable, MalformedPayload, ValueError) as exc:
            LOGGER.warning("Error loading cached tournaments: %s", exc)
            return None

    def save_tournaments(self, tournaments: Iterable[Tournament]) -> None:
        try:
            self.store.set_item(TOURNAMENTS_KEY, json.dumps([t.to_dict() for t in tournaments]))
        except CacheUnavailable as exc:
            LOGGER.warning("Error caching tournaments: %s", exc)

    def load_liked_ids(self) -> set[int]:
        try:
            raw = self.store.get_item(LIKED_KEY)
            if raw is None:
                return set()
            ids = json.loads(raw)
            if not isinstance(ids, list):
                raise ValueError(f"expected a list, got {type(ids).__name__}")
            return {int(x) for x in ids}
        except (CacheUnavailable, ValueError, TypeError) as exc:
            LOGGER.warning("Error loading liked tournaments: %s", exc)
            return set()

    def save_liked_ids(self, liked: Iterable[int]) -> None:
        try:
            self.store.set_item(LIKED_KEY, json.dumps(sorted(liked)))
        except CacheUnavailable as exc:
            LOGGER.warning("Error saving liked tournaments: %s", exc)
