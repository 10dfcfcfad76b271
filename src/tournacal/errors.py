from __future__ import annotations


class TournacalError(Exception):
    pass


class InvalidTimestamp(TournacalError, ValueError):
    def __init__(self, raw: object) -> None:
        super().__init__(f"Invalid timestamp: {raw!r}")
        self.raw = raw


class MalformedPayload(TournacalError):
    pass


class TransportFailure(TournacalError):
    pass


class CacheUnavailable(TournacalError):
    pass
