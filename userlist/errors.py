"""
Design (errors.py)
- Purpose: Typed failures of a single fetch, so callers can catch one base class.
- Thread-safety: N/A.
"""


class FetchError(Exception):
    """Base class for everything that can go wrong fetching the user list."""

    kind = "fetch failed"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.kind}: {self.reason}"


class InvalidEndpoint(FetchError):
    kind = "invalid endpoint"


class TransportFailure(FetchError):
    """Network unreachable, TLS failure, timeout or a non-2xx status."""

    kind = "network error"


class DecodeFailure(FetchError):
    kind = "bad response"
