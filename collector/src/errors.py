"""
Exception hierarchy for a collection cycle.

Every stage of a cycle raises a subclass of :class:`CollectorError`.
All of them abort the cycle; nothing is emitted once one is raised.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from http import HTTPStatus


class CollectorError(Exception):
    """Base exception for a failed collection cycle."""


class InvalidURLError(CollectorError):
    """Raised when the equipment data URL cannot be composed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f'Invalid server URL "{url}"')


class NetworkError(CollectorError):
    """Raised on DNS, connect, timeout, or protocol failure."""


class UnexpectedStatusError(CollectorError):
    """Raised when the API answers with a status other than 200."""

    def __init__(self, url: str, got: int, want: int = HTTPStatus.OK) -> None:
        self.url = url
        self.got = int(got)
        self.want = int(want)
        super().__init__(
            f'Response from url "{url}" has status code {self.got} '
            f"({_phrase(self.got)}), expected {self.want} ({_phrase(self.want)})"
        )


class DecodeError(CollectorError):
    """Raised when the response body is not the expected JSON shape."""


class TimestampParseError(CollectorError):
    """Raised when a sample date does not match ``YYYY-MM-DD HH:MM:SS``."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Cannot parse sample date {value!r}")


def _phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Unknown"
