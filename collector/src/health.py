"""
Health file writer for the collector daemon.

Writes a JSON health file at a configurable path with four fields:
- last_gather_ts: ISO timestamp of the most recent cycle, successful or not.
- last_success_ts: ISO timestamp of the most recent successful cycle.
- last_error: Message of the most recent failed cycle, cleared on success.
- points_emitted: Number of points emitted by the most recent successful cycle.

The file is overwritten after every cycle, providing a simple liveness
signal that Docker HEALTHCHECK or monitoring can inspect.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path


class HealthWriter:
    """Writes collector health status to a JSON file.

    Args:
        path: Filesystem path for the health JSON file. Accepts str or Path.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._last_gather_ts: str | None = None
        self._last_success_ts: str | None = None
        self._last_error: str | None = None
        self._points_emitted: int = 0

    def record_success(self, points_emitted: int) -> None:
        """Record a successful cycle and write health file.

        Args:
            points_emitted: Number of points the cycle emitted.
        """
        now = datetime.now(tz=UTC).isoformat()
        self._last_gather_ts = now
        self._last_success_ts = now
        self._last_error = None
        self._points_emitted = points_emitted
        self._write()

    def record_failure(self, error: BaseException) -> None:
        """Record a failed cycle and write health file."""
        self._last_gather_ts = datetime.now(tz=UTC).isoformat()
        self._last_error = f"{type(error).__name__}: {error}"
        self._write()

    def _write(self) -> None:
        """Write the health JSON file with current state."""
        data = {
            "last_gather_ts": self._last_gather_ts,
            "last_success_ts": self._last_success_ts,
            "last_error": self._last_error,
            "points_emitted": self._points_emitted,
        }
        self.path.write_text(json.dumps(data))
