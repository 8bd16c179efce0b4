"""
Sinks that receive the points of a successful collection cycle.

Any object with an ``add_fields(measurement, fields, tags, ts)`` method can
act as a sink. Three implementations are provided:

- :class:`MemoryAccumulator` keeps points in a list.
- :class:`LineProtocolAccumulator` writes InfluxDB line protocol to a text
  stream (stdout by default), one line per point.
- :class:`LoggingAccumulator` logs each point at INFO.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import math
import sys
from datetime import datetime
from typing import Protocol, TextIO

from collector.src.models import EmittedPoint

logger = logging.getLogger(__name__)


class Accumulator(Protocol):
    """Consumer interface for emitted points."""

    def add_fields(
        self,
        measurement: str,
        fields: dict[str, float | str],
        tags: dict[str, str],
        ts: datetime,
    ) -> None: ...


class MemoryAccumulator:
    """Collects points in :attr:`points` in the order they were added."""

    def __init__(self) -> None:
        self.points: list[EmittedPoint] = []

    def add_fields(
        self,
        measurement: str,
        fields: dict[str, float | str],
        tags: dict[str, str],
        ts: datetime,
    ) -> None:
        self.points.append(
            EmittedPoint(measurement=measurement, fields=dict(fields), tags=dict(tags), ts=ts)
        )


class LineProtocolAccumulator:
    """Writes each point as one InfluxDB line protocol line.

    Args:
        stream: Text stream to write to. Defaults to ``sys.stdout``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    @staticmethod
    def _escape(value: str) -> str:
        return (
            value.replace("\\", "\\\\")
            .replace(",", "\\,")
            .replace(" ", "\\ ")
            .replace("=", "\\=")
        )

    @staticmethod
    def _escape_str_field(value: str) -> str:
        return value.replace("\\", "\\\\").replace('"', '\\"')

    def build_line(
        self,
        measurement: str,
        fields: dict[str, float | str],
        tags: dict[str, str],
        ts: datetime,
    ) -> str | None:
        """Render one point, or ``None`` if no field is representable."""
        head = self._escape(measurement)
        for key, value in sorted(tags.items()):
            head += f",{self._escape(key)}={self._escape(value)}"

        field_parts: list[str] = []
        for name, value in fields.items():
            key = self._escape(name)
            if isinstance(value, bool):
                field_parts.append(f"{key}={'true' if value else 'false'}")
            elif isinstance(value, int):
                field_parts.append(f"{key}={value}i")
            elif isinstance(value, float):
                if math.isnan(value) or math.isinf(value):
                    continue
                field_parts.append(f"{key}={value!r}")
            else:
                field_parts.append(f'{key}="{self._escape_str_field(str(value))}"')

        if not field_parts:
            return None

        ts_ns = int(ts.timestamp()) * 1_000_000_000 + ts.microsecond * 1_000
        return f"{head} {','.join(field_parts)} {ts_ns}"

    def add_fields(
        self,
        measurement: str,
        fields: dict[str, float | str],
        tags: dict[str, str],
        ts: datetime,
    ) -> None:
        line = self.build_line(measurement, fields, tags, ts)
        if line is None:
            logger.warning("Dropping point for %s at %s: no writable fields", measurement, ts)
            return
        self._stream.write(line + "\n")
        self._stream.flush()


class LoggingAccumulator:
    """Logs each point at INFO level."""

    def add_fields(
        self,
        measurement: str,
        fields: dict[str, float | str],
        tags: dict[str, str],
        ts: datetime,
    ) -> None:
        logger.info("Point %s ts=%s tags=%s fields=%s", measurement, ts.isoformat(), tags, fields)
