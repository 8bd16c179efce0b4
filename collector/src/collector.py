"""
SolarEdge equipment telemetry collector.

One call to :meth:`SolarEdgeCollector.gather` runs a full collection cycle:

1. Build the equipment data URL for the trailing six-day window.
2. GET it through the collector's shared HTTP client.
3. Decode the JSON body.
4. Map every sample to a point.
5. Hand the points to the sink.

Any stage failure raises a :class:`~collector.src.errors.CollectorError`
and the cycle ends without emitting anything. Nothing is retried; the
caller decides when to run the next cycle.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from collector.src.decoder import decode
from collector.src.fetcher import fetch
from collector.src.mapper import map_samples
from collector.src.query import build_request_url
from collector.src.transport import Transport

if TYPE_CHECKING:
    import httpx
    from collector.src.accumulator import Accumulator
    from collector.src.config import CollectorSettings
    from collector.src.models import EmittedPoint

logger = logging.getLogger(__name__)


class SolarEdgeCollector:
    """Collects inverter telemetry for one site and serial number.

    Cycles are expected to run one at a time.

    Args:
        settings: Collector settings. Not modified.
        transport: Optional httpx transport for the shared client, e.g. an
            ``httpx.MockTransport`` in tests.

    Usage::

        collector = SolarEdgeCollector(CollectorSettings())
        sink = MemoryAccumulator()
        count = await collector.gather(sink)
        await collector.aclose()
    """

    def __init__(
        self,
        settings: CollectorSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = Transport(settings.response_timeout_s, transport=transport)

    @property
    def settings(self) -> CollectorSettings:
        return self._settings

    @property
    def transport(self) -> Transport:
        return self._transport

    async def collect(self, now: datetime | None = None) -> list[EmittedPoint]:
        """Run the query, fetch, decode, and map stages and return the points.

        Args:
            now: Invocation time for the query window. Defaults to now.

        Raises:
            CollectorError: The first stage failure of the cycle.
        """
        client = self._transport.ensure_client()
        url, zone = build_request_url(self._settings, now)
        body, latency = await fetch(client, url)
        response = decode(body)
        return map_samples(
            response,
            zone,
            latency,
            measurement=self._settings.name,
            skip_bad_samples=self._settings.skip_bad_samples,
        )

    async def gather(self, acc: Accumulator, now: datetime | None = None) -> int:
        """Run one collection cycle and emit its points to *acc*.

        Points are emitted only after every stage has succeeded, in the
        order the API returned the samples.

        Returns:
            The number of points emitted.

        Raises:
            CollectorError: The first stage failure of the cycle. Nothing is
                emitted in that case.
        """
        points = await self.collect(now)
        for point in points:
            acc.add_fields(point.measurement, point.fields, point.tags, point.ts)
        logger.info(
            "Gathered %d points for site=%s serial=%s",
            len(points),
            self._settings.site_id,
            self._settings.serial_number,
        )
        return len(points)

    async def aclose(self) -> None:
        """Release the shared HTTP client."""
        await self._transport.aclose()
