"""
Pure mapper from decoded telemetry samples to emitted metric points.

Each :class:`~collector.src.models.TelemetrySample` becomes one
:class:`~collector.src.models.EmittedPoint` whose fields carry the sample
values verbatim (no unit conversion) plus the cycle's ``response_time``.
The zone-naive sample date is interpreted in the site zone.

By default a single unparseable date fails the whole batch and no points
are returned. With ``skip_bad_samples=True`` such samples are logged and
dropped instead.

This is a pure function apart from logging: no I/O and no clock.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Require two-digit date and time fields

TODO:
- None
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from collector.src.errors import TimestampParseError
from collector.src.models import EmittedPoint
from collector.src.query import API_TIME_FORMAT

if TYPE_CHECKING:
    from collector.src.models import TelemetryResponse, TelemetrySample

logger = logging.getLogger(__name__)

# strptime alone accepts unpadded fields such as "2024-1-1 0:0:0".
_SAMPLE_TIME_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_sample_time(value: str, zone: tzinfo) -> datetime:
    """Parse a zone-naive ``YYYY-MM-DD HH:MM:SS`` string in *zone*.

    Raises:
        TimestampParseError: If *value* does not match the format.
    """
    if not _SAMPLE_TIME_RE.fullmatch(value):
        raise TimestampParseError(value)
    try:
        naive = datetime.strptime(value, API_TIME_FORMAT)
    except ValueError as exc:
        raise TimestampParseError(value) from exc
    return naive.replace(tzinfo=zone)


def sample_fields(sample: TelemetrySample, response_time: float) -> dict[str, float | str]:
    """Flatten one sample into the emitted field set."""
    l1 = sample.l1_data
    return {
        "response_time": response_time,
        "totalActivePower": sample.total_active_power,
        "dcVoltage": sample.dc_voltage,
        "groundFaultResistance": sample.ground_fault_resistance,
        "powerLimit": sample.power_limit,
        "totalEnergy": sample.total_energy,
        "temperature": sample.temperature,
        "inverterMode": sample.inverter_mode,
        "acCurrent": l1.ac_current,
        "acVoltage": l1.ac_voltage,
        "acFrequency": l1.ac_frequency,
        "apparentPower": l1.apparent_power,
        "activePower": l1.active_power,
        "reactivePower": l1.reactive_power,
        "cosPhi": l1.cos_phi,
    }


def map_samples(
    response: TelemetryResponse,
    zone: tzinfo,
    latency: float,
    *,
    measurement: str,
    skip_bad_samples: bool = False,
) -> list[EmittedPoint]:
    """Convert every sample of *response* into an :class:`EmittedPoint`.

    Args:
        response: Decoded equipment data.
        zone: Site zone used to interpret sample dates.
        latency: Request latency in seconds, added to every point as
            ``response_time``.
        measurement: Measurement name for the points.
        skip_bad_samples: Drop samples with unparseable dates instead of
            raising.

    Returns:
        One point per sample, in the order the API returned them.

    Raises:
        TimestampParseError: On the first unparseable date, unless
            *skip_bad_samples* is set.
    """
    points: list[EmittedPoint] = []

    for sample in response.data.telemetries:
        try:
            ts = parse_sample_time(sample.date, zone)
        except TimestampParseError:
            if not skip_bad_samples:
                logger.error("Sample date %r does not match %s", sample.date, API_TIME_FORMAT)
                raise
            logger.warning("Skipping sample with unparseable date %r", sample.date)
            continue

        fields = sample_fields(sample, latency)
        logger.debug("Fields for %s: %s", ts.isoformat(), fields)
        points.append(EmittedPoint(measurement=measurement, fields=fields, ts=ts))

    return points
