"""
Request URL builder for the SolarEdge equipment data endpoint.

Composes ``{api_base_url}/equipment/{site_id}/{serial_number}/data`` and
attaches the API key plus a trailing six-day window ending now. Both window
ends are rendered as zone-naive ``YYYY-MM-DD HH:MM:SS`` strings in the site
time zone; the zone itself travels separately so the mapper can interpret
the sample dates the API returns in the same zone.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Zone directory names fall back to UTC

TODO:
- None
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
from collector.src.errors import InvalidURLError
from collector.src.models import TelemetryWindow

if TYPE_CHECKING:
    from collector.src.config import CollectorSettings

logger = logging.getLogger(__name__)

API_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
"""Timestamp format used by the API for query parameters and sample dates."""

LOOKBACK = timedelta(hours=6 * 24)
"""Length of the trailing window queried every cycle."""


def resolve_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC.

    An empty name or ``"UTC"`` resolves to UTC directly. Any name the zone
    database does not know logs a warning and also resolves to UTC, so every
    timestamp of the cycle is interpreted as UTC.
    """
    if not name or name == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("Unknown time zone %r, falling back to UTC", name)
        return UTC


def format_api_time(ts: datetime) -> str:
    """Render *ts* as the API's zone-naive timestamp string."""
    return ts.strftime(API_TIME_FORMAT)


def telemetry_window(zone: tzinfo, now: datetime | None = None) -> TelemetryWindow:
    """Return the trailing window ending at *now* (default: current time).

    ``end_time`` is *now* converted to *zone*; ``start_time`` is exactly
    :data:`LOOKBACK` earlier as an instant, so a DST change inside the
    window shifts its wall-clock rendering by an hour.
    """
    if now is None:
        now = datetime.now(tz=UTC)
    end_time = now.astimezone(zone)
    # Aware arithmetic within one zone is wall-clock; subtract in UTC.
    start_time = (end_time.astimezone(UTC) - LOOKBACK).astimezone(zone)
    return TelemetryWindow(start_time=start_time, end_time=end_time)


def build_request_url(
    settings: CollectorSettings,
    now: datetime | None = None,
) -> tuple[httpx.URL, tzinfo]:
    """Build the equipment data URL for the configured inverter.

    Args:
        settings: Collector settings providing base URL, site, serial
            number, API key, and time zone name.
        now: Invocation time. Defaults to the current time.

    Returns:
        The request URL and the resolved site zone.

    Raises:
        InvalidURLError: If the composed URL is not an absolute http(s) URL.
    """
    equipment_url = (
        f"{settings.api_base_url}/equipment/"
        f"{settings.site_id}/{settings.serial_number}/data"
    )
    try:
        url = httpx.URL(equipment_url)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(equipment_url) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError(equipment_url)

    zone = resolve_zone(settings.time_zone)
    window = telemetry_window(zone, now)

    url = url.copy_merge_params(
        {
            "api_key": settings.api_key,
            "startTime": format_api_time(window.start_time),
            "endTime": format_api_time(window.end_time),
        }
    )
    return url, zone


def redact_url(url: httpx.URL) -> str:
    """Return *url* as a string with the API key masked, for logs and errors."""
    if "api_key" in url.params:
        url = url.copy_set_param("api_key", "***")
    return str(url)
