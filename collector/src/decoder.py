"""
Decoder for the equipment data response body.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

from collector.src.errors import DecodeError
from collector.src.models import TelemetryResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)


def decode(raw: bytes | str) -> TelemetryResponse:
    """Validate *raw* JSON into a :class:`TelemetryResponse`.

    Only the structure is checked: unknown keys are ignored and numeric
    values are taken as-is.

    Raises:
        DecodeError: If *raw* is not valid JSON or does not have the
            equipment data shape. The pydantic error is chained.
    """
    try:
        response = TelemetryResponse.model_validate_json(raw)
    except ValidationError as exc:
        logger.error("Cannot decode equipment data: %s", exc)
        raise DecodeError(f"Cannot decode equipment data: {exc}") from exc
    logger.debug(
        "Decoded equipment data: count=%d, telemetries=%d",
        response.data.count,
        len(response.data.telemetries),
    )
    return response
