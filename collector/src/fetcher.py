"""
Single GET against the equipment data endpoint.

Issues exactly one request per call (no retry), measures the round-trip
latency, and accepts only ``200 OK``. The response is read inside the
client's streaming context so it is closed on every exit path.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
import time
from http import HTTPStatus

import httpx
from collector.src.errors import NetworkError, UnexpectedStatusError
from collector.src.query import redact_url

logger = logging.getLogger(__name__)


async def fetch(client: httpx.AsyncClient, url: httpx.URL) -> tuple[bytes, float]:
    """GET *url* and return the raw body with the latency in seconds.

    Latency runs from just before the request is sent until the status has
    been checked and the body read.

    Args:
        client: The collector's shared HTTP client.
        url: Fully composed request URL, including the API key.

    Returns:
        ``(body, latency_s)``.

    Raises:
        NetworkError: On DNS, connect, timeout, or protocol failure.
        UnexpectedStatusError: If the status code is not 200. The body is
            not read in that case.
    """
    safe_url = redact_url(url)
    logger.debug("Requesting %s", safe_url)

    start = time.perf_counter()
    try:
        async with client.stream("GET", url) as response:
            if response.status_code != HTTPStatus.OK:
                latency = time.perf_counter() - start
                logger.error(
                    "Request to %s failed with HTTP %d after %.3fs",
                    safe_url,
                    response.status_code,
                    latency,
                )
                raise UnexpectedStatusError(safe_url, response.status_code)
            body = await response.aread()
    except httpx.RequestError as exc:
        logger.error("Request to %s failed: %s", safe_url, exc)
        raise NetworkError(f"Request to {safe_url} failed: {exc}") from exc
    latency = time.perf_counter() - start

    logger.debug("Received %d bytes in %.3fs", len(body), latency)
    return body, latency
