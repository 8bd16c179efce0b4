"""
Lazily created, reusable HTTP client for the monitoring API.

The collector owns one :class:`Transport`. The underlying
``httpx.AsyncClient`` is built on the first cycle with the configured
response timeout applied to connect, read, write, and pool acquisition,
and is then reused by every following cycle.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_TIMEOUT_S: float = 5.0
"""Timeout used when no response timeout is configured."""


class Transport:
    """Owner of the collector's HTTP client.

    Args:
        response_timeout_s: Timeout in seconds for every request phase.
            ``None`` or ``0`` selects :data:`DEFAULT_RESPONSE_TIMEOUT_S`.
        transport: Optional httpx transport passed to the client, e.g. an
            ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        response_timeout_s: float | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout_s = response_timeout_s or DEFAULT_RESPONSE_TIMEOUT_S
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def timeout_s(self) -> float:
        """Effective timeout in seconds."""
        return self._timeout_s

    @property
    def client(self) -> httpx.AsyncClient | None:
        """The current client, or ``None`` before the first cycle."""
        return self._client

    def ensure_client(self) -> httpx.AsyncClient:
        """Return the client, creating it on first use.

        Runs without awaiting, so two coroutines on the same loop can never
        both observe a missing client.
        """
        if self._client is None:
            logger.debug("Creating HTTP client (timeout=%.1fs)", self._timeout_s)
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_s),
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the client. The next :meth:`ensure_client` builds a new one."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
