"""
Collector daemon main loop for SolarEdge inverter telemetry.

Runs one asyncio loop: each iteration executes a single collection cycle
(query, fetch, decode, map, emit) through the SolarEdgeCollector and then
waits for the configured gather interval.

The loop is resilient: a failed cycle is logged and recorded in the health
file, and the next cycle runs on schedule. Graceful shutdown on
SIGTERM/SIGINT sets a shared asyncio.Event, letting the current cycle
finish before the HTTP client is closed and the process exits.

Structured JSON logging is used for all events.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Startup summary carries the collector description

TODO:
- None
"""

from __future__ import annotations

import asyncio
import contextlib
import hashlib
import json
import logging
import signal
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from collector.src import DESCRIPTION
from collector.src.accumulator import LineProtocolAccumulator, LoggingAccumulator
from collector.src.errors import CollectorError
from collector.src.health import HealthWriter

if TYPE_CHECKING:
    from collector.src.accumulator import Accumulator
    from collector.src.collector import SolarEdgeCollector
    from collector.src.config import CollectorSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging for the collector daemon.

    Sets up the root logger with a JSON-formatted handler writing to stderr,
    keeping stdout free for line protocol output.

    Args:
        level: Root logging level name.
    """

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs every request URL at INFO, API key included.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _masked_token(value: str | None) -> str:
    """Return a short non-reversible token fingerprint for diagnostics."""
    if not value:
        return "empty"
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()[:10]
    return f"len={len(value)} sha256={digest}"


# ---------------------------------------------------------------------------
# Startup config logging
# ---------------------------------------------------------------------------


def log_config_summary(settings: CollectorSettings) -> None:
    """Log a config summary at startup, excluding secrets.

    The API key is replaced by a length and SHA-256 fingerprint.
    """
    logger.info(
        "%s: collector starting with config: "
        "name=%s, site_id=%s, serial_number=%s, time_zone=%s, "
        "response_timeout_s=%s, api_base_url=%s, gather_interval_s=%s, "
        "skip_bad_samples=%s, health_path=%s, output=%s, "
        "api_key_masked=%s",
        DESCRIPTION,
        settings.name,
        settings.site_id,
        settings.serial_number,
        settings.time_zone,
        settings.response_timeout_s,
        settings.api_base_url,
        settings.gather_interval_s,
        settings.skip_bad_samples,
        settings.health_path,
        settings.output,
        _masked_token(settings.api_key),
    )


def build_accumulator(output: str) -> Accumulator:
    """Return the sink for the configured output mode."""
    if output == "log":
        return LoggingAccumulator()
    return LineProtocolAccumulator()


# ---------------------------------------------------------------------------
# Single-iteration function (easily testable)
# ---------------------------------------------------------------------------


async def _gather_once(
    *,
    collector: SolarEdgeCollector,
    acc: Accumulator,
    health: HealthWriter | None,
) -> bool:
    """Execute a single collection cycle.

    Catches all exceptions so that the caller's loop is never broken.
    After each cycle the health writer records the outcome.

    Args:
        collector: The SolarEdge collector.
        acc: Sink receiving the cycle's points.
        health: HealthWriter instance, or None to skip health writes.

    Returns:
        True if the cycle succeeded, False otherwise.
    """
    error: BaseException | None = None
    count = 0
    try:
        count = await collector.gather(acc)
    except CollectorError as exc:
        logger.error("Gather cycle failed: %s", exc, exc_info=True)
        error = exc
    except Exception as exc:
        logger.error("Unexpected gather cycle error", exc_info=True)
        error = exc

    if health is not None:
        try:
            if error is None:
                health.record_success(count)
            else:
                health.record_failure(error)
        except Exception:
            logger.warning("Failed to write health file", exc_info=True)

    return error is None


# ---------------------------------------------------------------------------
# Loop runner
# ---------------------------------------------------------------------------


async def run_loop(
    *,
    collector: SolarEdgeCollector,
    acc: Accumulator,
    gather_interval_s: float,
    shutdown_event: asyncio.Event,
    health: HealthWriter | None = None,
) -> None:
    """Run collection cycles until shutdown_event is set.

    Executes _gather_once, then sleeps for gather_interval_s, checking the
    shutdown event between iterations. The collector's HTTP client is
    closed on exit.

    Args:
        collector: The SolarEdge collector.
        acc: Sink receiving every cycle's points.
        gather_interval_s: Seconds between collection cycles.
        shutdown_event: Event to signal graceful shutdown.
        health: HealthWriter instance, or None to skip health writes.
    """
    logger.info("Gather loop started (interval=%ss)", gather_interval_s)
    try:
        while not shutdown_event.is_set():
            await _gather_once(collector=collector, acc=acc, health=health)
            # Use wait with timeout so we can check shutdown between sleeps
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(
                    shutdown_event.wait(),
                    timeout=gather_interval_s,
                )
    finally:
        await collector.aclose()
    logger.info("Gather loop stopped")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


async def async_main() -> None:
    """Async entrypoint: load config, build components, run the loop.

    Sets up SIGTERM/SIGINT handlers to trigger graceful shutdown.
    """
    from collector.src.collector import SolarEdgeCollector
    from collector.src.config import CollectorSettings

    settings = CollectorSettings()
    configure_logging(settings.log_level)
    log_config_summary(settings)

    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig,
            lambda: _handle_signal(shutdown_event),
        )

    await run_loop(
        collector=SolarEdgeCollector(settings),
        acc=build_accumulator(settings.output),
        gather_interval_s=settings.gather_interval_s,
        shutdown_event=shutdown_event,
        health=HealthWriter(settings.health_path),
    )


def _handle_signal(shutdown_event: asyncio.Event) -> None:
    """Handle SIGTERM/SIGINT by setting the shutdown event.

    Args:
        shutdown_event: The event to set for graceful shutdown.
    """
    logger.info("Received shutdown signal, initiating graceful shutdown")
    shutdown_event.set()


def main() -> None:
    """Synchronous entrypoint for the collector daemon."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
