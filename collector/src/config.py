"""
Collector configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
All configuration values come from environment variables or .env files;
no hardcoded site IDs, serial numbers, or API keys.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://monitoringapi.solaredge.com"

_OUTPUT_MODES = ("line", "log")


class CollectorSettings(BaseSettings):
    """SolarEdge collector configuration.

    All values are loaded from environment variables. Required variables
    must be set; optional variables have sensible defaults.

    Attributes:
        name: Measurement name for emitted points.
        site_id: SolarEdge site identifier.
        serial_number: Inverter serial number, e.g. ``12345678-00``.
        api_key: SolarEdge monitoring API key (secret).
        time_zone: IANA zone the site reports local timestamps in.
            Unknown names fall back to UTC at query time.
        response_timeout_s: Timeout applied to every phase of the request.
        api_base_url: Monitoring API base URL.
        gather_interval_s: Seconds between collection cycles (min 60, the
            API allows 300 requests per site per day).
        skip_bad_samples: Skip samples with unparseable dates instead of
            failing the whole cycle.
        health_path: Health JSON file written after each cycle.
        log_level: Root logging level name.
        output: ``"line"`` writes InfluxDB line protocol to stdout,
            ``"log"`` logs each point.
    """

    name: str = "solaredge"
    site_id: str
    serial_number: str
    api_key: str
    time_zone: str = "UTC"
    response_timeout_s: float = 5.0
    api_base_url: str = DEFAULT_API_BASE_URL
    gather_interval_s: int = 900
    skip_bad_samples: bool = False
    health_path: str = "/data/health.json"
    log_level: str = "INFO"
    output: str = "line"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )

    @field_validator("name", "site_id", "serial_number", "api_key")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only identifiers."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("response_timeout_s")
    @classmethod
    def response_timeout_must_be_positive(cls, v: float) -> float:
        """Validate the response timeout is a positive duration."""
        if v <= 0:
            raise ValueError("RESPONSE_TIMEOUT_S must be > 0")
        return v

    @field_validator("api_base_url")
    @classmethod
    def api_base_url_must_be_http(cls, v: str) -> str:
        """Validate the API base URL uses http(s) and drop a trailing slash."""
        if not v.lower().startswith(("https://", "http://")):
            raise ValueError(
                f"API_BASE_URL must start with http:// or https:// (got: '{v[:20]}...')"
            )
        return v.rstrip("/")

    @field_validator("gather_interval_s")
    @classmethod
    def gather_interval_must_respect_quota(cls, v: int) -> int:
        """Minimum 60 seconds between cycles to stay inside the API quota."""
        if v < 60:
            raise ValueError("GATHER_INTERVAL_S must be >= 60 (API daily quota)")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate the log level against the logging module's level names."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name (got: '{v}')")
        return level

    @field_validator("output")
    @classmethod
    def output_must_be_known(cls, v: str) -> str:
        """Validate the output mode."""
        if v not in _OUTPUT_MODES:
            raise ValueError(f"OUTPUT must be one of {', '.join(_OUTPUT_MODES)}")
        return v
