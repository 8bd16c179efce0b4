"""
Shared test fixtures for collector tests.

Provides environment variable fixtures for CollectorSettings configuration
tests, a settings factory, and JSON payload builders for the equipment data
endpoint. All collector env vars are cleaned before each test to ensure
isolation.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import json
from typing import Any

import pytest

# All CollectorSettings environment variable names, used for cleanup.
_ALL_COLLECTOR_ENV_VARS = (
    "NAME",
    "SITE_ID",
    "SERIAL_NUMBER",
    "API_KEY",
    "TIME_ZONE",
    "RESPONSE_TIMEOUT_S",
    "API_BASE_URL",
    "GATHER_INTERVAL_S",
    "SKIP_BAD_SAMPLES",
    "HEALTH_PATH",
    "LOG_LEVEL",
    "OUTPUT",
)


@pytest.fixture(autouse=True)
def _clean_collector_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all collector env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_COLLECTOR_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def env_vars_full(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set all required and optional environment variables for CollectorSettings."""
    env = {
        "NAME": "solaredge_roof",
        "SITE_ID": "123456",
        "SERIAL_NUMBER": "12345678-00",
        "API_KEY": "L4QLVQ1LOKCQX2193VSEICXW61NP6B1O",
        "TIME_ZONE": "Europe/Brussels",
        "RESPONSE_TIMEOUT_S": "7.5",
        "API_BASE_URL": "https://monitoring.example.com",
        "GATHER_INTERVAL_S": "600",
        "SKIP_BAD_SAMPLES": "true",
        "HEALTH_PATH": "/tmp/test-health.json",
        "LOG_LEVEL": "debug",
        "OUTPUT": "log",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture()
def env_vars_required_only(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set only the required environment variables (no optional ones)."""
    env = {
        "SITE_ID": "654321",
        "SERIAL_NUMBER": "87654321-AB",
        "API_KEY": "api-key-xyz",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture()
def make_settings():
    """Return a factory building CollectorSettings without touching the env."""
    from collector.src.config import CollectorSettings

    def _make(**overrides: Any) -> CollectorSettings:
        values: dict[str, Any] = {
            "site_id": "123456",
            "serial_number": "12345678-00",
            "api_key": "secret-key",
            "time_zone": "UTC",
            "api_base_url": "https://monitoring.example.com",
        }
        values.update(overrides)
        return CollectorSettings(**values)

    return _make


def make_telemetry(date: str = "2024-01-01 00:00:00", **overrides: Any) -> dict[str, Any]:
    """Return one telemetry sample dict as the API sends it."""
    sample: dict[str, Any] = {
        "date": date,
        "totalActivePower": 3520.5,
        "dcVoltage": 380.2,
        "groundFaultResistance": 6000.0,
        "powerLimit": 100.0,
        "totalEnergy": 12345678.0,
        "temperature": 41.3,
        "inverterMode": "MPPT",
        "L1Data": {
            "acCurrent": 15.1,
            "acVoltage": 233.4,
            "acFrequency": 50.01,
            "apparentPower": 3530.0,
            "activePower": 3520.5,
            "reactivePower": -120.0,
            "cosPhi": 1.0,
        },
    }
    sample.update(overrides)
    return sample


def make_body(*telemetries: dict[str, Any]) -> bytes:
    """Return an equipment data response body wrapping *telemetries*."""
    return json.dumps(
        {"data": {"count": len(telemetries), "telemetries": list(telemetries)}}
    ).encode("utf-8")
