"""
Tests for the equipment data response decoder and payload models.

Verifies the nested decode, zero-value defaults for absent or null keys,
tolerance of unknown keys, and DecodeError on malformed or structurally
incompatible payloads.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Strict scalar type cases; null telemetry entries

TODO:
- None
"""

from __future__ import annotations

import json

import pytest
from collector.src.decoder import decode
from collector.src.errors import DecodeError
from conftest import make_body, make_telemetry
from pydantic import ValidationError


class TestDecodeValid:
    """Well-formed payloads decode into the nested models."""

    def test_decodes_nested_sample(self) -> None:
        response = decode(make_body(make_telemetry()))

        assert response.data.count == 1
        sample = response.data.telemetries[0]
        assert sample.date == "2024-01-01 00:00:00"
        assert sample.total_active_power == 3520.5
        assert sample.dc_voltage == 380.2
        assert sample.ground_fault_resistance == 6000.0
        assert sample.power_limit == 100.0
        assert sample.total_energy == 12345678.0
        assert sample.temperature == 41.3
        assert sample.inverter_mode == "MPPT"
        assert sample.l1_data.ac_current == 15.1
        assert sample.l1_data.ac_voltage == 233.4
        assert sample.l1_data.ac_frequency == 50.01
        assert sample.l1_data.apparent_power == 3530.0
        assert sample.l1_data.active_power == 3520.5
        assert sample.l1_data.reactive_power == -120.0
        assert sample.l1_data.cos_phi == 1.0

    def test_preserves_sample_order(self) -> None:
        body = make_body(
            make_telemetry("2024-01-01 00:10:00"),
            make_telemetry("2024-01-01 00:00:00"),
            make_telemetry("2024-01-01 00:05:00"),
        )

        dates = [s.date for s in decode(body).data.telemetries]

        assert dates == ["2024-01-01 00:10:00", "2024-01-01 00:00:00", "2024-01-01 00:05:00"]

    def test_empty_telemetries(self) -> None:
        response = decode(b'{"data": {"count": 0, "telemetries": []}}')

        assert response.data.count == 0
        assert response.data.telemetries == []

    def test_accepts_str_input(self) -> None:
        response = decode(make_body(make_telemetry()).decode("utf-8"))

        assert len(response.data.telemetries) == 1

    def test_integer_values_accepted_for_float_fields(self) -> None:
        body = make_body(make_telemetry(totalActivePower=0, temperature=40))

        sample = decode(body).data.telemetries[0]

        assert sample.total_active_power == 0.0
        assert sample.temperature == 40.0


class TestDecodeDefaults:
    """Absent and null keys decode to zero values."""

    def test_missing_keys_default_to_zero(self) -> None:
        body = json.dumps({"data": {"telemetries": [{"date": "2024-01-01 00:00:00"}]}})

        response = decode(body)

        assert response.data.count == 0
        sample = response.data.telemetries[0]
        assert sample.total_active_power == 0.0
        assert sample.inverter_mode == ""
        assert sample.l1_data.cos_phi == 0.0

    def test_null_values_treated_as_absent(self) -> None:
        body = make_body(make_telemetry(dcVoltage=None, inverterMode=None, L1Data=None))

        sample = decode(body).data.telemetries[0]

        assert sample.dc_voltage == 0.0
        assert sample.inverter_mode == ""
        assert sample.l1_data.ac_current == 0.0

    def test_missing_date_defaults_to_empty_string(self) -> None:
        sample = make_telemetry()
        del sample["date"]

        decoded = decode(make_body(sample)).data.telemetries[0]

        assert decoded.date == ""

    def test_missing_data_object(self) -> None:
        response = decode(b"{}")

        assert response.data.telemetries == []

    def test_null_telemetry_entry_decodes_to_zeroed_sample(self) -> None:
        body = b'{"data": {"count": 2, "telemetries": [null, {"date": "2024-01-01 00:00:00"}]}}'

        telemetries = decode(body).data.telemetries

        assert len(telemetries) == 2
        assert telemetries[0].date == ""
        assert telemetries[0].total_active_power == 0.0
        assert telemetries[0].l1_data.cos_phi == 0.0
        assert telemetries[1].date == "2024-01-01 00:00:00"


class TestDecodeForwardCompatible:
    """Unknown keys are ignored at every level."""

    def test_unknown_keys_ignored(self) -> None:
        telemetry = make_telemetry(vL1To2=400.0, operationMode=0)
        telemetry["L1Data"]["phaseShift"] = 0.5
        body = json.dumps(
            {
                "data": {"count": 1, "telemetries": [telemetry], "unit": "W"},
                "version": "1.0",
            }
        )

        sample = decode(body).data.telemetries[0]

        assert sample.total_active_power == 3520.5
        assert not hasattr(sample, "vL1To2")


class TestDecodeErrors:
    """Malformed or incompatible payloads raise DecodeError."""

    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"not json",
            b'{"data": ',
            b"[]",
            b'[{"data": {}}]',
            b'"data"',
            b'{"data": []}',
            b'{"data": {"count": "one"}}',
            b'{"data": {"telemetries": {}}}',
            b'{"data": {"telemetries": [{"totalActivePower": "high"}]}}',
            b'{"data": {"telemetries": [{"date": 20240101}]}}',
            b'{"data": {"telemetries": [{"L1Data": [1, 2]}]}}',
            b'{"data": {"telemetries": [{"totalActivePower": "12.5"}]}}',
            b'{"data": {"telemetries": [{"totalActivePower": true}]}}',
            b'{"data": {"count": "3"}}',
            b'{"data": {"count": 3.0}}',
            b'{"data": {"telemetries": [{"L1Data": {"cosPhi": "1"}}]}}',
            b'{"data": {"telemetries": [{"inverterMode": 4}]}}',
        ],
    )
    def test_raises_decode_error(self, raw: bytes) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode(raw)

        assert isinstance(exc_info.value.__cause__, ValidationError)
