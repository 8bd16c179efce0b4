"""
Data models for SolarEdge equipment telemetry and emitted metric points.

The pydantic models mirror the JSON returned by the SolarEdge monitoring
API endpoint ``/equipment/{siteId}/{serialNumber}/data``::

    {"data": {"count": 1, "telemetries": [{"date": "...", "L1Data": {...}}]}}

Keys absent from the payload (or sent as ``null``) decode to zero values,
and a ``null`` entry in ``telemetries`` decodes to an all-zero sample.
Unknown keys are ignored. Scalar fields are strict: numbers must be JSON
numbers (integers are accepted for floats), strings must be JSON strings,
so ``"12.5"`` or ``true`` for a number is rejected.

The frozen dataclasses describe what the collector derives from a response:
the trailing query window and the points handed to a sink.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Strict scalar fields; null telemetry entries decode to zeroed samples

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)


class _ApiModel(BaseModel):
    """Base for API payload models: unknown keys ignored, nulls defaulted."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        """Treat ``null`` values like absent keys so defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class L1Data(_ApiModel):
    """Single-phase AC measurements of one telemetry sample."""

    ac_current: StrictFloat = Field(0.0, alias="acCurrent")
    ac_voltage: StrictFloat = Field(0.0, alias="acVoltage")
    ac_frequency: StrictFloat = Field(0.0, alias="acFrequency")
    apparent_power: StrictFloat = Field(0.0, alias="apparentPower")
    active_power: StrictFloat = Field(0.0, alias="activePower")
    reactive_power: StrictFloat = Field(0.0, alias="reactivePower")
    cos_phi: StrictFloat = Field(0.0, alias="cosPhi")


class TelemetrySample(_ApiModel):
    """One inverter reading.

    Attributes:
        date: Zone-naive ``YYYY-MM-DD HH:MM:SS`` string, local to the site.
        total_active_power: Total active power in W.
        dc_voltage: DC input voltage in V.
        ground_fault_resistance: Ground fault resistance in kOhm.
        power_limit: Active power limit in percent.
        total_energy: Lifetime energy in Wh.
        temperature: Heat sink temperature in degrees Celsius.
        inverter_mode: Operating mode label, e.g. ``"MPPT"``.
        l1_data: Phase 1 AC measurements.
    """

    date: StrictStr = ""
    total_active_power: StrictFloat = Field(0.0, alias="totalActivePower")
    dc_voltage: StrictFloat = Field(0.0, alias="dcVoltage")
    ground_fault_resistance: StrictFloat = Field(0.0, alias="groundFaultResistance")
    power_limit: StrictFloat = Field(0.0, alias="powerLimit")
    total_energy: StrictFloat = Field(0.0, alias="totalEnergy")
    temperature: StrictFloat = 0.0
    inverter_mode: StrictStr = Field("", alias="inverterMode")
    l1_data: L1Data = Field(default_factory=L1Data, alias="L1Data")


class EquipmentData(_ApiModel):
    """The ``data`` object: a sample count and the samples in API order."""

    count: StrictInt = 0
    telemetries: list[TelemetrySample] = Field(default_factory=list)

    @field_validator("telemetries", mode="before")
    @classmethod
    def _null_entries_as_empty(cls, value: Any) -> Any:
        """Decode a ``null`` array entry as an all-defaults sample."""
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value


class TelemetryResponse(_ApiModel):
    """Top-level equipment data response."""

    data: EquipmentData = Field(default_factory=EquipmentData)


@dataclass(frozen=True, slots=True)
class TelemetryWindow:
    """Trailing query window, both ends aware datetimes in the site zone."""

    start_time: datetime
    end_time: datetime


@dataclass(frozen=True, slots=True)
class EmittedPoint:
    """One metric observation handed to a sink.

    Attributes:
        measurement: Measurement name (the configured collector name).
        fields: Field name to numeric or string value.
        tags: Tag name to value. Always empty for equipment telemetry.
        ts: Aware timestamp of the sample.
    """

    measurement: str
    fields: dict[str, float | str]
    ts: datetime
    tags: dict[str, str] = field(default_factory=dict)
