"""
Collector package for SolarEdge inverter telemetry.

Queries the SolarEdge monitoring API for a trailing window of inverter
telemetry, decodes the equipment data response, and emits one timestamped
metric point per sample to a downstream sink.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

DESCRIPTION = "Read SolarEdge Inverter data"
