"""Shared helpers: datetime, identifiers, logging and telemetry."""
