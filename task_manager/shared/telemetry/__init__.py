"""Shared telemetry: logging setup and OpenTelemetry config."""

from task_manager.shared.telemetry.logging import setup_logging
from task_manager.shared.telemetry.telemetry import TelemetryConfig

__all__ = ["setup_logging", "TelemetryConfig"]
