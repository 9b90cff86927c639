"""Utility helpers (UTC datetimes, id generation)."""

from task_manager.shared.utils.datetime import ensure_utc, utc_now
from task_manager.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
