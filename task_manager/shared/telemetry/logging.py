"""Logging configuration, applied once by the lifespan."""

import logging
import sys

from task_manager.core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings) -> None:
    """Send all records to stdout at DEBUG (settings.debug) or INFO.

    SQL statement logging stays controlled by DATABASE_ECHO, so the
    sqlalchemy.engine logger is pinned to WARNING whatever the app level.
    """
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("task_manager.access").setLevel(logging.INFO)
