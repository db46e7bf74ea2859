"""Logging configuration for userhub processes."""

from __future__ import annotations

import logging
import sys
from datetime import date
from typing import TYPE_CHECKING

from userhub_config.settings import get_settings

if TYPE_CHECKING:
    from userhub_config.settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Settings | None = None) -> None:
    """Configure application logging.

    Sets up logging for the userhub application with:
    - Console output with timestamps and module names
    - Configurable log level for userhub modules (from settings)
    - Optional files under ``log_dir``: ``all-YYYY-MM-DD.log`` (INFO and
      above) and ``error.log`` (ERROR and above)
    - WARNING level for noisy third-party libraries

    Safe to call more than once; each call replaces the previous handlers.
    """
    if settings is None:
        settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    if settings.is_production:
        console_handler.setLevel(max(log_level, logging.INFO))
    handlers: list[logging.Handler] = [console_handler]

    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)

        all_handler = logging.FileHandler(
            settings.log_dir / f"all-{date.today().isoformat()}.log",
            encoding="utf-8",
        )
        all_handler.setLevel(logging.INFO)

        error_handler = logging.FileHandler(
            settings.log_dir / "error.log",
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)

        handlers.extend([all_handler, error_handler])

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,  # Override any existing config
    )

    logging.getLogger("userhub").setLevel(log_level)
    logging.getLogger("userhub_config").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
