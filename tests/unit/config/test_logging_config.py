"""Unit tests for configure_logging."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

from userhub_config import Settings, configure_logging


@contextmanager
def preserved_root_logger() -> Iterator[logging.Logger]:
    """Undo configure_logging's handler replacement after the block."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    app_logger = logging.getLogger("userhub")
    app_level = app_logger.level
    try:
        yield root
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)
        app_logger.setLevel(app_level)


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, db_url="sqlite+aiosqlite://", **overrides)


class TestConfigureLogging:
    def test_console_only_by_default(self):
        with preserved_root_logger() as root:
            configure_logging(_settings(log_level="WARNING"))

            assert len(root.handlers) == 1
            assert root.level == logging.WARNING
            assert logging.getLogger("userhub").level == logging.WARNING
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_writes_all_and_error_files(self, tmp_path):
        with preserved_root_logger() as root:
            configure_logging(_settings(log_dir=tmp_path / "logs"))

            log = logging.getLogger("userhub.test")
            log.info("hello info")
            log.error("hello error")
            for handler in root.handlers:
                handler.flush()

            all_log = tmp_path / "logs" / f"all-{date.today().isoformat()}.log"
            error_log = tmp_path / "logs" / "error.log"
            assert "hello info" in all_log.read_text()
            assert "hello error" in all_log.read_text()
            assert "hello info" not in error_log.read_text()
            assert "hello error" in error_log.read_text()

    def test_production_console_not_below_info(self):
        with preserved_root_logger() as root:
            configure_logging(_settings(environment="production", log_level="DEBUG"))

            assert root.handlers[0].level == logging.INFO

    def test_reconfigure_replaces_handlers(self):
        with preserved_root_logger() as root:
            configure_logging(_settings())
            configure_logging(_settings())

            assert len(root.handlers) == 1
