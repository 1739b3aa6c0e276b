"""Unit tests for logging_config module."""

import logging

import pytest

from cms_backend_azure.logging_config import (
    PACKAGE_LOGGER,
    configure_logging,
    level_for_verbosity,
)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo logging changes after each test."""
    app_logger = logging.getLogger(PACKAGE_LOGGER)
    level = app_logger.level
    handlers = list(app_logger.handlers)
    yield
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        app_logger.addHandler(handler)
    app_logger.setLevel(level)


class TestConfigureLogging:
    """Test cases for configure_logging."""

    @pytest.mark.parametrize(
        "verbosity,level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_verbosity_levels(self, verbosity, level):
        assert configure_logging(verbosity).level == level

    def test_root_logger_untouched(self):
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(2)
        assert logging.getLogger().handlers == root_handlers

    def test_reconfigure_does_not_duplicate_handlers(self):
        configure_logging(1)
        app_logger = configure_logging(1)
        assert len(app_logger.handlers) == 1

    def test_logdir_adds_file_handler(self, tmp_path):
        app_logger = configure_logging(1, logdir=str(tmp_path / "logs"))

        file_handlers = [h for h in app_logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        logging.getLogger("cms_backend_azure.backend").info("hello from backend")
        file_handlers[0].flush()

        log_files = list((tmp_path / "logs").glob("cms-backend-azure_*.log"))
        assert len(log_files) == 1
        assert "hello from backend" in log_files[0].read_text(encoding="utf-8")

    def test_file_records_thread_name(self, tmp_path):
        app_logger = configure_logging(2, logdir=str(tmp_path))
        logging.getLogger("cms_backend_azure.media.fetcher").debug("fetching")
        for handler in app_logger.handlers:
            handler.flush()

        (log_file,) = tmp_path.glob("cms-backend-azure_*.log")
        assert "MainThread cms_backend_azure.media.fetcher DEBUG: fetching" in (
            log_file.read_text(encoding="utf-8")
        )


class TestLevelForVerbosity:
    """Test cases for level_for_verbosity."""

    def test_negative_verbosity_is_quiet(self):
        assert level_for_verbosity(-1) == logging.WARNING
