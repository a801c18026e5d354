"""Tests for logging setup."""

import logging

import pytest

from pagemodel import Page, SoupNavigator, content, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    """Drop the handlers installed by setup_logging and restore the level."""
    root = logging.getLogger()
    level = root.level
    library_level = logging.getLogger("pagemodel").level
    yield
    logging.getLogger("pagemodel").setLevel(library_level)
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_level(self, restore_root_logger):
        """Test the requested level is applied to the root logger."""
        setup_logging(level="debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        """Test an unknown level name means INFO."""
        setup_logging(level="chatty")

        assert logging.getLogger().level == logging.INFO

    def test_log_file(self, restore_root_logger, tmp_path):
        """Test messages are written to the log file, creating its directory."""
        log_file = tmp_path / "logs" / "pagemodel.log"
        setup_logging(level="INFO", log_file=str(log_file), format_string="%(message)s")

        get_logger("pagemodel.test").info("resolved content")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.read_text().strip() == "resolved content"

    def test_browser_loggers_quietened(self, restore_root_logger):
        """Test browser driver loggers are raised to WARNING."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("playwright").level == logging.WARNING

    def test_resolution_level(self, restore_root_logger, tmp_path):
        """Test content resolution can be traced while the root stays at INFO."""
        log_file = tmp_path / "resolution.log"
        setup_logging(
            level="INFO",
            log_file=str(log_file),
            format_string="%(name)s %(message)s",
            resolution_level="DEBUG",
        )

        class HeadingPage(Page):
            heading = content(lambda s: s.find("h1"))

        page = HeadingPage(SoupNavigator.from_html("<h1>Title</h1>"))
        page.heading
        page.heading
        get_logger("application").debug("hidden")
        for handler in logging.getLogger().handlers:
            handler.flush()

        logged = log_file.read_text()
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("pagemodel").level == logging.DEBUG
        assert "Resolving 'heading' of HeadingPage" in logged
        assert "Cache hit for 'heading'" in logged
        assert "hidden" not in logged

    def test_resolution_level_defaults_to_root(self, restore_root_logger):
        """Test the pagemodel loggers follow the root level when not set."""
        logging.getLogger("pagemodel").setLevel(logging.DEBUG)
        setup_logging(level="WARNING")

        assert logging.getLogger("pagemodel").getEffectiveLevel() == logging.WARNING


def test_get_logger():
    """Test get_logger returns the named logger."""
    assert get_logger("pagemodel.engine") is logging.getLogger("pagemodel.engine")
