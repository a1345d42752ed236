"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger singleton and logging state between tests."""
    import studyfocus_cli.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None

    existing = logging.getLogger("studyfocus_cli")
    existing.handlers.clear()

    yield

    logger_mod._logger = None
    logging.getLogger("studyfocus_cli").handlers.clear()
    logger_mod._logger = original


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("studyfocus_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from studyfocus_cli.utils.logger import get_logger

        logger = get_logger()

    assert (tmp_path / "studyfocus.log").exists()
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton(tmp_path):
    with patch("studyfocus_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from studyfocus_cli.utils.logger import get_logger

        assert get_logger() is get_logger()


def test_child_logger_writes_to_shared_file(tmp_path):
    """Named loggers are children of the application logger."""
    with patch("studyfocus_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from studyfocus_cli.utils.logger import get_logger

        child = get_logger("focus.engine")
        child.info("session started")

    assert child.name == "studyfocus_cli.focus.engine"
    for handler in logging.getLogger("studyfocus_cli").handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.flush()
    content = (tmp_path / "studyfocus.log").read_text()
    assert "[studyfocus_cli.focus.engine] session started" in content


def test_rotating_handler_configuration(tmp_path):
    with patch("studyfocus_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from studyfocus_cli.utils.logger import get_logger

        logger = get_logger()

    (handler,) = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert handler.maxBytes == 5 * 1024 * 1024
    assert handler.backupCount == 3
    assert logger.propagate is False


def test_file_handler_added_next_to_foreign_handlers(tmp_path):
    """A pre-attached capture handler does not suppress the log file."""
    capture = logging.NullHandler()
    logging.getLogger("studyfocus_cli").addHandler(capture)

    with patch("studyfocus_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from studyfocus_cli.utils.logger import get_logger

        logger = get_logger()
        logger.info("captured and written")

    assert capture in logger.handlers
    rotating = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(rotating) == 1
    rotating[0].flush()
    assert "captured and written" in (tmp_path / "studyfocus.log").read_text()
