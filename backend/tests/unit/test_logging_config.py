"""
Unit tests for logging setup.
"""

import logging
import os

import pytest

from imf_api.logging_config import LOG_FILE_NAME, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Put the root and imf_api loggers back the way pytest left them."""
    root = logging.getLogger()
    app_logger = logging.getLogger("imf_api")
    saved = (root.handlers[:], root.level, app_logger.handlers[:], app_logger.level, app_logger.propagate)

    yield

    for handler in root.handlers + app_logger.handlers:
        if handler not in saved[0] and handler not in saved[2]:
            handler.close()
    root.handlers, root.level = saved[0], saved[1]
    app_logger.handlers, app_logger.level, app_logger.propagate = saved[2], saved[3], saved[4]


def test_writes_to_log_dir(tmp_path):
    log_dir = tmp_path / "logs"

    log_file = setup_logging(log_dir=str(log_dir))

    assert log_file == os.path.join(str(log_dir), LOG_FILE_NAME)
    assert os.path.exists(log_file)


def test_empty_log_dir_is_console_only():
    assert setup_logging(log_dir="") is None


def test_unusable_log_dir_falls_back_to_console(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory")

    assert setup_logging(log_dir=str(blocker / "logs")) is None
    assert logging.getLogger("imf_api").handlers


def test_log_level_applies_to_app_logger():
    setup_logging(log_dir="", log_level="debug")

    assert logging.getLogger("imf_api").level == logging.DEBUG
