# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

import pytest
from path_scout.logger import LOGGER_NAME, configure, logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure(level="WARNING")


def test_file_handler_receives_records(tmp_path):
    log_file = tmp_path / "scan.log"
    configure(level="DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s")

    logger.debug("Trying: %s", "http://x/admin")
    for handler in logger.handlers:
        handler.flush()

    assert "DEBUG Trying: http://x/admin" in log_file.read_text(encoding="utf-8")
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def test_reconfigure_replaces_handlers():
    configure(level="INFO")
    configure(level="ERROR")
    lg = logging.getLogger(LOGGER_NAME)
    assert lg is logger
    assert len(lg.handlers) == 1
    assert lg.level == logging.ERROR
    assert lg.propagate is False


def test_append_handlers(tmp_path):
    configure(level="INFO")
    configure(level="INFO", log_file=tmp_path / "extra.log", replace_handlers=False)
    assert len(logger.handlers) == 3
