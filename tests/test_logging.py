"""
Tests for logging setup.
"""

import logging
from datetime import date

import pytest
from rich.logging import RichHandler

from sqlexport.utils.logging import (
    LOGGER_NAME,
    FileFormatter,
    _parse_level,
    default_log_file,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestParseLevel:
    @pytest.mark.parametrize(
        "level,expected",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (logging.ERROR, logging.ERROR), ("bogus", logging.INFO)],
    )
    def test_parse_level(self, level, expected):
        assert _parse_level(level) == expected


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_rich_console_handler(self):
        logger = setup_logging(level="DEBUG")
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_plain_console_handler(self):
        logger = setup_logging(use_rich=False)
        assert len(logger.handlers) == 1
        assert type(logger.handlers[0]) is logging.StreamHandler

    def test_repeated_setup_does_not_duplicate(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(log_file=log_file, console_enabled=False)
        get_logger("sqlexport.test").info("hello file")
        for handler in logger.handlers:
            handler.flush()
        content = log_file.read_text()
        assert "hello file" in content
        assert "sqlexport.test" in content

    def test_child_loggers_propagate(self):
        assert get_logger("sqlexport.export").propagate


class TestSetupFromConfig:
    def test_default_dated_file(self, tmp_path):
        logger = setup_logging_from_config({"logging": {"console_enabled": False}}, base_dir=tmp_path)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename.startswith(str(tmp_path / "log"))

    def test_file_disabled(self):
        logger = setup_logging_from_config({"logging": {"file_enabled": False, "console_type": "plain"}})
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)

    def test_flat_config(self, tmp_path):
        logger = setup_logging_from_config({"level": "ERROR", "file": str(tmp_path / "x.log")})
        assert logger.level == logging.ERROR


class TestHelpers:
    def test_default_log_file(self):
        assert default_log_file("log", today=date(2024, 2, 29)).as_posix() == "log/sqlexport-20240229.log"

    def test_file_formatter(self):
        record = logging.LogRecord("sqlexport.x", logging.WARNING, __file__, 1, "careful", None, None)
        text = FileFormatter().format(record)
        assert "[WARNING ]" in text
        assert "sqlexport.x: careful" in text
