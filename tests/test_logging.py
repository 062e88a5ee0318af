"""Tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from urlguard.config import GuardSettings
from urlguard.logging import (
    HANDLER_NAME,
    Loggers,
    configure_logging,
    get_logger,
    log_context,
)
from urlguard.validation import URLValidator


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore structlog and root logger state after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(level)


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_format(self, capsys):
        """Test JSON output carries event, level, logger name and fields."""
        configure_logging(GuardSettings(log_level="info", log_format="json"))
        Loggers.validation().info("url_blocked", reason="private_host", host="10.0.0.1")

        entries = _json_lines(capsys.readouterr().err)
        assert len(entries) == 1
        assert entries[0]["event"] == "url_blocked"
        assert entries[0]["level"] == "info"
        assert entries[0]["logger"] == "urlguard.validation"
        assert entries[0]["reason"] == "private_host"
        assert "timestamp" in entries[0]

    def test_level_filtering(self, capsys):
        """Test messages below the configured level are dropped."""
        configure_logging(GuardSettings(log_level="warning", log_format="json"))
        log = get_logger("urlguard.test")
        log.info("dropped")
        log.warning("kept")

        events = [e["event"] for e in _json_lines(capsys.readouterr().err)]
        assert events == ["kept"]

    def test_defaults_without_settings(self, capsys):
        """Test default configuration logs warnings to stderr."""
        configure_logging()
        log = get_logger()
        log.info("quiet")
        log.warning("loud")

        err = capsys.readouterr().err
        assert "loud" in err
        assert "quiet" not in err

    def test_reconfigure_replaces_handler(self):
        """Test repeated configuration installs a single stderr handler."""
        configure_logging()
        configure_logging(GuardSettings(log_format="json"))
        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count(HANDLER_NAME) == 1

    def test_stdlib_records_rendered(self, capsys):
        """Test plain stdlib records share the structured output."""
        configure_logging(GuardSettings(log_level="info", log_format="json"))
        logging.getLogger("some.library").warning("plain message")

        (entry,) = _json_lines(capsys.readouterr().err)
        assert entry["event"] == "plain message"
        assert entry["logger"] == "some.library"

    def test_third_party_loggers_quieted(self):
        """Test httpx loggers are raised to WARNING."""
        configure_logging(GuardSettings(log_level="debug"))
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestUnconfiguredLogging:
    """Tests for logging before configure_logging is called."""

    def test_validation_is_silent(self, capsys):
        """Test allow/block decisions print nothing by default."""
        validator = URLValidator(["example.com"])
        validator.validate("https://example.com/")
        validator.validate("https://10.0.0.1/")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_host_logging_config_applies(self, caplog):
        """Test events reach the application's stdlib handlers."""
        validator = URLValidator(["example.com"])
        with caplog.at_level(logging.INFO, logger="urlguard.validation"):
            validator.validate("https://10.0.0.1/")
            validator.validate("https://example.com/")

        records = [r for r in caplog.records if r.name == "urlguard.validation"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "url_blocked" in records[0].getMessage()


class TestLogContext:
    """Tests for log_context."""

    def test_fields_bound_inside_block(self, capsys):
        """Test bound fields appear only inside the block."""
        configure_logging(GuardSettings(log_level="info", log_format="json"))
        log = get_logger("urlguard.test")

        with log_context(tool="web_fetch", method="GET", request_id=None):
            log.info("inside")
        log.info("outside")

        inside, outside = _json_lines(capsys.readouterr().err)
        assert inside["tool"] == "web_fetch"
        assert inside["method"] == "GET"
        assert "request_id" not in inside
        assert "tool" not in outside

    def test_nested_blocks(self, capsys):
        """Test an inner block adds fields and the outer ones are restored."""
        configure_logging(GuardSettings(log_level="info", log_format="json"))
        log = get_logger("urlguard.test")

        with log_context(tool="web_fetch"):
            with log_context(method="POST"):
                log.info("inner")
            log.info("outer")

        inner, outer = _json_lines(capsys.readouterr().err)
        assert inner["tool"] == "web_fetch"
        assert inner["method"] == "POST"
        assert outer["tool"] == "web_fetch"
        assert "method" not in outer
