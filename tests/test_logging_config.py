"""Tests for structured logging configuration."""

import json
import logging

import structlog

from cli.logging_config import _redact_sensitive, setup_logging


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_console_mode(self, capsys):
        """Console mode renders to stderr without error."""
        setup_logging(json_mode=False, level="DEBUG")
        structlog.get_logger().info("turn_completed", branch="wellbeing")
        captured = capsys.readouterr()
        assert "turn_completed" in captured.err

    def test_level_filtering(self):
        setup_logging(json_mode=False, level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_log_file_receives_json(self, tmp_path):
        log_file = tmp_path / "logs" / "peacepulse.log"
        setup_logging(json_mode=False, level="WARNING", log_file=log_file)
        structlog.get_logger().debug("stress_recorded", level="high")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text().strip().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "stress_recorded"
        assert record["level"] == "debug"

        logging.getLogger().handlers.clear()


class TestRedaction:
    def test_redacts_anthropic_key(self):
        out = _redact_sensitive(None, None, {"error": "bad key sk-ant-REDACTED"})
        assert "REDACTED" in out["error"]
        assert "qrstuvwxyz" not in out["error"]

    def test_redacts_google_key(self):
        out = _redact_sensitive(None, None, {"error": "key AIzaSyA1234567890abcdefghijklmnop"})
        assert "REDACTED" in out["error"]

    def test_redacts_email(self):
        out = _redact_sensitive(None, None, {"event": "user jane@example.com"})
        assert out["event"] == "user REDACTED@email"

    def test_non_strings_untouched(self):
        out = _redact_sensitive(None, None, {"count": 3})
        assert out["count"] == 3
