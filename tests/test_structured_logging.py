"""Tests for structured logging and path redaction."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from pathkit import Path as PkPath
from pathkit.config import Settings
from pathkit.logging import DataRedactor, LogLevel, StructuredLogger, create_logger


class TestDataRedactor:
    """Test sensitive data redaction."""

    def test_home_prefix_is_abbreviated(self):
        """Test home directory prefixes are rewritten with a tilde."""
        redactor = DataRedactor(home="/home/kyle")

        assert redactor.redact_string("/home/kyle/project/model.py") == "~/project/model.py"
        assert redactor.redact_string("copy /home/kyle to /srv") == "copy ~ to /srv"
        assert redactor.redact_string("/home/kylie/x") == "/home/kylie/x"

    def test_redact_path(self):
        """Test path-like values are abbreviated on a segment boundary."""
        redactor = DataRedactor(home="/home/kyle")

        assert redactor.redact_path(PkPath("/home/kyle/a")) == "~/a"
        assert redactor.redact_path("/home/kyle") == "~"
        assert redactor.redact_path("/var/log") == "/var/log"

    def test_redact_sensitive_fields(self):
        """Test sensitive field redaction."""
        redactor = DataRedactor(home="/home/kyle")

        data = {
            "token": "abc123def456",
            "password": "secret123",
            "path": "/home/kyle/models/bert.bin",
            "destination": PkPath("/home/kyle/out"),
            "safe_field": "this is safe",
        }

        result = redactor.redact_dict(data)

        assert result["token"] == "[REDACTED]"
        assert result["password"] == "[REDACTED]"
        assert result["path"] == "~/models/bert.bin"
        assert result["destination"] == "~/out"
        assert result["safe_field"] == "this is safe"

    def test_nested_redaction(self):
        """Test nested dictionary and list redaction."""
        redactor = DataRedactor(home="/home/kyle")

        data = {
            "config": {"api_key": "secret123", "root": "/home/kyle/.cache/"},
            "users": [{"name": "john", "token": "user_token_123"}, "/home/kyle/x"],
        }

        result = redactor.redact_dict(data)

        assert result["config"]["api_key"] == "[REDACTED]"
        assert result["config"]["root"] == "~/.cache/"
        assert result["users"][0]["token"] == "[REDACTED]"
        assert result["users"][0]["name"] == "john"
        assert result["users"][1] == "~/x"

    def test_inline_credentials(self):
        redactor = DataRedactor(home="/home/kyle")
        assert redactor.redact_string("token=abcdef123456 ok") == "[REDACTED] ok"

    def test_custom_patterns_and_fields(self):
        redactor = DataRedactor(home="/home/kyle")
        redactor.add_pattern(r"ticket-\d+")
        redactor.add_sensitive_field("Session")

        result = redactor.redact_dict({"note": "see ticket-42", "session": "s"})

        assert result["note"] == "see [REDACTED]"
        assert result["session"] == "[REDACTED]"


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_basic_logging(self, tmp_path):
        """Test basic log entry creation."""
        log_path = tmp_path / "test.jsonl"
        logger = StructuredLogger(
            component="test",
            session_id="test_session",
            output_file=str(log_path),
            enable_console=False,
        )

        logger.info("Test message", test_field="test_value", count=42)
        logger.close()

        entry = json.loads(log_path.read_text().splitlines()[0])

        assert entry["level"] == "info"
        assert entry["component"] == "test"
        assert entry["session_id"] == "test_session"
        assert entry["message"] == "Test message"
        assert entry["test_field"] == "test_value"
        assert entry["count"] == 42
        assert "timestamp" in entry
        assert "iso_timestamp" in entry

    def test_min_level_drops_lower_entries(self):
        buffer = io.StringIO()
        logger = StructuredLogger("test", output_file=buffer, min_level=LogLevel.WARNING)

        logger.debug("dropped")
        logger.info("dropped")
        logger.warning("kept")
        logger.error("kept too")

        levels = [json.loads(line)["level"] for line in buffer.getvalue().splitlines()]
        assert levels == ["warning", "error"]

    def test_console_output(self, capsys):
        logger = StructuredLogger("test", enable_console=True)
        logger.critical("to stdout")

        entry = json.loads(capsys.readouterr().out.strip())
        assert entry["level"] == "critical"

    def test_no_sink_means_disabled(self):
        logger = StructuredLogger("test")
        assert not logger.enabled_for(LogLevel.CRITICAL)

    def test_close_keeps_borrowed_handles_open(self):
        buffer = io.StringIO()
        logger = StructuredLogger("test", output_file=buffer)
        logger.close()
        assert not buffer.closed

    @pytest.mark.parametrize("name, expected", [("ERROR", LogLevel.ERROR), ("bogus", LogLevel.WARNING)])
    def test_level_parsing(self, name, expected):
        assert LogLevel.parse(name) is expected

    def test_create_logger_factory(self, tmp_path):
        """Test logger factory function."""
        logger = create_logger(
            component="factory_test",
            session_id="factory_session",
            log_dir=tmp_path,
            settings=Settings(log_level="info"),
        )

        assert logger.component == "factory_test"
        assert logger.session_id == "factory_session"

        logger.info("Factory test message")
        logger.debug("below threshold")
        logger.close()

        expected_file = Path(tmp_path) / "factory_test_factory_session.jsonl"
        assert expected_file.exists()
        assert len(expected_file.read_text().splitlines()) == 1

    def test_create_logger_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PK_LOG_DIR", str(tmp_path))
        monkeypatch.setenv("PK_LOG_LEVEL", "debug")

        logger = create_logger("env_test")
        logger.debug("hello")
        logger.close()

        assert (tmp_path / "env_test_default.jsonl").exists()
