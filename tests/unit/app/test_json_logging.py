"""Unit tests for lead_capture.app.core.logging."""

from __future__ import annotations

import json
import logging
import sys

from lead_capture.app.core.logging import JsonFormatter, setup_logging


def _record(**kw) -> logging.LogRecord:
    return logging.LogRecord(
        name=kw.pop("name", "test.logger"),
        level=kw.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kw.pop("msg", "Test message"),
        args=(),
        exc_info=kw.pop("exc_info", None),
    )


class TestJsonFormatter:
    """Tests for JsonFormatter class."""

    def test_formats_as_json(self):
        """Should format log records as JSON."""
        parsed = json.loads(JsonFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test.logger"
        assert parsed["message"] == "Test message"
        assert "time" in parsed
        assert "event" not in parsed
        assert "http" not in parsed

    def test_groups_http_context(self):
        record = _record()
        record.http_method = "POST"
        record.path = "/api/users"
        record.status_code = 400

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["http"] == {"method": "POST", "path": "/api/users", "status": 400}
        assert "event" not in parsed

    def test_extra_fields_land_under_event(self):
        record = _record()
        record.lead_id = "65f0c0ffee"
        record.request_id = "abc-123"

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["event"] == {"lead_id": "65f0c0ffee"}
        assert parsed["request_id"] == "abc-123"

    def test_includes_exception_info(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["error"]["type"] == "ValueError"
        assert parsed["error"]["message"] == "Test error"
        assert "Traceback" in parsed["error"]["stack"]

    def test_truncates_long_stacks(self, monkeypatch):
        monkeypatch.setenv("LOG_STACK_LIMIT", "20")
        try:
            raise ValueError("x" * 200)
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["error"]["stack"].endswith("...(truncated)")
        assert len(parsed["error"]["stack"]) == 20 + len("...(truncated)")


class TestSetupLogging:
    def test_plain_and_debug_outside_production(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_FORMAT", raising=False)

        setup_logging()

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_json_and_info_in_production(self, monkeypatch):
        from lead_capture.app.core.env import get_env

        monkeypatch.setenv("APP_ENV", "prod")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        get_env.cache_clear()

        setup_logging()

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        setup_logging(level="warning", fmt="json")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_pymongo_noise_is_capped(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("pymongo").level == logging.WARNING
