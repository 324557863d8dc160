"""Tests for logging setup and the JSON formatter."""

import json
import logging
import sys
from pathlib import Path

import pytest

from feature_toggle.config import MonitoringConfig
from feature_toggle.monitoring.logging import JSONFormatter, setup_logging


def _record(msg: str = "hello %s", args: tuple = ("world",), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_formats_basic_message(self) -> None:
        data = json.loads(JSONFormatter().format(_record()))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert "timestamp" in data

    def test_formats_exception(self) -> None:
        try:
            raise ValueError("test error")
        except ValueError:
            record = _record("boom", (), sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError" in data["exception"]

    def test_includes_flag_fields(self) -> None:
        record = _record("cached", ())
        record.flag = "flag-a"  # type: ignore[attr-defined]
        record.source = "backend"  # type: ignore[attr-defined]
        record.cached = True  # type: ignore[attr-defined]
        data = json.loads(JSONFormatter().format(record))
        assert data["flag"] == "flag-a"
        assert data["source"] == "backend"
        assert data["cached"] is True

    def test_omits_absent_fields(self) -> None:
        data = json.loads(JSONFormatter().format(_record("plain", ())))
        assert "flag" not in data
        assert "exception" not in data


class TestSetupLogging:
    def test_structured_configures_root_logger(self) -> None:
        setup_logging(MonitoringConfig(structured_logging=True, level="DEBUG"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_structured_writes_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "toggle.log"
        setup_logging(MonitoringConfig(structured_logging=True, log_file=str(log_file)))
        logging.getLogger("test_file_handler").info("file log test", extra={"flag": "flag-a"})
        for handler in logging.getLogger().handlers:
            handler.flush()
        line = log_file.read_text().strip()
        assert json.loads(line)["flag"] == "flag-a"
