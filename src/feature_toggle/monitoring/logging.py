"""Logging setup for feature-toggle, with an optional JSON formatter."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from feature_toggle.config import MonitoringConfig

# Attributes callers may attach with ``extra=`` that are copied into JSON output.
_EXTRA_FIELDS = ("flag", "source", "cached")


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(cfg: MonitoringConfig) -> None:
    """Configure the root logger from monitoring config.

    Structured mode replaces the root handlers with JSON output on stderr and,
    when ``cfg.log_file`` is set, the same JSON in that file.
    """
    level = logging.getLevelName(cfg.level)
    if not cfg.structured_logging:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
        return

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter = JSONFormatter()
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if cfg.log_file is not None:
        log_file = Path(cfg.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file))
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
