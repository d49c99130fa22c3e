# src/fruit_api/core/logging/formatters.py
"""
Logging formatters.

  - JsonFormatter: one JSON object per line with the standard record fields plus
    service/env/version/request_id and any `extra=` attributes. Used in production
    and for error files.
  - ColorFormatter: compact ANSI-coloured lines for local terminals
    (LOG_FORMAT=text).

The builder (dictConfig) picks one per handler based on settings.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from fruit_api.utils.project import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are either already emitted or only noise
_SKIPPED_RECORD_KEYS = {"args", "msg", "levelname", "name", "exc_info", "exc_text", "stack_info"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Args:
        env: environment name stamped on every record.
        service: logical service name stamped on every record.
        datefmt: passed to logging.Formatter for `formatTime`.

    Non-serializable extras are stringified; `format()` never raises.
    """

    def __init__(self, *, env: str | None = None, service: str = "fruit-api", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for k, v in record.__dict__.items():
            if k in log_record or k.startswith("_") or k in _SKIPPED_RECORD_KEYS:
                continue
            try:
                json.dumps(v)
                log_record[k] = v
            except (TypeError, ValueError):
                log_record[k] = str(v)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Human-friendly formatter: TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE,
    with only the level coloured. Tracebacks are appended on the following lines.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",   # bold cyan on white
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        line = (
            f"{timestamp} | {color}{record.levelname:<10}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'request_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)

        return line
