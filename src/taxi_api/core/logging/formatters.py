import json
import logging
from typing import Any
from logging import LogRecord

from taxi_api.utils.logging import get_project_version, DEFAULT_PROJECT_NAME

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord carries; anything else on the record came from `extra`
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter: one JSON object per line.

    Standard fields (timestamp, level, logger, message, pathname, lineno) plus
    service, env, version and request_id, plus every `extra` key. Values that are
    not JSON-serializable are rendered with str(); formatting never raises.
    """

    def __init__(self, *, env: str | None = None, service: str = DEFAULT_PROJECT_NAME, datefmt: str | None = None):
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
            if k in log_record or k in _RESERVED_ATTRS or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                log_record[k] = v
            except (TypeError, ValueError):
                log_record[k] = str(v)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Human-readable formatter for terminals:

        TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE

    Only the level name is colored.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",    # bold cyan on white
        "INFO": "\033[32m",          # green
        "WARNING": "\033[33m",       # yellow
        "ERROR": "\033[31m",         # red
        "CRITICAL": "\033[1;41m",    # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{record.levelname:<10}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'request_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)
        return base
