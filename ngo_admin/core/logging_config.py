"""
Logging setup for the admin service

Application code logs through structlog (``structlog.get_logger()``) with
snake_case event names such as ``record_created`` and keyword context
(entity, id, fields). structlog renders each event to JSON and hands it to
the stdlib root logger, which writes to the console and, when file logging
is on, to rotating files under ``LOG_DIR``:

- app.log: everything at the configured level
- error.log: errors only
- access.log: one line per HTTP request, written by ``request_logger``
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

import structlog

MB = 1024 * 1024

# Attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRIBUTES = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "PIL": logging.INFO,
}


class LogFile(NamedTuple):
    filename: str
    level: Optional[int]
    max_bytes: int
    backups: int


APP_LOG = LogFile("app.log", None, 10 * MB, 5)
ERROR_LOG = LogFile("error.log", logging.ERROR, 10 * MB, 10)
ACCESS_LOG = LogFile("access.log", logging.INFO, 50 * MB, 7)


class JSONLineFormatter(logging.Formatter):
    """One JSON object per line, including any ``extra`` fields of the record"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _rotating_handler(log_dir: Path, log_file: LogFile, default_level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_dir / log_file.filename,
        maxBytes=log_file.max_bytes,
        backupCount=log_file.backups,
        encoding="utf-8",
    )
    handler.setLevel(log_file.level if log_file.level is not None else default_level)
    handler.setFormatter(JSONLineFormatter())
    return handler


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging(log_level: str = "INFO", log_dir: str = "logs", file_logging: bool = True) -> None:
    """
    Configure structlog and the stdlib handlers.

    Safe to call again: existing root and access handlers are replaced,
    so tests can switch file logging on and off.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    _configure_structlog()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(console)

    access = logging.getLogger("access")
    access.setLevel(logging.INFO)
    access.propagate = not file_logging
    for handler in access.handlers[:]:
        access.removeHandler(handler)
        handler.close()

    if file_logging:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating_handler(path, APP_LOG, level))
        root.addHandler(_rotating_handler(path, ERROR_LOG, level))
        access.addHandler(_rotating_handler(path, ACCESS_LOG, level))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


class RequestLogger:
    """Writes the access log line for one finished request"""

    def __init__(self, logger_name: str = "access"):
        self.logger = logging.getLogger(logger_name)

    def log_request(self, method: str, path: str, status_code: int, response_time: float, request_id: str = "") -> None:
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        self.logger.log(
            level,
            "%s %s %s %.3fs", method, path, status_code, response_time,
            extra={
                "method": method,
                "endpoint": path,
                "status_code": status_code,
                "response_time": round(response_time, 4),
                "request_id": request_id,
            },
        )


request_logger = RequestLogger()
