"""
Theme Presets — Centralized logging setup.
- Daily rotation (TimedRotatingFileHandler), 3 days kept
- Console output as well, so container logs keep working
- Every module obtains its logger through get_logger(__name__)
- LOG_FORMAT=json switches to single-line JSON records (ELK / Loki)
- LOG_LEVEL adjusts the level (default INFO)
"""

import contextvars
import json
import logging
import os
from logging.handlers import TimedRotatingFileHandler

LOG_DIR = os.getenv("LOG_DIR", "/app/data/logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_LOG_FORMAT_ENV = os.getenv("LOG_FORMAT", "text").lower()

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-request correlation id (set by the middleware in main.py)
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default="-"
)

os.makedirs(LOG_DIR, exist_ok=True)

_root_configured = False


class _RequestIdFilter(logging.Filter):
    """Injects the current request_id from context into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        return True


class _JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON for structured log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": self.formatTime(record, LOG_DATE_FORMAT),
            "level": record.levelname,
            "request_id": getattr(record, "request_id", "-"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        error_id = getattr(record, "error_id", None)
        if error_id:
            log_entry["error_id"] = error_id
        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(log_entry, ensure_ascii=False)


def _make_formatter() -> logging.Formatter:
    if _LOG_FORMAT_ENV == "json":
        return _JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT, datefmt=LOG_DATE_FORMAT)


def _configure_root_logger() -> None:
    """Configure the root logger (runs once)."""
    global _root_configured
    if _root_configured:
        return

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)

    formatter = _make_formatter()

    # --- Console Handler ---
    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_RequestIdFilter())
    root.addHandler(console_handler)

    # --- File Handler: daily rotation, 3 days kept ---
    log_file = os.path.join(LOG_DIR, "theme_presets.log")
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=3,
        encoding="utf-8",
        utc=True,
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(formatter)
    file_handler.addFilter(_RequestIdFilter())
    root.addHandler(file_handler)

    # Quiet third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, configuring the root logger on first use."""
    _configure_root_logger()
    return logging.getLogger(name)
