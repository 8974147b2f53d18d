"""
Plunk Client Logging
--------------------
Structured logging with request_id propagation so every line emitted
during one API call can be correlated.

Design:
- Every client call gets a unique request_id
- request_id propagates through: Client -> Transport
- Console output via Rich, optional file output as JSON lines
- Severity discipline: DEBUG=wire traffic, WARNING=API error, ERROR=abort

Nothing is configured on import. Applications opt in:

    from plunk.infra.logging import configure_logging, get_logger

    configure_logging(level=logging.DEBUG)
    logger = get_logger("app")
"""

import contextvars
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER = "plunk"

# Context variable for request_id - async-safe
_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return _request_id_var.get()


class RequestContext:
    """
    Context manager for request scoping.

    Usage:
        with RequestContext() as request_id:
            logger.info("Calling API...")
    """

    def __init__(self, request_id: Optional[str] = None):
        self._request_id = request_id or generate_request_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = _request_id_var.set(self._request_id)
        return self._request_id

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds request_id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured file logging."""

    EXTRA_FIELDS = ("method", "url", "status_code", "error_kind")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in self.EXTRA_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


_logging_initialized = False


def configure_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    console: bool = True,
    file: bool = False,
    force: bool = False,
) -> None:
    """
    Configure the plunk logger hierarchy.

    Args:
        level: Logging level (default INFO)
        log_dir: Directory for the JSON log file (default: ./logs)
        console: Enable Rich console output
        file: Enable JSON file output
        force: Reconfigure even if already configured
    """
    global _logging_initialized

    if _logging_initialized and not force:
        return

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    request_filter = RequestIdFilter()

    if console:
        console_handler = RichHandler(rich_tracebacks=True, show_path=False)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("[%(request_id)s] %(name)s: %(message)s"))
        console_handler.addFilter(request_filter)
        root_logger.addHandler(console_handler)

    if file:
        log_path = Path(log_dir) if log_dir else Path("logs")
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / "plunk.log", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(request_filter)
        root_logger.addHandler(file_handler)

    _logging_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger in the plunk namespace.

    Args:
        name: Logger name (prefixed with 'plunk.' if not already)
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"

    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
