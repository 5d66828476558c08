"""Structured logging for the storefront.

structlog renders on top of stdlib logging so Protean's and uvicorn's own
records land in the same handlers. The environment name picks a profile:
JSON lines for deployed environments, a coloured console otherwise.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

# environment -> (default level, render as JSON)
_PROFILES = {
    "production": ("INFO", True),
    "staging": ("INFO", True),
    "development": ("DEBUG", False),
    "test": ("WARNING", False),
}

_QUIET_LOGGERS = ("protean", "asyncio", "urllib3", "uvicorn.access")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _profile(fallback_level: str) -> tuple[str, bool]:
    level, as_json = _PROFILES.get(_environment(), (fallback_level, False))
    return os.getenv("LOG_LEVEL", level).upper(), as_json


def _rotating(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _install_handlers(level: str, log_dir: str, prefix: str) -> None:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating(directory / f"{prefix}.log", level),
        _rotating(directory / f"{prefix}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(as_json: bool):
    if as_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def configure_logging(level: str = "INFO", log_dir: str = "logs", log_file_prefix: str = "robotech") -> None:
    """Configure stdlib handlers and structlog for the whole process.

    ``level`` applies only when the environment name is not a known profile
    and ``LOG_LEVEL`` is unset.
    """
    resolved_level, as_json = _profile(level)
    _install_handlers(resolved_level, log_dir, log_file_prefix)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(as_json),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind request-scoped values (request id, path) to every later log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
