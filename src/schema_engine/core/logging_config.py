"""
Structured Logging Configuration
Engine logging with structlog, scoped to the ``schema_engine`` logger tree.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from ..version import __version__

ROOT_LOGGER = "schema_engine"


def _add_engine_version(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    event_dict.setdefault("engine_version", __version__)
    return event_dict


def _build_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configure structured logging for the engine.

    The engine is a library, so only the ``schema_engine`` logger is touched;
    the host application's root logger keeps its own setup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to settings
        json_logs: Emit one JSON object per line; defaults to settings
    """
    if level is None or json_logs is None:
        from .config import get_settings

        settings = get_settings()
        level = level or settings.log_level
        json_logs = settings.json_logs if json_logs is None else json_logs

    log_level = getattr(logging, level.upper(), logging.INFO)

    engine_logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(engine_logger.handlers):
        engine_logger.removeHandler(existing)
    engine_logger.addHandler(_build_handler(json_logs))
    engine_logger.setLevel(log_level)
    engine_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _add_engine_version,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for a module (pass ``__name__``)."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind keys to every log line emitted in scope.

    Nesting is safe: leaving an inner context restores the outer values
    instead of dropping them.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self._tokens: Any = None

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
