from __future__ import annotations

import logging
import sys
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars
from structlog.typing import FilteringBoundLogger, Processor

from ordered_map.config import LoggingSettings, get_settings


def configure_logging(settings: LoggingSettings | None = None) -> str:
    """
    Configure structlog for the process and bind a fresh ``run_id``.

    Returns the run id so callers can print or propagate it.
    """
    cfg = settings or get_settings().logging
    level = logging.getLevelName(cfg.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {cfg.level!r}")

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if cfg.json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    run_id = uuid4().hex[:12]
    clear_contextvars()
    bind_contextvars(run_id=run_id)
    return run_id


def get_logger(name: str) -> FilteringBoundLogger:
    # lazy proxy: picks up configure_logging() even when created before it
    return structlog.get_logger(logger_name=name)


__all__ = ["configure_logging", "get_logger"]
