"""Structured logging configuration using structlog.

Two renderers are supported: ``json`` (one object per line, for pipelines
that collect generator output) and ``console`` (human-readable, for local
chart generation runs).
"""

from __future__ import annotations

import logging
import sys

import structlog

_RENDERERS = ("json", "console")


def setup_logging(level: str = "info", fmt: str = "json") -> None:
    """Configure structlog output to stderr at *level* using renderer *fmt*."""
    if fmt not in _RENDERERS:
        raise ValueError(f"Invalid log format: {fmt}. Must be one of {_RENDERERS}")
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: structlog.types.Processor
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a logger bound with *component*, e.g. ``generator.grouping``."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
