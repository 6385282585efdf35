"""structlog configuration for the command line entry point.

Library code only calls ``structlog.get_logger()``; configuring output is
left to the application, which the CLI does through ``setup_logging``.
"""

from __future__ import annotations

import sys

import structlog

from .config import Choices, config

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

_LEVEL_MAP = {"debug": 10, "info": 20, "warning": 30, "error": 40, "critical": 50}


def setup_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog, reading missing arguments from config.

    Args:
        level: Minimum level name; defaults to ``SHEETGUARD_LOG_LEVEL`` / ``log_level``
            or ``warning``
        json: Render JSON lines instead of the console renderer; defaults to
            ``SHEETGUARD_LOG_JSON`` / ``log_json`` or ``False``
    """
    if level is None:
        level = config(
            "log_level",
            env="SHEETGUARD_LOG_LEVEL",
            default="warning",
            cast=Choices(LOG_LEVELS, cast=lambda v: str(v).strip().lower()),
        )
    if json is None:
        json = config("log_json", env="SHEETGUARD_LOG_JSON", default=False, cast=bool)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_LEVEL_MAP.get(level.lower(), 30)),
        context_class=dict,
        # Diagnostics go to stderr so stdout stays parseable
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
