"""
Structured Logging

DESIGN DECISION: Every component logs through structlog with snake_case
event names and keyword context, e.g.

    logger.warning("scenario_hydration_corrupted", error="...")

Configuration happens once, on first use, from AppSettings so tests and
the application share the same pipeline.
"""

import logging
import sys
from typing import Optional

import structlog

from property_planner.config import get_settings

_configured = False


def configure_logging(
    level: Optional[str] = None,
    json_logs: Optional[bool] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Minimum level name. Defaults to AppSettings.log_level.
        json_logs: Render JSON lines instead of console output.
                   Defaults to AppSettings.log_json.
    """
    global _configured

    app_settings = get_settings().app
    level = level or app_settings.log_level
    if json_logs is None:
        json_logs = app_settings.log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger, configuring structlog on first call."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
