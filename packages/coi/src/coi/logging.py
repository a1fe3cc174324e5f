"""Logging configuration for coi."""

import logging
import os

import structlog


def configure_logging(level: str | None = None, json_output: bool = False) -> None:
    """Configure structlog for the conflict engine.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). If None, reads from
               COI_LOG_LEVEL, then LOG_LEVEL, defaulting to INFO.
        json_output: Render one JSON object per line instead of the
               colored console format (for piping audit events).
    """
    log_level = (
        level
        or os.environ.get("COI_LOG_LEVEL")
        or os.environ.get("LOG_LEVEL", "INFO")
    ).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
