"""
structlog setup for the admin client.

Every event is written to stdout as one JSON object. Modules obtain their
logger through ``get_logger(__name__)``; the dotted module name is emitted
under ``logger`` and the service and environment are attached to every event,
so a cascade run can be followed across scanner, resolver and dispatcher.
"""

from __future__ import annotations

import logging

import structlog

from .config import settings

SERVICE_NAME = "sports-admin"


def _normalize_log_level(level: str | None, environment: str) -> int:
    env = environment.lower()
    if level:
        normalized = level.strip().upper()
    else:
        normalized = "INFO" if env == "production" else "DEBUG"
    return logging._nameToLevel.get(normalized, logging.INFO)


def _add_service_context(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def configure_logging(level: str | None = None) -> None:
    """Install the JSON processor chain. ``level`` takes precedence over LOG_LEVEL."""
    resolved_level = _normalize_log_level(level or settings.log_level, settings.environment)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_service_context,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.EventRenamer("message"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    return structlog.get_logger(name).bind(logger=name)


configure_logging()
