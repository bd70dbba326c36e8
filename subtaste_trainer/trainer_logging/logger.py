"""
Structured logging for the trainer.

Every event is one structlog record with event_type, level, logger, an ISO
UTC timestamp, and whatever context the caller bound (profile_id, set_id, ...).
TrainingSession binds profile_id once through bind_profile() so events from one
training loop can be grouped. Credentials never reach the output: keys such as
api_token or authorization are masked before rendering.

LOG_LEVEL picks the threshold, LOG_FORMAT=json (default) or console the renderer.
Output goes to stderr; the CLI prints its JSON results on stdout.

Only stdlib logging and structlog are imported here, so any trainer module can
import it without cycles.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

ROOT_LOGGER_NAME = "subtaste_trainer"
# profile_id=None targets the account's own genome
ACCOUNT_PROFILE_LABEL = "account"
REDACTED = "***"
_SECRET_KEYS = frozenset({"api_token", "token", "authorization", "bearer"})


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def _redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask credential-like values so a bound settings dict or header never leaks a token."""
    for key in list(event_dict):
        if key.lower() in _SECRET_KEYS and event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def configure_structlog() -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        _redact_secrets,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("cards_drawn", pool_size=80, card_count=1)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_profile(profile_id: str | None, name: str = ROOT_LOGGER_NAME) -> structlog.BoundLogger:
    """
    Return a logger for module name with profile_id bound to every event.

    The account's own genome (profile_id None) is logged as ACCOUNT_PROFILE_LABEL.
    """
    return get_logger(name).bind(profile_id=profile_id or ACCOUNT_PROFILE_LABEL)
