"""Structured logging for the Mailgun REST client.

Events go through structlog into the stdlib ``logging`` tree on stderr, so
command output on stdout stays clean. Credentials are masked before any
renderer sees an event.
"""

import logging
import sys
from typing import Any, Mapping

import structlog
from structlog.types import EventDict, Processor


REDACTED = "[REDACTED]"

# Event keys whose values are always masked, compared case-insensitively
SENSITIVE_KEYS = frozenset({"authorization", "api_key", "headers"})


def _mask(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, Mapping):
        return {k: _mask(str(k), v) for k, v in value.items()}
    return value


def redact_credentials(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask the API key, Authorization values and header maps in an event."""
    for key in list(event_dict):
        event_dict[key] = _mask(key, event_dict[key])
    return event_dict


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Route client logs through structlog.

    Args:
        log_level: Threshold for the stdlib root logger (DEBUG, INFO, ...)
        log_format: ``json`` for machine-readable lines, anything else for
            the coloured console renderer
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # Transport libraries log request lines of their own
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_credentials,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
