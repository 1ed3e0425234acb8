"""
Structured logging for the admin API.

Every log line carries the request id and, once a bearer token has been
resolved, the id of the acting admin. Values under credential-like keys are
masked before rendering.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
admin_id_ctx: ContextVar[str | None] = ContextVar("admin_id", default=None)

REDACTED = "[REDACTED]"
SECRET_FIELDS = frozenset(
    {"password", "password_confirmation", "token", "access_token", "api_token", "authorization"}
)


def add_request_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    _ = logger, method_name

    if request_id := request_id_ctx.get():
        event_dict.setdefault("request_id", request_id)
    if admin_id := admin_id_ctx.get():
        event_dict.setdefault("admin_id", admin_id)
    return event_dict


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    _ = logger, method_name

    for key in SECRET_FIELDS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Route structlog through stdlib logging on stdout.

    Console rendering in debug mode, one JSON object per line otherwise.
    ``level`` defaults to ``settings.log_level`` (DEBUG when ``debug``).
    """
    if level is None:
        from .config import settings

        level = "DEBUG" if debug else settings.log_level

    logging.basicConfig(
        level=logging.getLevelName(level.upper()),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer = structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_request_context(request_id: str | None = None) -> str:
    """Start the log context for a request, returning its id."""
    request_id = request_id or uuid.uuid4().hex[:16]
    request_id_ctx.set(request_id)
    admin_id_ctx.set(None)
    return request_id


def bind_admin_id(admin_id: int | str | None) -> None:
    """Attach the authenticated admin to the current request's log context."""
    admin_id_ctx.set(str(admin_id) if admin_id is not None else None)


def clear_request_context() -> None:
    request_id_ctx.set(None)
    admin_id_ctx.set(None)
