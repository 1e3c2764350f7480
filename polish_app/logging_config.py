"""JSON logging for the relay and the page, with credentials and user text masked."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Mapping

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}
# Credentials, prompt and reply text, and the free-text form fields.
_REDACT_KEYS = frozenset(
    {"api_key", "x-goog-api-key", "prompt", "text", "raw", "occasion", "mood", "outfit_color"}
)
_API_KEY_PATTERN = re.compile(r"AIza[0-9A-Za-z_\-]{20,}")
_REDACTED = "[redacted]"


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, logger, event, correlation id and extras."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        extras = {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        }
        payload: Dict[str, Any] = redact_for_log(extras)
        payload.update(
            timestamp=self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            level=record.levelname,
            logger=record.name,
            message=_redact_string(message),
            event=extras.get("event", message),
            correlation_id=extras.get("correlation_id") or CORRELATION_ID.get(),
        )
        return json.dumps(payload)


def configure_logging(level: int | str | None = None) -> None:
    """Send root logging to stderr as JSON at ``LOG_LEVEL`` (INFO by default)."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def _redact_string(value: str) -> str:
    return _API_KEY_PATTERN.sub("[redacted-key]", value)


def redact_for_log(payload: Any) -> Any:
    """Mask sensitive keys at any depth and key-shaped substrings in any string."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _redact_string(payload)
    if isinstance(payload, Mapping):
        return {
            key: _REDACTED if str(key).lower() in _REDACT_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact_for_log(item) for item in payload]
    return _redact_string(str(payload))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, installing the JSON handler on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, else keep the current one, else mint a new one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    CORRELATION_ID.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to one request; the previous id is restored after."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted ``fields`` attached as record extras."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={**redact_for_log(fields), "event": event, "correlation_id": correlation_id},
    )


__all__ = [
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
]
