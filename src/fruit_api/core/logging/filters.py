# src/fruit_api/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter stamps every LogRecord with `request_id`, read from a
  contextvar that RequestIDMiddleware sets per request. ContextVar (not
  threading.local) because concurrent requests share the event loop thread.
- RedactFilter masks record attributes whose names look like secrets.

Records without a request in scope get the sentinel "-", so format strings using
%(request_id)s never fail.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id for the current context. Returns the token for reset_request_id().
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee `record.request_id` exists.

    Priority: an explicit `extra={"request_id": ...}` on the call, then the
    contextvar, then "-". Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
