# src/fruit_api/core/logging/middleware.py
"""
Request ID middleware.

Takes the incoming `X-Request-ID` header (or generates a UUID4), stores it in the
request-id contextvar for the duration of the request so every log line emitted
while serving it carries the id, and adds it to the response start message.

Plain ASGI rather than BaseHTTPMiddleware: the header is added on the `send`
path, so any response sent from inside this middleware carries it, including
500s produced by the error translation middleware it wraps.
"""

import uuid

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LENGTH = 128


def _accept_incoming(value: str | None) -> str | None:
    # reject values that could forge log lines or bloat every record
    if not value or len(value) > _MAX_REQUEST_ID_LENGTH or not value.isprintable():
        return None
    return value


class RequestIDMiddleware:

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = _accept_incoming(Headers(scope=scope).get(REQUEST_ID_HEADER)) or str(uuid.uuid4())

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = rid
            await send(message)

        token = set_request_id(rid)
        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            reset_request_id(token)
