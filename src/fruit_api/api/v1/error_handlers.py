"""
Exception handlers that send every failure escaping an endpoint through the
ErrorTranslator.

One handler is registered for each failure family FastAPI dispatches on, and
UnhandledErrorMiddleware catches everything else; all of them produce the
same body shape:

    {"exceptionType": "DuplicateError", "code": 500, "requestPath": "/fruits",
     "error": "Fruit already exists for field(s): name"}
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from fruit_api.exceptions.base import ServiceError
from fruit_api.exceptions.translator import ErrorTranslator, unwrap_failure


def error_response(translator: ErrorTranslator, exc: BaseException, request_path: str) -> JSONResponse:
    record = translator.translate(exc, request_path)
    failure = unwrap_failure(exc)
    # e.g. the Allow header of a 405
    headers = failure.headers if isinstance(failure, StarletteHTTPException) else None
    return JSONResponse(status_code=record.code, content=record.to_body(), headers=headers)


def make_translating_handler(translator: ErrorTranslator):

    async def translate_failure(request: Request, exc: Exception) -> JSONResponse:
        return error_response(translator, exc, request.url.path)

    return translate_failure


class UnhandledErrorMiddleware:
    """
    Translate failures no registered handler took (plain exceptions, exception
    groups) into the error response.

    Installed inside RequestIDMiddleware, so the request id is still set when
    the translator logs the failure and the response gets the X-Request-ID
    header. If the response has already started, the failure is re-raised to
    the server.
    """

    def __init__(self, app: ASGIApp, translator: ErrorTranslator) -> None:
        self.app = app
        self.translator = translator

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except Exception as exc:
            if response_started:
                raise
            response = error_response(self.translator, exc, Request(scope).url.path)
            await response(scope, receive, send)


def register_exception_handlers(app: FastAPI, translator: ErrorTranslator | None = None) -> None:
    handler = make_translating_handler(translator or ErrorTranslator())
    app.add_exception_handler(ServiceError, handler)
    app.add_exception_handler(StarletteHTTPException, handler)
    app.add_exception_handler(RequestValidationError, handler)
    # last resort for failures outside UnhandledErrorMiddleware; Starlette runs it
    # in ServerErrorMiddleware, which re-raises to the server afterwards
    app.add_exception_handler(Exception, handler)
