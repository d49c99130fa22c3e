"""
Error translation boundary.

Every failure that escapes an endpoint ends up here and becomes an ErrorRecord:

- composite failures (exception groups from asyncio/anyio task groups) are
  unwrapped to their first leaf before anything else, so the group type never
  reaches the client
- the status is 500 unless the unwrapped failure carries a client-intended one
  (ServiceError.http_status(), HTTPException.status_code, 422 for request parsing)
- `error` is only filled when the failure carries a message

The translator is pure: no retries, no store access, and it never raises.
"""
import logging

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from fruit_api.exceptions.base import ServiceError
from fruit_api.schemas.error import ErrorRecord

logger = logging.getLogger(__name__)

DEFAULT_STATUS = 500


def unwrap_failure(exc: BaseException) -> BaseException:
    """
    Follow nested exception groups down to their first leaf exception.
    """
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    return exc


def status_of(exc: BaseException) -> int:
    if isinstance(exc, ServiceError):
        return exc.http_status()
    if isinstance(exc, HTTPException):
        return exc.status_code
    if isinstance(exc, RequestValidationError):
        return 422
    return DEFAULT_STATUS


def _validation_message(exc: RequestValidationError) -> str | None:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or None


def message_of(exc: BaseException) -> str | None:
    """
    The human message carried by `exc`, or None when it was raised without one.
    """
    try:
        if isinstance(exc, ServiceError):
            return exc.message
        if isinstance(exc, HTTPException):
            return None if exc.detail is None else str(exc.detail)
        if isinstance(exc, RequestValidationError):
            return _validation_message(exc)
        if not exc.args:
            return None
        return str(exc) or None
    except Exception:
        # a broken __str__ must not turn into a second failure
        logger.debug("translator.message_unavailable", extra={"exception_type": type(exc).__name__})
        return None


class ErrorTranslator:
    """
    Turn a failure raised while serving `request_path` into an ErrorRecord.
    """

    def translate(self, exc: BaseException, request_path: str) -> ErrorRecord:
        failure = unwrap_failure(exc)
        code = status_of(failure)
        record = ErrorRecord(
            exception_type=type(failure).__name__,
            code=code,
            request_path=request_path,
            error=message_of(failure),
        )
        self._log(exc, failure, record)
        return record

    def _log(self, exc: BaseException, failure: BaseException, record: ErrorRecord) -> None:
        extra = {
            "status_code": record.code,
            "exception_type": record.exception_type,
            "request_path": record.request_path,
        }
        if isinstance(failure, ServiceError):
            # fields and error code, never the constraint name
            extra["error_payload"] = failure.to_payload()
        if record.code >= 500:
            logger.error("Failed to handle request", exc_info=exc, extra=extra)
        else:
            logger.info("request.rejected", extra=extra)
