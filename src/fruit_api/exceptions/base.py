# fruit_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (ServiceError, ValidationError, StoreError, ...)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific constraint classification
# │   ├── mapper.py                  # Map SQL-level errors to app-level errors, rollback helper
# │   └── translator.py              # Turn any failure into the client-facing error record
"""
App-level exceptions raised by the handler, repository and transaction layers.
"""

from typing import Iterable


class ServiceError(Exception):
    """
    Base exception for handler/repository failures.

    - message: human-friendly message (safe to show to clients)
    - fields: optional field names related to the error (e.g. ['name'])
    - constraint: optional DB constraint name (for logs only)
    - error_code: canonical short code, mapped to an HTTP status by http_status()
    """

    ERROR_CODE_TO_STATUS = {
        "invalid_input": 422,
        # a constraint violation is a store failure, not a client error
        "duplicate": 500,
        "store_failure": 500,
    }
    DEFAULT_STATUS = 500

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    def to_payload(self) -> dict:
        """
        Structured summary for logs. Never contains the constraint name or raw DB text.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, self.DEFAULT_STATUS)
        return self.DEFAULT_STATUS


class ValidationError(ServiceError):
    """Malformed client input, rejected before the store is touched (422)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_input")


class StoreError(ServiceError):
    """Persistence failure: constraint violation, connectivity, commit failure (500)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str = "store_failure"):
        super().__init__(message, fields=fields, constraint=constraint, error_code=error_code)


class DuplicateError(StoreError):
    """Unique constraint violation. Kept distinct for logs and `exceptionType`; still a 500."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


__all__ = [
    "ServiceError",
    "ValidationError",
    "StoreError",
    "DuplicateError",
]
