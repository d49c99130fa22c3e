from .base import ServiceError, ValidationError, StoreError, DuplicateError
from .translator import ErrorTranslator

__all__ = [
    "ServiceError",
    "ValidationError",
    "StoreError",
    "DuplicateError",
    "ErrorTranslator",
]
