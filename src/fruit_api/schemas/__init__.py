from .fruit import FruitPayload, FruitRead
from .error import ErrorRecord

__all__ = ["FruitPayload", "FruitRead", "ErrorRecord"]
