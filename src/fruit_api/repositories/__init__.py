"""
Repository layer: the store adapter used by the handlers.

Usage:
    from fruit_api.repositories import FruitRepository
"""

from .base_repository import BaseRepository
from .fruit_repository import FruitRepository

__all__ = [
    "BaseRepository",
    "FruitRepository",
]
