"""
Single import point for the ORM models, so `from fruit_api.models import Fruit`
also registers every table on Base.metadata.
"""

from .fruit import Fruit

__all__ = [
    "Fruit",
]
