"""
Fruit-specific store operations on top of BaseRepository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from fruit_api.models.fruit import Fruit
from .base_repository import BaseRepository


class FruitRepository(BaseRepository[Fruit]):

    def __init__(self, db: AsyncSession):
        super().__init__(Fruit, db)

    async def create_fruit(self, name: str) -> Fruit:
        return await self.create(name=name)

    async def list_by_name(self) -> list[Fruit]:
        """All fruits, ascending by name."""
        return await self.get_all(order_by="name")
