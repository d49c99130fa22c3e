from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fruit_api.database.base import Base

NAME_MAX_LENGTH = 40


class Fruit(Base):
    """
    SQLAlchemy model for Fruit.

    `id` is assigned by the store on insert and never changes afterwards;
    `name` is the only mutable attribute.
    """
    __tablename__ = "fruits"
    # AUTOINCREMENT on SQLite so ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        unique=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Fruit(id={self.id!r}, name={self.name!r})>"
