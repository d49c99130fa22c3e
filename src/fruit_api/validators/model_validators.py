"""
Model introspection used by BaseRepository.create() to reject bad input before
the INSERT: missing NOT NULL columns and unique conflicts.
"""
from sqlalchemy import select, and_, UniqueConstraint
from sqlalchemy.ext.asyncio import AsyncSession


def get_required_columns(model) -> list[str]:
    """
    Columns that are NOT NULL, have no client/server default and are not auto-increment PKs.
    """
    cols = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            cols.append(col.name)
    return cols


def get_unique_column_sets(model) -> list[list[str]]:
    """
    Column-name sets covered by Column(unique=True), UniqueConstraint or a unique Index.
    """
    table = model.__table__
    unique_sets = [[col.name] for col in table.columns if col.unique]
    unique_sets += [[c.name for c in con.columns] for con in table.constraints if isinstance(con, UniqueConstraint)]
    unique_sets += [[c.name for c in idx.columns] for idx in table.indexes if idx.unique]
    return unique_sets


async def find_unique_conflicts(db: AsyncSession, model, kwargs: dict) -> set[str]:
    """
    Columns whose provided values already exist in a unique set (best effort:
    a concurrent insert can still win, which the IntegrityError mapping covers).
    """
    conflicts: set[str] = set()

    for cols in get_unique_column_sets(model):
        if not all(c in kwargs for c in cols):
            continue

        conditions = [getattr(model, c) == kwargs[c] for c in cols]
        res = await db.execute(select(model).where(and_(*conditions)).limit(1))
        if res.scalars().first() is not None:
            conflicts.update(cols)

    return conflicts
