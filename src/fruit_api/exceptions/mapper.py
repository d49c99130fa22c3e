import re
import logging
from contextlib import asynccontextmanager
from typing import NoReturn

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import classify_integrity_error, ConstraintKind
from .base import DuplicateError, ServiceError, StoreError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_POSTGRES_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_POSTGRES_KEY = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
_SQLITE_CONSTRAINT = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of the offending column names from the DB message:
      - Postgres: 'null value in column "name" ...' / 'Key (name)=(Apple) already exists.'
      - SQLite:   'UNIQUE constraint failed: fruits.name'
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)

    m = _POSTGRES_NOT_NULL.search(msg)
    if m:
        return [m.group("col")]

    m = _POSTGRES_KEY.search(msg)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = _SQLITE_CONSTRAINT.search(msg)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> NoReturn:
    """
    Raise the app-level exception for an IntegrityError: DuplicateError for unique
    violations, StoreError for everything else. Messages never include raw DB text.
    """
    kind, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    log_extra = {"model": model_part, "fields": columns, "constraint": constraint_name}

    if kind is ConstraintKind.UNIQUE:
        logger.info("mapper.duplicate_detected", extra=log_extra)
        if columns:
            raise DuplicateError(f"{model_part} already exists for field(s): {', '.join(columns)}",
                                 fields=columns, constraint=constraint_name) from exc
        raise DuplicateError(f"{model_part} already exists (unique constraint)",
                             constraint=constraint_name) from exc

    if kind is ConstraintKind.NOT_NULL:
        logger.info("mapper.not_null_violation", extra=log_extra)
        if columns:
            raise StoreError(f"Missing required field(s): {', '.join(columns)} for {model_part}",
                             fields=columns, constraint=constraint_name) from exc
        raise StoreError(f"Missing required field for {model_part}", constraint=constraint_name) from exc

    if kind is ConstraintKind.FOREIGN_KEY:
        logger.info("mapper.foreign_key_violation", extra=log_extra)
        raise StoreError(f"{model_part} foreign key constraint violated",
                         fields=columns, constraint=constraint_name) from exc

    if kind is ConstraintKind.CHECK:
        logger.info("mapper.check_constraint_failure", extra=log_extra)
        raise StoreError(f"{model_part} business rule violated (check constraint)",
                         constraint=constraint_name) from exc

    logger.warning("mapper.unknown_integrity_error", extra=log_extra)
    raise StoreError(f"{model_part} database integrity error") from exc


# -----------------------
# Rollback + mapping around a unit of work
# -----------------------

async def _rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
        logger.debug("transaction.rollback", extra={"model": model_name})
    except SQLAlchemyError:
        # the original failure is the one worth surfacing
        logger.exception("Failed to rollback session", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(session, "Fruit"):
            ... DB ops ...

    Any failure rolls the session back before it propagates:
      - ServiceError passes through unchanged
      - IntegrityError becomes DuplicateError / StoreError
      - any other SQLAlchemyError becomes StoreError
      - everything else is re-raised as is
    """
    try:
        yield
    except ServiceError:
        await _rollback(db, model_name)
        raise
    except IntegrityError as exc:
        await _rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except SQLAlchemyError as exc:
        await _rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise StoreError(f"Failed to operate on {model_name or 'database'}") from exc
    except Exception:
        await _rollback(db, model_name)
        raise
