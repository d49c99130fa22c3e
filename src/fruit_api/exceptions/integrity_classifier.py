"""
Classify SQLAlchemy IntegrityErrors by the kind of constraint that failed.

The kinds are internal labels used by mapper.py to pick the app-level exception;
they are never raised. Postgres drivers expose a SQLSTATE (`pgcode` on psycopg,
`sqlstate` on asyncpg), which is preferred; other backends fall back to message
heuristics.
"""
import logging
from enum import Enum
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
SQLSTATE_TO_KIND = {
    "23505": ConstraintKind.UNIQUE,
    "23502": ConstraintKind.NOT_NULL,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23514": ConstraintKind.CHECK,
}

_MESSAGE_KEYWORDS = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)


def _sqlstate_of(orig) -> str | None:
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code
    # asyncpg errors arrive wrapped by the SQLAlchemy adapter; the driver error is __cause__
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "sqlstate", None) if cause is not None else None


def _constraint_name_of(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        return getattr(diag, "constraint_name", None)
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "constraint_name", None) if cause is not None else None


def _classify_from_sqlstate(orig) -> tuple[ConstraintKind | None, str | None]:
    sqlstate = _sqlstate_of(orig)
    if not sqlstate:
        return None, None

    constraint_name = _constraint_name_of(orig)
    kind = SQLSTATE_TO_KIND.get(sqlstate)
    if kind is not None:
        logger.debug("integrity.sqlstate", extra={"sqlstate": sqlstate, "constraint_name": constraint_name})
        return kind, constraint_name

    logger.warning("integrity.unknown_sqlstate", extra={"sqlstate": sqlstate, "constraint_name": constraint_name})
    return ConstraintKind.UNKNOWN, constraint_name


def _classify_from_message(msg: str) -> ConstraintKind:
    normalized = (msg or "").lower()
    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind

    logger.warning("integrity.unknown_message", extra={"message_snippet": (msg or "")[:200]})
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Returns:
        (kind, constraint name if the driver reported one)
    """
    orig = exc.orig

    kind, constraint_name = _classify_from_sqlstate(orig)
    if kind is not None:
        return kind, constraint_name

    return _classify_from_message(str(orig) if orig is not None else str(exc)), None
