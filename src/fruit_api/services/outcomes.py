"""
Explicit results of handler operations.

A handler returns an Outcome for every expected result, including "no such
fruit". Only failures (bad input, store errors) are raised, and those go
through the ErrorTranslator.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutcomeKind(str, Enum):
    OK = "ok"
    CREATED = "created"
    DELETED = "deleted"
    NOT_FOUND = "not_found"


STATUS_BY_KIND = {
    OutcomeKind.OK: 200,
    OutcomeKind.CREATED: 201,
    OutcomeKind.DELETED: 204,
    OutcomeKind.NOT_FOUND: 404,
}


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    body: Any = None

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @property
    def has_body(self) -> bool:
        return self.kind in (OutcomeKind.OK, OutcomeKind.CREATED)

    @classmethod
    def ok(cls, body: Any) -> "Outcome":
        return cls(OutcomeKind.OK, body)

    @classmethod
    def created(cls, body: Any) -> "Outcome":
        return cls(OutcomeKind.CREATED, body)

    @classmethod
    def deleted(cls) -> "Outcome":
        return cls(OutcomeKind.DELETED)

    @classmethod
    def not_found(cls) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND)
