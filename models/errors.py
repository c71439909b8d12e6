"""Validation error taxonomy shared by every message type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import ValidationError

E = TypeVar("E", bound="MessageValidationError")


class ErrorKind(str, Enum):
    """Reasons a message can fail to come into existence."""

    out_of_range = "OutOfRange"
    null_or_empty = "NullOrEmpty"
    malformed = "Malformed"


# Custom pydantic error types raised by the field validators.
OUT_OF_RANGE = "out_of_range"
NULL_OR_EMPTY = "null_or_empty"

_KIND_BY_ERROR_TYPE = {
    OUT_OF_RANGE: ErrorKind.out_of_range,
    NULL_OR_EMPTY: ErrorKind.null_or_empty,
}


@dataclass(frozen=True)
class ValidationIssue:
    kind: ErrorKind
    field: Optional[str]
    detail: str


class MessageValidationError(ValueError):
    """Raised when a message cannot be constructed from the given fields."""

    def __init__(self, message_type: str, issues: List[ValidationIssue]) -> None:
        self.message_type = message_type
        self.issues = list(issues)
        super().__init__(self._describe())

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.issues[0].kind if self.issues else None

    @property
    def kinds(self) -> List[ErrorKind]:
        return [issue.kind for issue in self.issues]

    def _describe(self) -> str:
        parts = []
        for issue in self.issues:
            where = issue.field or "message"
            parts.append(f"{where}: {issue.kind.value} ({issue.detail})")
        return f"invalid {self.message_type}: " + "; ".join(parts)

    @classmethod
    def from_validation_error(
        cls: Type[E],
        message_type: str,
        exc: ValidationError,
        wire_names: Optional[Dict[str, str]] = None,
    ) -> E:
        names = wire_names or {}
        issues: List[ValidationIssue] = []
        for error in exc.errors():
            loc = error.get("loc") or ()
            field = str(loc[0]) if loc else None
            if field is not None:
                field = names.get(field, field)
            kind = _KIND_BY_ERROR_TYPE.get(error["type"], ErrorKind.malformed)
            issues.append(ValidationIssue(kind=kind, field=field, detail=error["msg"]))
        return cls(message_type, issues)

    @classmethod
    def malformed(cls: Type[E], message_type: str, detail: str, field: Optional[str] = None) -> E:
        return cls(message_type, [ValidationIssue(kind=ErrorKind.malformed, field=field, detail=detail)])


class MessageDecodeError(MessageValidationError):
    """A wire payload was rejected while being decoded."""
