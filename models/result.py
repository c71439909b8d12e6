"""Result-returning construction for callers that prefer not to catch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from models.envelope import Message
from models.errors import ErrorKind, MessageValidationError

M = TypeVar("M", bound=Message)


@dataclass(frozen=True)
class BuildResult(Generic[M]):
    value: Optional[M] = None
    error: Optional[MessageValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> M:
        if self.error is not None:
            raise self.error
        if self.value is None:
            raise ValueError("BuildResult carries neither a message nor an error.")
        return self.value


def build(message_type: Type[M], **fields: Any) -> BuildResult[M]:
    """Construct ``message_type`` and report failure as a value instead of raising."""
    try:
        return BuildResult(value=message_type(**fields))
    except MessageValidationError as exc:
        return BuildResult(error=exc)
