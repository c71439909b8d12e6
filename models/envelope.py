"""Message envelope and the field-enumeration scaffolding used for the wire."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Dict, Iterable, List, Mapping, Tuple, Type, TypeVar
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

from models.errors import NULL_OR_EMPTY, OUT_OF_RANGE, MessageDecodeError, MessageValidationError

M = TypeVar("M", bound="Message")


@dataclass(frozen=True)
class WireField:
    """One member of a message's wire representation.

    ``name`` is the member name on the wire, ``attribute`` the model attribute
    it reads from. Members flagged ``always_include`` are emitted even when
    they hold their default value.
    """

    name: str
    attribute: str
    always_include: bool = False


_sequence_lock = threading.Lock()
_sequence_ticker = itertools.count(1)


def next_sequence() -> int:
    """Return the next envelope sequence number for this process."""
    with _sequence_lock:
        return next(_sequence_ticker)


def _new_id() -> str:
    return str(uuid4())


def require_positive(value: int) -> int:
    if value <= 0:
        raise PydanticCustomError(OUT_OF_RANGE, "must be greater than zero, got {value}", {"value": value})
    return value


def require_non_negative(value: int) -> int:
    if value < 0:
        raise PydanticCustomError(OUT_OF_RANGE, "must not be negative, got {value}", {"value": value})
    return value


def require_not_blank(value: Any) -> Any:
    # Runs before type coercion so that null is reported as NullOrEmpty.
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError(NULL_OR_EMPTY, "must not be null, empty or whitespace")
    return value


def reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0.
    if isinstance(value, bool):
        raise PydanticCustomError("int_type", "must be an integer, got a boolean")
    return value


ControllerId = Annotated[int, BeforeValidator(reject_bool), AfterValidator(require_positive)]
OperatorId = Annotated[int, BeforeValidator(reject_bool), AfterValidator(require_non_negative)]
FieldName = Annotated[str, BeforeValidator(require_not_blank)]


ENVELOPE_FIELDS: Tuple[WireField, ...] = (
    WireField("ID", "id"),
    WireField("Sequence", "sequence"),
    WireField("Priority", "priority"),
)

# Values a decoded payload gets for envelope members it leaves out.
_OMITTED_ENVELOPE: Tuple[Tuple[str, str, Any], ...] = (
    ("ID", "id", ""),
    ("Sequence", "sequence", 0),
)


class Message(BaseModel):
    """Base of every protocol message.

    Instances are immutable. Application code builds them with keyword
    arguments, or positionally in ``positional_fields`` order, which allocates
    a fresh ``ID`` and ``Sequence``. Inbound payloads go through
    :meth:`from_wire`, which keeps the envelope it was given; missing ``ID``
    and ``Sequence`` members decode as ``""`` and ``0``, the values the
    encoder leaves out. Both paths run the same validators.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type_name: ClassVar[str] = "Message"
    wire_fields: ClassVar[Tuple[WireField, ...]] = ENVELOPE_FIELDS
    positional_fields: ClassVar[Tuple[str, ...]] = ("priority",)

    id: str = Field(default_factory=_new_id, alias="ID")
    sequence: int = Field(default_factory=next_sequence, alias="Sequence")
    priority: int = Field(default=0, alias="Priority")

    def __init__(self, /, *args: Any, **data: Any) -> None:
        cls = type(self)
        if len(args) > len(cls.positional_fields):
            raise TypeError(
                f"{cls.__name__} takes at most {len(cls.positional_fields)} positional arguments"
                f" ({len(args)} given)"
            )
        for attribute, value in zip(cls.positional_fields, args):
            if attribute in data or cls.model_fields[attribute].alias in data:
                raise TypeError(f"{cls.__name__} got multiple values for argument {attribute!r}")
            data[attribute] = value
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise MessageValidationError.from_validation_error(
                cls.type_name, exc, cls._wire_names()
            ) from exc

    @classmethod
    def from_wire(cls: Type[M], payload: Mapping[str, Any]) -> M:
        """Decode a message from its wire members, keyed by wire name."""
        members = dict(payload)
        for name, attribute, omitted in _OMITTED_ENVELOPE:
            if name not in members and attribute not in members:
                members[name] = omitted
        try:
            return cls(**members)
        except MessageValidationError as exc:
            raise MessageDecodeError(exc.message_type, exc.issues) from exc

    @classmethod
    def from_fields(cls: Type[M], fields: Iterable[Tuple[str, Any]]) -> M:
        return cls.from_wire(dict(fields))

    @classmethod
    def _wire_names(cls) -> Dict[str, str]:
        return {spec.attribute: spec.name for spec in cls.wire_fields}

    def wire_items(self) -> List[Tuple[WireField, Any]]:
        return [(spec, getattr(self, spec.attribute)) for spec in self.wire_fields]

    def fields(self) -> List[Tuple[str, Any]]:
        """Return ``(wire name, value)`` pairs in wire order."""
        return [(spec.name, value) for spec, value in self.wire_items()]
