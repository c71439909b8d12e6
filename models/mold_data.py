"""Mold data request/report messages.

Wire order differs between these types: the request types emit their own
members before the envelope, while :class:`MoldDataValueMessage` emits its
parent's members first and appends ``Value`` last. Each order is spelled out
as a ``wire_fields`` constant.
"""

from __future__ import annotations

from typing import ClassVar, Tuple

from pydantic import Field

from models.cycle_data import CycleDataMessage
from models.envelope import ENVELOPE_FIELDS, ControllerId, FieldName, Message, WireField


class RequestMoldDataMessage(Message):
    """Ask a controller for its full mold-data snapshot."""

    type_name: ClassVar[str] = "RequestMoldData"
    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("ControllerId", "controller_id"),
    ) + ENVELOPE_FIELDS
    positional_fields: ClassVar[Tuple[str, ...]] = ("controller_id", "priority")

    controller_id: ControllerId = Field(..., alias="ControllerId")


class MoldDataMessage(CycleDataMessage):
    """Full mold-data report; validation and wire order come from cycle data."""

    type_name: ClassVar[str] = "MoldData"


class ReadMoldDataMessage(Message):
    """Ask a controller for the current value of one named field."""

    type_name: ClassVar[str] = "ReadMoldData"
    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("ControllerId", "controller_id"),
        WireField("Field", "field"),
    ) + ENVELOPE_FIELDS
    positional_fields: ClassVar[Tuple[str, ...]] = ("controller_id", "field", "priority")

    controller_id: ControllerId = Field(..., alias="ControllerId")
    field: FieldName = Field(..., alias="Field")


class MoldDataValueMessage(ReadMoldDataMessage):
    """Reply to a field read, carrying the field's current value."""

    type_name: ClassVar[str] = "MoldDataValue"
    wire_fields: ClassVar[Tuple[WireField, ...]] = ReadMoldDataMessage.wire_fields + (
        WireField("Value", "value", always_include=True),
    )
    positional_fields: ClassVar[Tuple[str, ...]] = ("controller_id", "field", "value", "priority")

    value: float = Field(..., alias="Value")
