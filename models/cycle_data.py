"""Periodic telemetry reports sent by a controller."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Dict, Optional, Tuple

from pydantic import Field

from models.enums import JobMode, OpMode
from models.envelope import ENVELOPE_FIELDS, ControllerId, Message, OperatorId, WireField


class CycleDataMessage(Message):
    """A snapshot of named readings taken from a controller at ``time_stamp``.

    ``time_stamp`` is left as ``None`` when the sender did not supply one; it
    is carried through as-is and never replaced with the current time.
    """

    type_name: ClassVar[str] = "CycleData"
    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("ControllerId", "controller_id"),
        WireField("JobCardId", "job_card_id"),
        WireField("MoldId", "mold_id"),
        WireField("OperatorId", "operator_id"),
        WireField("OpMode", "op_mode"),
        WireField("JobMode", "job_mode"),
        WireField("Data", "data"),
        WireField("TimeStamp", "time_stamp"),
    ) + ENVELOPE_FIELDS
    positional_fields: ClassVar[Tuple[str, ...]] = (
        "controller_id",
        "job_card_id",
        "mold_id",
        "operator_id",
        "op_mode",
        "job_mode",
        "data",
        "time_stamp",
        "priority",
    )

    controller_id: ControllerId = Field(..., alias="ControllerId")
    job_card_id: Optional[str] = Field(default=None, alias="JobCardId")
    mold_id: Optional[str] = Field(default=None, alias="MoldId")
    operator_id: OperatorId = Field(default=0, alias="OperatorId")
    op_mode: OpMode = Field(default=OpMode.Unknown, alias="OpMode")
    job_mode: JobMode = Field(default=JobMode.Unknown, alias="JobMode")
    data: Dict[str, float] = Field(..., alias="Data")
    time_stamp: Optional[datetime] = Field(default=None, alias="TimeStamp")
