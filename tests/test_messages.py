"""Validation and field enumeration of the mold data message types."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models.enums import JobMode, OpMode
from models.errors import ErrorKind, MessageDecodeError, MessageValidationError
from models.mold_data import (
    MoldDataMessage,
    MoldDataValueMessage,
    ReadMoldDataMessage,
    RequestMoldDataMessage,
)

INVALID_CONTROLLER_IDS = [0, -1, -42, -(2**32)]
VALID_CONTROLLER_IDS = [1, 7, 2**32 - 1]
BLANK_FIELDS = [None, "", " ", "\t", "\n  \r"]


def _envelope(message) -> list[tuple[str, object]]:
    return [("ID", message.id), ("Sequence", message.sequence), ("Priority", message.priority)]


def _wire(controller_id: int, **members) -> dict:
    return {"ID": "8c1d2b1e", "Sequence": 12, "ControllerId": controller_id, **members}


@pytest.mark.parametrize("controller_id", INVALID_CONTROLLER_IDS)
@pytest.mark.parametrize(
    "message_type, extra",
    [
        (RequestMoldDataMessage, {}),
        (ReadMoldDataMessage, {"field": "Temperature"}),
        (MoldDataValueMessage, {"field": "Temperature", "value": 1.0}),
    ],
)
def test_non_positive_controller_id_is_out_of_range(message_type, extra, controller_id) -> None:
    with pytest.raises(MessageValidationError) as excinfo:
        message_type(controller_id=controller_id, **extra)

    assert excinfo.value.kind is ErrorKind.out_of_range
    assert excinfo.value.issues[0].field == "ControllerId"


@pytest.mark.parametrize("controller_id", INVALID_CONTROLLER_IDS)
@pytest.mark.parametrize(
    "message_type, extra",
    [
        (RequestMoldDataMessage, {}),
        (ReadMoldDataMessage, {"Field": "Temperature"}),
        (MoldDataValueMessage, {"Field": "Temperature", "Value": 1.0}),
    ],
)
def test_non_positive_controller_id_is_rejected_when_decoding(message_type, extra, controller_id) -> None:
    with pytest.raises(MessageDecodeError) as excinfo:
        message_type.from_wire(_wire(controller_id, **extra))

    assert excinfo.value.kind is ErrorKind.out_of_range
    assert excinfo.value.issues[0].field == "ControllerId"


@pytest.mark.parametrize("controller_id", VALID_CONTROLLER_IDS)
def test_positive_controller_id_is_stored_unchanged(controller_id: int) -> None:
    request = RequestMoldDataMessage(controller_id=controller_id)
    read = ReadMoldDataMessage(controller_id=controller_id, field="Temperature")
    decoded = ReadMoldDataMessage.from_wire(_wire(controller_id, Field="Temperature"))

    assert request.controller_id == controller_id
    assert read.controller_id == controller_id
    assert decoded.controller_id == controller_id


@pytest.mark.parametrize("field", BLANK_FIELDS)
@pytest.mark.parametrize("message_type, extra", [(ReadMoldDataMessage, {}), (MoldDataValueMessage, {"value": 2.5})])
def test_blank_field_is_null_or_empty(message_type, extra, field) -> None:
    with pytest.raises(MessageValidationError) as excinfo:
        message_type(controller_id=7, field=field, **extra)

    assert excinfo.value.kinds == [ErrorKind.null_or_empty]
    assert excinfo.value.issues[0].field == "Field"


@pytest.mark.parametrize("field", BLANK_FIELDS)
@pytest.mark.parametrize("message_type, extra", [(ReadMoldDataMessage, {}), (MoldDataValueMessage, {"Value": 2.5})])
def test_blank_field_is_rejected_when_decoding(message_type, extra, field) -> None:
    with pytest.raises(MessageDecodeError) as excinfo:
        message_type.from_wire(_wire(7, Field=field, **extra))

    assert excinfo.value.kinds == [ErrorKind.null_or_empty]
    assert excinfo.value.issues[0].field == "Field"


@pytest.mark.parametrize("flag", [True, False])
def test_boolean_controller_id_is_malformed(flag: bool) -> None:
    with pytest.raises(MessageDecodeError) as decoded:
        ReadMoldDataMessage.from_wire(_wire(flag, Field="Temperature"))
    with pytest.raises(MessageValidationError) as built:
        RequestMoldDataMessage(controller_id=flag)

    assert decoded.value.kinds == [ErrorKind.malformed]
    assert decoded.value.issues[0].field == "ControllerId"
    assert built.value.kinds == [ErrorKind.malformed]


def test_boolean_operator_id_is_malformed() -> None:
    with pytest.raises(MessageValidationError) as excinfo:
        MoldDataMessage(controller_id=1, operator_id=True, data={})

    assert excinfo.value.kinds == [ErrorKind.malformed]
    assert excinfo.value.issues[0].field == "OperatorId"


def test_missing_field_member_is_malformed_when_decoding() -> None:
    with pytest.raises(MessageDecodeError) as excinfo:
        ReadMoldDataMessage.from_wire(_wire(7))

    assert excinfo.value.kind is ErrorKind.malformed
    assert excinfo.value.issues[0].field == "Field"


def test_controller_id_and_field_are_both_checked() -> None:
    with pytest.raises(MessageValidationError) as excinfo:
        ReadMoldDataMessage(controller_id=0, field="   ")

    assert set(excinfo.value.kinds) == {ErrorKind.out_of_range, ErrorKind.null_or_empty}
    assert {issue.field for issue in excinfo.value.issues} == {"ControllerId", "Field"}


@pytest.mark.parametrize("field", ["Temperature", " Temperature ", "a", "溫度"])
def test_field_is_stored_verbatim(field: str) -> None:
    message = ReadMoldDataMessage(controller_id=3, field=field)

    assert message.field == field


@pytest.mark.parametrize("value", [0.0, -1.5, 1e300, float("inf")])
def test_value_has_no_range_restriction(value: float) -> None:
    message = MoldDataValueMessage(controller_id=3, field="Pressure", value=value)

    assert message.value == value


def test_request_mold_data_fields_put_controller_first() -> None:
    message = RequestMoldDataMessage(controller_id=5)

    assert message.fields() == [("ControllerId", 5)] + _envelope(message)


def test_read_mold_data_fields_order() -> None:
    message = ReadMoldDataMessage(controller_id=7, field="Temperature", priority=2)

    assert message.fields() == [("ControllerId", 7), ("Field", "Temperature")] + _envelope(message)
    assert message.fields()[-1] == ("Priority", 2)


def test_mold_data_value_fields_append_value_last() -> None:
    message = MoldDataValueMessage(controller_id=7, field="Temperature", value=123.4)

    assert message.fields() == (
        [("ControllerId", 7), ("Field", "Temperature")] + _envelope(message) + [("Value", 123.4)]
    )


def test_mold_data_value_keeps_zero_value() -> None:
    message = MoldDataValueMessage(controller_id=7, field="Temperature", value=0.0)

    assert ("Value", 0.0) in message.fields()
    assert message.fields()[-1] == ("Value", 0.0)


def test_wire_field_orders_are_fixed() -> None:
    assert [spec.name for spec in RequestMoldDataMessage.wire_fields] == [
        "ControllerId", "ID", "Sequence", "Priority",
    ]
    assert [spec.name for spec in ReadMoldDataMessage.wire_fields] == [
        "ControllerId", "Field", "ID", "Sequence", "Priority",
    ]
    assert [spec.name for spec in MoldDataValueMessage.wire_fields] == [
        "ControllerId", "Field", "ID", "Sequence", "Priority", "Value",
    ]
    assert [spec.name for spec in MoldDataMessage.wire_fields] == [
        "ControllerId", "JobCardId", "MoldId", "OperatorId", "OpMode", "JobMode",
        "Data", "TimeStamp", "ID", "Sequence", "Priority",
    ]
    always = [spec.name for spec in MoldDataValueMessage.wire_fields if spec.always_include]
    assert always == ["Value"]


def test_application_messages_get_fresh_envelopes() -> None:
    first = RequestMoldDataMessage(controller_id=1)
    second = RequestMoldDataMessage(controller_id=1)

    assert first.id != second.id
    assert second.sequence > first.sequence
    assert first.priority == 0


def test_decoded_messages_keep_their_envelope() -> None:
    message = RequestMoldDataMessage.from_wire({"ID": "abc", "Sequence": 99, "ControllerId": 4, "Priority": -3})

    assert message.fields() == [("ControllerId", 4), ("ID", "abc"), ("Sequence", 99), ("Priority", -3)]


@pytest.mark.parametrize(
    "message",
    [
        RequestMoldDataMessage(controller_id=5, priority=1),
        ReadMoldDataMessage(controller_id=7, field="Temperature"),
        MoldDataValueMessage(controller_id=7, field="Temperature", value=123.4),
        MoldDataValueMessage(controller_id=7, field="Temperature", value=0.0),
        MoldDataMessage(
            controller_id=9,
            job_card_id="JOB_CARD_1",
            mold_id="ABC-123",
            operator_id=12,
            op_mode=OpMode.Automatic,
            job_mode=JobMode.ID02,
            data={"Temperature": 231.5, "Pressure": 0.0},
            time_stamp=datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc),
        ),
    ],
)
def test_fields_round_trip_through_decoding(message) -> None:
    rebuilt = type(message).from_fields(message.fields())

    assert rebuilt == message
    assert rebuilt.fields() == message.fields()


def test_messages_are_immutable() -> None:
    message = ReadMoldDataMessage(controller_id=7, field="Temperature")

    with pytest.raises(ValidationError):
        message.field = "Pressure"  # type: ignore[misc]

    assert message.field == "Temperature"


def test_positional_construction_follows_declared_order() -> None:
    request = RequestMoldDataMessage(5, 2)
    read = ReadMoldDataMessage(7, "Temperature")
    value = MoldDataValueMessage(7, "Temperature", 123.4, 1)
    snapshot = MoldDataMessage(9, "JOB_CARD_1", "ABC-123", 12, OpMode.Manual, JobMode.ID01, {"Cushion": 4.0})

    assert (request.controller_id, request.priority) == (5, 2)
    assert (read.controller_id, read.field, read.priority) == (7, "Temperature", 0)
    assert (value.field, value.value, value.priority) == ("Temperature", 123.4, 1)
    assert snapshot.operator_id == 12
    assert snapshot.data == {"Cushion": 4.0}
    assert snapshot.time_stamp is None


def test_positional_construction_runs_validation() -> None:
    with pytest.raises(MessageValidationError) as excinfo:
        ReadMoldDataMessage(0, " ")

    assert set(excinfo.value.kinds) == {ErrorKind.out_of_range, ErrorKind.null_or_empty}


def test_positional_construction_rejects_extra_or_repeated_arguments() -> None:
    with pytest.raises(TypeError):
        RequestMoldDataMessage(5, 0, "extra")
    with pytest.raises(TypeError):
        ReadMoldDataMessage(7, "Temperature", field="Pressure")
    with pytest.raises(TypeError):
        ReadMoldDataMessage(7, ControllerId=8, field="Pressure")
