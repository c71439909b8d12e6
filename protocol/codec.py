"""JSON wire codec for protocol messages."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Type

from models.cycle_data import CycleDataMessage
from models.envelope import Message
from models.errors import MessageDecodeError
from models.mold_data import (
    MoldDataMessage,
    MoldDataValueMessage,
    ReadMoldDataMessage,
    RequestMoldDataMessage,
)

logger = logging.getLogger(__name__)

TYPE_KEY = "$type"

MESSAGE_TYPES: Dict[str, Type[Message]] = {
    cls.type_name: cls
    for cls in (
        CycleDataMessage,
        RequestMoldDataMessage,
        MoldDataMessage,
        ReadMoldDataMessage,
        MoldDataValueMessage,
    )
}


def _is_default(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Enum):
        return value.name == "Unknown"
    if isinstance(value, (bool, int, float)):
        return value == 0
    return False


def _to_json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return dict(value)
    return value


def to_payload(message: Message) -> Dict[str, Any]:
    """Return the wire members of ``message`` in order, ``$type`` first.

    Members holding their default value are left out unless the member is
    flagged ``always_include``.
    """
    payload: Dict[str, Any] = {TYPE_KEY: message.type_name}
    for spec, value in message.wire_items():
        if not spec.always_include and _is_default(value):
            continue
        payload[spec.name] = _to_json_value(value)
    return payload


def encode(message: Message) -> str:
    return json.dumps(to_payload(message), separators=(",", ":"))


def decode_payload(payload: Mapping[str, Any]) -> Message:
    """Decode an already-parsed wire object into its message type."""
    if not isinstance(payload, Mapping):
        raise _reject("Message", "payload must be a JSON object")

    type_name = payload.get(TYPE_KEY)
    if not isinstance(type_name, str) or not type_name:
        raise _reject("Message", f"missing {TYPE_KEY} discriminator", field=TYPE_KEY)

    message_type = MESSAGE_TYPES.get(type_name)
    if message_type is None:
        raise _reject(type_name, f"unknown message type {type_name!r}", field=TYPE_KEY)

    members = {key: value for key, value in payload.items() if key != TYPE_KEY}
    try:
        message = message_type.from_wire(members)
    except MessageDecodeError as exc:
        logger.warning(
            "Rejected inbound message",
            extra={
                "message_type": type_name,
                "error_kind": ",".join(kind.value for kind in exc.kinds),
                "reason": str(exc),
            },
        )
        raise

    logger.debug(
        "Decoded message",
        extra={"message_type": type_name, "sequence": message.sequence},
    )
    return message


def decode(text: str | bytes) -> Message:
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise _reject("Message", f"payload is not valid JSON: {exc}") from exc
    return decode_payload(payload)


def _reject(message_type: str, detail: str, field: str | None = None) -> MessageDecodeError:
    logger.warning(
        "Rejected inbound message",
        extra={"message_type": message_type, "error_kind": "Malformed", "reason": detail},
    )
    return MessageDecodeError.malformed(message_type, detail, field=field)
