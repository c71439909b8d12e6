"""Reference responder that answers mold-data requests from stored snapshots."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from datastore.snapshot_store import MoldSnapshotTable, build_default_table
from models.envelope import Message
from models.mold_data import (
    MoldDataMessage,
    MoldDataValueMessage,
    ReadMoldDataMessage,
    RequestMoldDataMessage,
)

logger = logging.getLogger(__name__)


class MoldDataResponder:
    """Keeps the latest mold data per controller and answers reads against it.

    Inbound ``MoldData`` reports replace the stored snapshot, ``MoldDataValue``
    messages patch a single reading, and ``RequestMoldData``/``ReadMoldData``
    requests are answered from the snapshot. Lookups that cannot be satisfied
    raise ``KeyError``.
    """

    def __init__(self, table: MoldSnapshotTable) -> None:
        self.table = table

    def handle(self, message: Message) -> Optional[Message]:
        if isinstance(message, MoldDataMessage):
            self.store_snapshot(message)
            return None
        # MoldDataValueMessage is also a ReadMoldDataMessage; match it first.
        if isinstance(message, MoldDataValueMessage):
            self.apply_value(message)
            return None
        if isinstance(message, ReadMoldDataMessage):
            return self.read_value(message)
        if isinstance(message, RequestMoldDataMessage):
            return self.request_snapshot(message)

        logger.debug(
            "No handler for message",
            extra={"message_type": message.type_name, "sequence": message.sequence},
        )
        return None

    def store_snapshot(self, snapshot: MoldDataMessage) -> None:
        self.table.put(snapshot)
        logger.info(
            "Stored mold data snapshot",
            extra={
                "message_type": snapshot.type_name,
                "controller_id": snapshot.controller_id,
                "sequence": snapshot.sequence,
            },
        )

    def latest_snapshot(self, controller_id: int) -> MoldDataMessage:
        snapshot = self.table.get(controller_id)
        if snapshot is None:
            raise KeyError(f"No mold data recorded for controller {controller_id}.")
        return snapshot

    def request_snapshot(self, request: RequestMoldDataMessage) -> MoldDataMessage:
        snapshot = self.latest_snapshot(request.controller_id)
        return _reissue(snapshot, priority=request.priority)

    def read_value(self, request: ReadMoldDataMessage) -> MoldDataValueMessage:
        snapshot = self.latest_snapshot(request.controller_id)
        try:
            value = snapshot.data[request.field]
        except KeyError:
            logger.warning(
                "Read of unknown mold data field",
                extra={"controller_id": request.controller_id, "field": request.field},
            )
            raise KeyError(
                f"Field {request.field!r} not found for controller {request.controller_id}."
            ) from None

        return MoldDataValueMessage(
            controller_id=request.controller_id,
            field=request.field,
            value=value,
            priority=request.priority,
        )

    def apply_value(self, update: MoldDataValueMessage) -> MoldDataMessage:
        snapshot = self.latest_snapshot(update.controller_id)
        data = dict(snapshot.data)
        data[update.field] = update.value
        patched = _reissue(snapshot, data=data)
        self.table.put(patched)
        logger.info(
            "Updated mold data field",
            extra={"controller_id": update.controller_id, "field": update.field},
        )
        return patched


def _reissue(snapshot: MoldDataMessage, **overrides: Any) -> MoldDataMessage:
    """Copy ``snapshot`` under a fresh envelope, with ``overrides`` applied."""
    fields = snapshot.model_dump(exclude={"id", "sequence"})
    fields.update(overrides)
    return MoldDataMessage(**fields)


@lru_cache
def build_default_responder() -> MoldDataResponder:
    """Factory that wires the responder to the default snapshot table."""
    return MoldDataResponder(table=build_default_table())
