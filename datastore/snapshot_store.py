from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from models.errors import MessageDecodeError
from models.mold_data import MoldDataMessage
from protocol import codec
from settings import get_settings

logger = logging.getLogger(__name__)


class MoldSnapshotTable:
    """Latest mold-data snapshot per controller, optionally mirrored to disk."""

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._items: Dict[int, MoldDataMessage] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def put(self, snapshot: MoldDataMessage) -> None:
        with self._lock:
            self._items[snapshot.controller_id] = snapshot
            self._persist()

    def get(self, controller_id: int) -> Optional[MoldDataMessage]:
        with self._lock:
            return self._items.get(controller_id)

    def scan(self) -> list[MoldDataMessage]:
        with self._lock:
            return [self._items[key] for key in sorted(self._items)]

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {
            str(controller_id): codec.to_payload(snapshot)
            for controller_id, snapshot in self._items.items()
        }
        self.persistence_path.write_text(json.dumps(payload, indent=2))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable snapshot file %s", self.persistence_path)
            data = {}

        for payload in data.values():
            try:
                snapshot = codec.decode_payload(payload)
            except MessageDecodeError as exc:
                logger.warning("Dropping stored snapshot", extra={"reason": str(exc)})
                continue
            if isinstance(snapshot, MoldDataMessage):
                self._items[snapshot.controller_id] = snapshot


@lru_cache
def build_default_table(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> MoldSnapshotTable:
    settings = get_settings()
    table_name = settings.store_name if name is None else name
    table_path = settings.store_persistence_path if path is None else path
    persistence = Path(table_path) if table_path else None
    return MoldSnapshotTable(name=table_name, persistence_path=persistence)
