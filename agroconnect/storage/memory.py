"""
Dictionary-backed Entity Store, one map per kind keyed by identifier.
"""
import threading
from typing import Any, Mapping, Optional, Sequence

from agroconnect.error_handlers import DuplicateKeyError
from agroconnect.storage.base import (
    EntityKind,
    EntityStore,
    IMMUTABLE_FIELDS,
    UNIQUE_KEYS,
    check_unique_key,
)
from agroconnect.storage.records import Record
from agroconnect.utils import new_id, utcnow


class MemoryStore(EntityStore):
    """Keeps every record in process memory; contents vanish on restart."""

    name = "memory"

    def __init__(self):
        self._tables: dict[EntityKind, dict[str, Record]] = {kind: {} for kind in EntityKind}
        self._lock = threading.Lock()

    def get(self, kind: EntityKind, entity_id: str) -> Optional[Record]:
        return self._tables[kind].get(entity_id)

    def get_by_unique_key(self, kind: EntityKind, key: str, value: Any) -> Optional[Record]:
        check_unique_key(kind, key)
        for record in self._tables[kind].values():
            if getattr(record, key) == value:
                return record
        return None

    def insert(self, kind: EntityKind, values: Mapping[str, Any]) -> Record:
        data = {k: v for k, v in values.items() if k not in IMMUTABLE_FIELDS}
        data["id"] = new_id()
        data["created_at"] = utcnow()
        record = kind.record_type.model_validate(data)

        with self._lock:
            for key in UNIQUE_KEYS[kind]:
                value = getattr(record, key)
                if self.get_by_unique_key(kind, key, value) is not None:
                    raise DuplicateKeyError(kind.label, key, str(value))
            self._tables[kind][record.id] = record

        return record

    def update(self, kind: EntityKind, entity_id: str, changes: Mapping[str, Any]) -> Optional[Record]:
        with self._lock:
            existing = self._tables[kind].get(entity_id)
            if existing is None:
                return None

            data = existing.model_dump()
            data.update({k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS})
            updated = kind.record_type.model_validate(data)

            for key in UNIQUE_KEYS[kind]:
                value = getattr(updated, key)
                clash = self.get_by_unique_key(kind, key, value)
                if clash is not None and clash.id != entity_id:
                    raise DuplicateKeyError(kind.label, key, str(value))

            self._tables[kind][entity_id] = updated
            return updated

    def list_all(self, kind: EntityKind) -> Sequence[Record]:
        # dicts keep insertion order, which is also creation order
        return list(self._tables[kind].values())
