"""
Storage capability shared by every Entity Store backend.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from agroconnect.storage.records import Record, UserRecord, ProductRecord, MessageRecord


class EntityKind(str, Enum):
    """The record types the store owns; values double as table names."""
    USERS = "users"
    PRODUCTS = "products"
    MESSAGES = "messages"

    @property
    def record_type(self) -> type[Record]:
        return RECORD_TYPES[self]

    @property
    def label(self) -> str:
        return RESOURCE_LABELS[self]


RECORD_TYPES: dict[EntityKind, type[Record]] = {
    EntityKind.USERS: UserRecord,
    EntityKind.PRODUCTS: ProductRecord,
    EntityKind.MESSAGES: MessageRecord,
}

RESOURCE_LABELS: dict[EntityKind, str] = {
    EntityKind.USERS: "User",
    EntityKind.PRODUCTS: "Product",
    EntityKind.MESSAGES: "Message",
}

UNIQUE_KEYS: dict[EntityKind, frozenset[str]] = {
    EntityKind.USERS: frozenset({"email"}),
    EntityKind.PRODUCTS: frozenset(),
    EntityKind.MESSAGES: frozenset(),
}

# Assigned by the store on insert, never changed afterwards
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def check_unique_key(kind: EntityKind, key: str) -> None:
    if key not in UNIQUE_KEYS[kind]:
        raise ValueError(f"'{key}' is not a unique key of {kind.value}")


class EntityStore(ABC):
    """
    Raw CRUD over users, products and messages.

    Backends know nothing about ownership or visibility rules. Unknown
    identifiers yield ``None``; a clash on a unique key raises
    ``DuplicateKeyError``.
    """

    name: str = "abstract"

    @abstractmethod
    def get(self, kind: EntityKind, entity_id: str) -> Optional[Record]:
        """Return the record with this identifier, active or not."""

    @abstractmethod
    def get_by_unique_key(self, kind: EntityKind, key: str, value: Any) -> Optional[Record]:
        """Look a record up by one of its unique keys (e.g. user email)."""

    @abstractmethod
    def insert(self, kind: EntityKind, values: Mapping[str, Any]) -> Record:
        """Store a new record; ``id`` and ``created_at`` are always generated here."""

    @abstractmethod
    def update(self, kind: EntityKind, entity_id: str, changes: Mapping[str, Any]) -> Optional[Record]:
        """Shallow-merge ``changes`` into the record; fields not mentioned are kept."""

    @abstractmethod
    def list_all(self, kind: EntityKind) -> Sequence[Record]:
        """Every record of a kind, oldest first."""

    def count(self, kind: EntityKind) -> int:
        return len(self.list_all(kind))

    def close(self) -> None:
        """Release backend resources."""
