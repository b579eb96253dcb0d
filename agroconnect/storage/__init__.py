"""Entity Store backends."""
from agroconnect.storage.base import EntityKind, EntityStore
from agroconnect.storage.memory import MemoryStore
from agroconnect.storage.records import Record, UserRecord, ProductRecord, MessageRecord
from agroconnect.storage.sql import SQLStore

__all__ = [
    "EntityKind",
    "EntityStore",
    "MemoryStore",
    "SQLStore",
    "Record",
    "UserRecord",
    "ProductRecord",
    "MessageRecord",
]
