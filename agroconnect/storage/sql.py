"""
Relational Entity Store on top of SQLAlchemy.

Every call runs in its own short session and returns detached records, so
nothing ORM-bound leaks out to the services.
"""
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from agroconnect.error_handlers import DuplicateKeyError
from agroconnect.logging_config import get_logger
from agroconnect.models import User, Product, Message
from agroconnect.storage.base import (
    EntityKind,
    EntityStore,
    IMMUTABLE_FIELDS,
    UNIQUE_KEYS,
    check_unique_key,
)
from agroconnect.storage.records import Record
from agroconnect.utils import new_id, utcnow

logger = get_logger("storage.sql")

ORM_MODELS = {
    EntityKind.USERS: User,
    EntityKind.PRODUCTS: Product,
    EntityKind.MESSAGES: Message,
}


class SQLStore(EntityStore):
    """Entity Store backed by the users/products/messages tables."""

    name = "sql"

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def _to_record(self, kind: EntityKind, row) -> Record:
        return kind.record_type.model_validate(row, from_attributes=True)

    def get(self, kind: EntityKind, entity_id: str) -> Optional[Record]:
        with self._session_factory() as session:
            row = session.get(ORM_MODELS[kind], entity_id)
            return self._to_record(kind, row) if row is not None else None

    def get_by_unique_key(self, kind: EntityKind, key: str, value: Any) -> Optional[Record]:
        check_unique_key(kind, key)
        model = ORM_MODELS[kind]
        with self._session_factory() as session:
            row = session.execute(
                select(model).where(getattr(model, key) == value)
            ).scalar_one_or_none()
            return self._to_record(kind, row) if row is not None else None

    def insert(self, kind: EntityKind, values: Mapping[str, Any]) -> Record:
        data = {k: v for k, v in values.items() if k not in IMMUTABLE_FIELDS}

        # Validate through the record type first so defaults are applied uniformly
        record = kind.record_type.model_validate({**data, "id": new_id(), "created_at": utcnow()})

        for key in UNIQUE_KEYS[kind]:
            value = getattr(record, key)
            if self.get_by_unique_key(kind, key, value) is not None:
                raise DuplicateKeyError(kind.label, key, str(value))

        row = ORM_MODELS[kind](**record.model_dump())
        with self._session_factory() as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                # Lost a race against a concurrent insert of the same key
                for key in UNIQUE_KEYS[kind]:
                    value = getattr(record, key)
                    clash = self.get_by_unique_key(kind, key, value)
                    if clash is not None:
                        raise DuplicateKeyError(kind.label, key, str(value))
                raise
            session.refresh(row)
            return self._to_record(kind, row)

    def update(self, kind: EntityKind, entity_id: str, changes: Mapping[str, Any]) -> Optional[Record]:
        model = ORM_MODELS[kind]
        with self._session_factory() as session:
            row = session.get(model, entity_id)
            if row is None:
                return None

            merged = self._to_record(kind, row).model_dump()
            merged.update({k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS})
            record = kind.record_type.model_validate(merged)

            for field, value in record.model_dump(exclude=IMMUTABLE_FIELDS).items():
                setattr(row, field, value)

            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                for key in UNIQUE_KEYS[kind]:
                    if key in changes:
                        raise DuplicateKeyError(kind.label, key, str(changes[key]))
                raise
            session.refresh(row)
            return self._to_record(kind, row)

    def list_all(self, kind: EntityKind) -> Sequence[Record]:
        model = ORM_MODELS[kind]
        with self._session_factory() as session:
            rows = session.execute(
                select(model).order_by(model.created_at.asc())
            ).scalars().all()
            return [self._to_record(kind, row) for row in rows]

    def count(self, kind: EntityKind) -> int:
        model = ORM_MODELS[kind]
        with self._session_factory() as session:
            return session.execute(select(func.count()).select_from(model)).scalar_one()

    def close(self) -> None:
        bind = self._session_factory.kw.get("bind")
        if bind is not None:
            logger.info("Disposing database engine")
            bind.dispose()
