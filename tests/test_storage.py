"""Tests for the Entity Store backends."""
from datetime import timedelta, timezone
from decimal import Decimal

import pytest
from freezegun import freeze_time

from agroconnect.error_handlers import DuplicateKeyError
from agroconnect.storage import EntityKind, MemoryStore, ProductRecord, SQLStore, UserRecord


class TestInsert:
    """Tests for record creation."""

    def test_assigns_identifier_and_timestamp(self, store, user_factory):
        """Test that the store generates id and created_at."""
        user = user_factory()

        assert isinstance(user, UserRecord)
        assert user.id
        assert user.created_at.tzinfo is not None

    def test_ignores_client_supplied_identifier(self, store, user_factory):
        """Test that id and created_at in the values are replaced."""
        user = user_factory(id="chosen-by-client")

        assert user.id != "chosen-by-client"
        assert store.get(EntityKind.USERS, "chosen-by-client") is None

    def test_identifiers_are_unique(self, store, user_factory):
        ids = {user_factory().id for _ in range(5)}
        assert len(ids) == 5

    def test_duplicate_email_rejected(self, store, user_factory):
        """Test that a second user with the same email raises DuplicateKeyError."""
        first = user_factory(email="a@x.com", password_hash="first-hash")

        with pytest.raises(DuplicateKeyError) as exc_info:
            user_factory(email="a@x.com", password_hash="second-hash")

        assert exc_info.value.field == "email"
        assert exc_info.value.status_code == 409
        stored = store.get_by_unique_key(EntityKind.USERS, "email", "a@x.com")
        assert stored.id == first.id
        assert stored.password_hash == "first-hash"
        assert store.count(EntityKind.USERS) == 1

    def test_price_kept_as_decimal(self, store, user_factory, product_factory):
        seller = user_factory()
        product = product_factory(seller.id, price=Decimal("8.50"))

        stored = store.get(EntityKind.PRODUCTS, product.id)
        assert isinstance(stored, ProductRecord)
        assert stored.price == Decimal("8.50")


class TestGet:
    """Tests for lookups."""

    def test_unknown_identifier_returns_none(self, store):
        assert store.get(EntityKind.PRODUCTS, "missing") is None

    def test_inactive_product_still_resolvable(self, store, user_factory, product_factory):
        """Test that the raw store ignores the active flag."""
        seller = user_factory()
        product = product_factory(seller.id, active=False)

        assert store.get(EntityKind.PRODUCTS, product.id).active is False

    def test_lookup_by_email(self, store, user_factory):
        user = user_factory(email="kwame@example.com")

        assert store.get_by_unique_key(EntityKind.USERS, "email", "kwame@example.com").id == user.id
        assert store.get_by_unique_key(EntityKind.USERS, "email", "nobody@example.com") is None

    def test_email_lookup_is_case_sensitive(self, store, user_factory):
        user_factory(email="Kwame@example.com")
        assert store.get_by_unique_key(EntityKind.USERS, "email", "kwame@example.com") is None

    def test_lookup_by_non_unique_key_rejected(self, store):
        """Test that only declared unique keys can be used for lookups."""
        with pytest.raises(ValueError):
            store.get_by_unique_key(EntityKind.USERS, "first_name", "Ama")


class TestUpdate:
    """Tests for shallow-merge updates."""

    def test_merges_changes(self, store, user_factory, product_factory):
        """Test that fields not mentioned in the changes are kept."""
        seller = user_factory()
        product = product_factory(seller.id, name="Corn", quantity=10)

        updated = store.update(EntityKind.PRODUCTS, product.id, {"quantity": 5})

        assert updated.quantity == 5
        assert updated.name == "Corn"
        assert store.get(EntityKind.PRODUCTS, product.id).quantity == 5

    def test_identifier_and_timestamp_are_immutable(self, store, user_factory, product_factory):
        seller = user_factory()
        product = product_factory(seller.id)

        updated = store.update(EntityKind.PRODUCTS, product.id, {
            "id": "other",
            "created_at": product.created_at + timedelta(days=3),
            "unit": "crate",
        })

        assert updated.id == product.id
        assert updated.created_at == product.created_at
        assert updated.unit == "crate"

    def test_unknown_identifier_returns_none(self, store):
        assert store.update(EntityKind.PRODUCTS, "missing", {"quantity": 1}) is None

    def test_email_clash_on_update_rejected(self, store, user_factory):
        user_factory(email="taken@example.com")
        other = user_factory(email="free@example.com")

        with pytest.raises(DuplicateKeyError):
            store.update(EntityKind.USERS, other.id, {"email": "taken@example.com"})

        assert store.get(EntityKind.USERS, other.id).email == "free@example.com"

    def test_returned_records_are_snapshots(self, store, user_factory, product_factory):
        """Test that a record read earlier is not changed by a later update."""
        seller = user_factory()
        product = product_factory(seller.id, quantity=10)

        store.update(EntityKind.PRODUCTS, product.id, {"quantity": 1})

        assert product.quantity == 10


class TestListAll:
    """Tests for full scans."""

    def test_oldest_first(self, store, user_factory):
        with freeze_time("2025-03-01 08:00:00") as frozen:
            first = user_factory()
            frozen.tick(timedelta(minutes=5))
            second = user_factory()
            frozen.tick(timedelta(minutes=5))
            third = user_factory()

        ids = [u.id for u in store.list_all(EntityKind.USERS)]
        assert ids == [first.id, second.id, third.id]

    def test_timestamps_are_utc(self, store, user_factory):
        with freeze_time("2025-03-01 08:00:00"):
            user_factory()

        (user,) = store.list_all(EntityKind.USERS)
        assert user.created_at.utcoffset() == timedelta(0)
        assert user.created_at.astimezone(timezone.utc).hour == 8

    def test_kinds_are_separate(self, store, user_factory, product_factory):
        seller = user_factory()
        product_factory(seller.id)

        assert store.count(EntityKind.USERS) == 1
        assert store.count(EntityKind.PRODUCTS) == 1
        assert store.count(EntityKind.MESSAGES) == 0


class TestBackends:
    """Backend-specific behaviour."""

    def test_memory_store_keeps_insertion_order_for_equal_timestamps(self, memory_store):
        with freeze_time("2025-03-01 08:00:00"):
            names = ["first", "second", "third"]
            for name in names:
                memory_store.insert(EntityKind.USERS, {
                    "email": f"{name}@example.com",
                    "password_hash": "x",
                    "first_name": name,
                    "last_name": "User",
                    "account_type": "buyer",
                })

        assert [u.first_name for u in memory_store.list_all(EntityKind.USERS)] == names

    def test_sql_store_count_uses_database(self, sql_store):
        assert isinstance(sql_store, SQLStore)
        assert sql_store.count(EntityKind.USERS) == 0

    def test_store_names(self, memory_store, sql_store):
        assert isinstance(memory_store, MemoryStore)
        assert memory_store.name == "memory"
        assert sql_store.name == "sql"
