"""Shared test fixtures for all tests."""
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient

from agroconnect.core.config import Settings
from agroconnect.core.database import create_db_engine, create_session_factory, init_db
from agroconnect.main import create_app
from agroconnect.services.weather import WeatherClient
from agroconnect.storage import EntityKind, MemoryStore, SQLStore

TEST_PASSWORD = "harvest-2024"


def _offline(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("network disabled in tests", request=request)


@pytest.fixture
def settings():
    """Settings for an isolated app: cheap hashing, no rate limits, no seeding."""
    return Settings(
        storage_backend="memory",
        database_url="sqlite:///:memory:",
        jwt_secret_key="test-secret-key",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        seed_sample_data=False,
        log_level="WARNING",
        log_dir=None,
    )


def _build_sql_store(settings):
    engine = create_db_engine(settings)
    init_db(engine)
    return SQLStore(create_session_factory(engine))


@pytest.fixture(params=["memory", "sql"])
def store(request, settings):
    """A fresh Entity Store; tests using it run once per backend."""
    if request.param == "memory":
        store = MemoryStore()
    else:
        store = _build_sql_store(settings)
    yield store
    store.close()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_store(settings):
    store = _build_sql_store(settings)
    yield store
    store.close()


@pytest.fixture
def offline_weather(settings):
    """Weather client whose upstream always fails."""
    return WeatherClient(settings, transport=httpx.MockTransport(_offline))


@pytest.fixture
def app(settings, store, offline_weather):
    return create_app(settings=settings, store=store, weather_client=offline_weather)


@pytest.fixture
def client(app):
    """Create a test client running the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_factory(store):
    """Insert users straight into the store."""
    counter = {"n": 0}

    def make_user(**overrides):
        counter["n"] += 1
        values = {
            "email": f"user{counter['n']}@example.com",
            "password_hash": "not-a-real-hash",
            "first_name": "Ama",
            "last_name": "Owusu",
            "account_type": "farmer",
            "location": "Kumasi, Ashanti Region",
            "phone": None,
            "verified": False,
        }
        values.update(overrides)
        return store.insert(EntityKind.USERS, values)

    return make_user


@pytest.fixture
def product_factory(store):
    """Insert products straight into the store."""

    def make_product(seller_id, **overrides):
        values = {
            "seller_id": seller_id,
            "name": "Premium Tomatoes",
            "description": "Fresh tomatoes from the farm",
            "category": "crops",
            "price": Decimal("45.00"),
            "unit": "kg",
            "quantity": 100,
            "location": "Kumasi",
            "image_url": None,
            "featured": False,
            "active": True,
        }
        values.update(overrides)
        return store.insert(EntityKind.PRODUCTS, values)

    return make_product


def _register(client, email, account_type="farmer", **overrides):
    """Register through the API; returns (user json, auth headers)."""
    payload = {
        "email": email,
        "password": TEST_PASSWORD,
        "firstName": "Kofi",
        "lastName": "Boateng",
        "accountType": account_type,
        "location": "Tamale, Northern Region",
    }
    payload.update(overrides)
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def signup(client):
    """Register an account through the API; returns (user json, auth headers)."""
    def register(email, account_type="farmer", **overrides):
        return _register(client, email, account_type, **overrides)
    return register


@pytest.fixture
def farmer(client):
    return _register(client, "farmer@example.com", "farmer")


@pytest.fixture
def other_farmer(client):
    return _register(client, "second.farmer@example.com", "farmer")


@pytest.fixture
def buyer(client):
    return _register(client, "buyer@example.com", "buyer")


@pytest.fixture
def product_payload():
    """A listing as the web form sends it: numbers arrive as strings."""
    return {
        "name": "Premium Tomatoes",
        "description": "Fresh, organic tomatoes from Ashanti region farms.",
        "category": "crops",
        "price": "45",
        "unit": "kg",
        "quantity": "100",
        "location": "Kumasi",
        "imageUrl": "https://images.example.com/tomatoes.jpg",
    }
