"""
Shared fixtures: an in-memory database, seeded users and trips, and an
HTTP client bound to the app with provider adapters swapped for fakes.
"""
from datetime import date
from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.db import Base, get_db
from app.core.dependencies import get_suggestion_client, get_weather_client
from app.core.jwt import create_access_token
from app.core.security import hash_password
from app.main import app
from app.models import User, TripType
from app.schemas.trip import Destination, TripCreate
from app.services.suggestion_client import PackingSuggestionClient
from app.services.trip_service import TripService
from app.services.weather_client import WeatherClient


PACKING_REPLY = """Here is your list:
```json
{
  "categories": [
    {"name": "Clothing", "items": [
      {"name": "T-shirts", "quantity": 3, "priority": "essential", "aiSuggested": true},
      {"name": "Rain jacket", "priority": "Important"}
    ]},
    {"name": "Documents", "items": [
      {"name": "Passport", "quantity": 1, "priority": "essential"}
    ]}
  ]
}
```
Have a great trip!"""

FORECAST_PAYLOAD = {
    "list": [
        {
            "dt": 1767225600,
            "main": {"temp_min": 3.5, "temp_max": 8.1, "humidity": 71},
            "weather": [{"description": "light rain"}],
            "wind": {"speed": 4.2},
        },
        {
            "dt": 1767236400,
            "main": {"temp_min": 2.0, "temp_max": 6.4, "humidity": 80},
            "weather": [{"description": "overcast clouds"}],
            "wind": {"speed": 3.1},
        },
    ]
}


class FakeGenAIClient:
    """Stands in for ``genai.Client``: ``client.models.generate_content`` returns fixed text."""

    def __init__(self, reply="", error=None):
        self.calls = []

        def generate_content(model, contents):
            self.calls.append({"model": model, "contents": contents})
            if error is not None:
                raise error
            return SimpleNamespace(text=reply)

        self.models = SimpleNamespace(generate_content=generate_content)


def make_suggestion_client(reply=PACKING_REPLY, error=None):
    return PackingSuggestionClient(
        api_key=None,
        model="gemini-2.0-flash-lite",
        client=FakeGenAIClient(reply, error),
    )


def make_weather_client(status_code=200, payload=None, api_key="test-key"):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=FORECAST_PAYLOAD if payload is None else payload)

    return WeatherClient(
        api_key=api_key,
        api_url="https://weather.test/data/2.5",
        transport=httpx.MockTransport(handler),
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


async def _create_user(db_session, name, email):
    user = User(name=name, email=email, hashed_password=hash_password("secret123"))
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session):
    return await _create_user(db_session, "Test Traveler", "traveler@example.com")


@pytest_asyncio.fixture
async def other_user(db_session):
    return await _create_user(db_session, "Other Traveler", "other@example.com")


def trip_payload(**overrides):
    data = dict(
        destination=Destination(city="Lisbon", country="Portugal"),
        start_date=date(2026, 5, 1),
        end_date=date(2026, 5, 8),
        trip_type=TripType.LEISURE,
    )
    data.update(overrides)
    return TripCreate(**data)


@pytest_asyncio.fixture
async def test_trip(db_session, test_user):
    return await TripService(db_session).create_trip(test_user.id, trip_payload())


@pytest.fixture
def suggestion_client():
    return make_suggestion_client()


@pytest.fixture
def weather_client():
    return make_weather_client()


@pytest_asyncio.fixture
async def async_client(session_factory, suggestion_client, weather_client):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_suggestion_client] = lambda: suggestion_client
    app.dependency_overrides[get_weather_client] = lambda: weather_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def bearer(user):
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
def authenticated_headers(test_user):
    return bearer(test_user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)


@pytest.fixture
def suggestion_factory():
    return make_suggestion_client


@pytest.fixture
def weather_factory():
    return make_weather_client


@pytest.fixture
def trip_factory():
    return trip_payload


@pytest.fixture
def auth_for():
    return bearer
