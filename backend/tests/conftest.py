import sys
from pathlib import Path
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient

# Allow importing from backend/trip_planner
sys.path.insert(0, str(Path(__file__).parent.parent))

from trip_planner.db.stores import DuplicateUsernameError
from trip_planner.dependencies import get_microservices, get_trip_store, get_user_store
from trip_planner.main import app
from trip_planner.models.trip import Trip, TripSummary
from trip_planner.models.user import User
from trip_planner.services import passwords
from trip_planner.services.microservices import MicroserviceClient


class InMemoryTripStore:
    """Dict-backed stand-in for TripStore."""

    def __init__(self) -> None:
        self.trips: dict[str, Trip] = {}

    async def insert(self, trip: Trip) -> str:
        trip_id = uuid4().hex[:24]
        self.trips[trip_id] = trip.model_copy(update={"id": trip_id}, deep=True)
        return trip_id

    async def find(self, trip_id: str) -> Trip | None:
        trip = self.trips.get(trip_id)
        return trip.model_copy(deep=True) if trip else None

    async def find_by_owner(self, owner: str) -> list[TripSummary]:
        owned = [t for t in self.trips.values() if t.owner == owner]
        owned.sort(key=lambda t: t.created_at, reverse=True)
        return [TripSummary.model_validate(t.model_dump(exclude={"itinerary"})) for t in owned]

    async def update_fields(self, trip_id: str, fields: dict) -> bool:
        trip = self.trips.get(trip_id)
        if trip is None:
            return False
        self.trips[trip_id] = Trip.model_validate({**trip.model_dump(), **fields})
        return True

    async def delete(self, trip_id: str) -> bool:
        return self.trips.pop(trip_id, None) is not None


class InMemoryUserStore:
    """Dict-backed stand-in for UserStore, keyed by exact username."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    async def find_by_username(self, username: str) -> User | None:
        return self.users.get(username)

    async def insert(self, user: User) -> str:
        if user.username in self.users:
            raise DuplicateUsernameError(user.username)
        user_id = uuid4().hex[:24]
        self.users[user.username] = user.model_copy(update={"id": user_id})
        return user_id


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(passwords.config, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def trip_store() -> InMemoryTripStore:
    return InMemoryTripStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


class FakeUpstream:
    """
    MockTransport handler standing in for every microservice.
    Records requests; tests replace `handler` to script responses.
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def microservices(upstream) -> MicroserviceClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return MicroserviceClient(
        client,
        safety_url="http://safety.test",
        phrase_url="http://phrases.test",
        itinerary_url="http://itinerary.test",
        export_url="http://export.test",
    )


@pytest.fixture
def client(trip_store, user_store, microservices):
    app.dependency_overrides[get_trip_store] = lambda: trip_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_microservices] = lambda: microservices
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_trip(client):
    def _create(**overrides) -> dict:
        payload = {
            "tripName": "Spring in Paris",
            "destination": "Paris, France",
            "startDate": "2024-03-01",
            "endDate": "2024-03-03",
            "travelers": 2,
            "username": "traveler1",
        }
        payload.update(overrides)
        response = client.post("/trips", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["trip"]

    return _create
