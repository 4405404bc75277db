import os
import tempfile

# Must be set before the application modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_PATH", os.path.join(tempfile.gettempdir(), "travelmates-tests.log"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app

OWNER = "owner-uid"


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def create_trip(client):
    def _create(owner=OWNER, max_participants=2, title="Goa getaway"):
        resp = client.post(
            "/trips/",
            json={
                "title": title,
                "startLocation": "Mumbai",
                "destination": "Goa",
                "startDate": "2026-12-01",
                "duration": 5,
                "maxParticipants": max_participants,
                "description": "Beaches and seafood",
            },
            headers={"x-user-id": owner},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create


@pytest.fixture
def join(client):
    def _join(trip_id, user_id, name=None, message=None, photo="https://img.example/a.png"):
        body = {"userId": user_id, "name": name or user_id.capitalize(), "photoURL": photo}
        if message is not None:
            body["message"] = message
        return client.post(f"/trips/{trip_id}/join", json=body)
    return _join


@pytest.fixture
def decide(client):
    def _decide(request_id, status, actor=OWNER):
        return client.put(
            f"/requests/{request_id}",
            json={"status": status},
            headers={"x-user-id": actor},
        )
    return _decide


@pytest.fixture
def accepted_participant(create_trip, join, decide):
    """Trip with `alice` accepted as participant."""
    trip = create_trip()
    request_id = join(trip["id"], "alice").json()["requestId"]
    assert decide(request_id, "accepted").status_code == 200
    return trip, request_id
