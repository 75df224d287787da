"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Settings are read once at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ADMIN_PIN", "4321")
os.environ.setdefault("CLIENTS_PIN", "1234")
# Cheap hashing keeps the account tests fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def published_events(monkeypatch):
    """Capture realtime broadcasts instead of sending them"""
    from modules.realtime import event_broadcaster

    events = []

    async def fake_publish(event, data=None):
        events.append((event, data))

    monkeypatch.setattr(event_broadcaster, "publish", fake_publish)
    return events


@pytest.fixture
def registered_user(client):
    """A registered customer: (email, password, loyalty_id)"""
    response = client.post(
        "/api/auth/register",
        json={"email": "ala@example.com", "password": "sekret1"},
    )
    assert response.status_code == 200
    return "ala@example.com", "sekret1", response.json()["loyaltyId"]


@pytest.fixture
def session_factory(db_session):
    """Independent sessions on the test database, for interleaving requests"""
    return TestingSessionLocal
