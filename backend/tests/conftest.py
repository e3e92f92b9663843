"""
Shared fixtures: in-memory SQLite database, API client, users and tokens.

Run:
    pytest -v
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("APP_ENV", "test")

from datetime import datetime
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from electricpulse.core.database import Base, SessionLocal, engine
from electricpulse.core.security import create_access_token, hash_password
from electricpulse.models.meter_reading import MeterReading
from electricpulse.models.user import User

# Balanced, healthy three-phase defaults; tests override what they care about
HEALTHY = {
    "v1": 230.0, "v2": 231.0, "v3": 229.0,
    "i1": 10.0, "i2": 10.5, "i3": 9.5,
    "pf1": 0.95, "pf2": 0.95, "pf3": 0.95,
    "kw1": 300.0, "kw2": 350.0, "kw3": 350.0, "kwt": 1000.0,
    "kwh": 500.0,
}


class FakeCache:
    """Dict-backed stand-in for the Redis cache manager."""

    def __init__(self):
        self.store: dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self.store.get(key)

    def set(self, key: str, value: Any, ttl: int = 300) -> None:
        self.store[key] = value

    def delete(self, key: str) -> None:
        self.store.pop(key, None)


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def fake_cache(monkeypatch):
    fake = FakeCache()
    monkeypatch.setattr("electricpulse.services.dashboard_service.cache", fake)
    return fake


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from electricpulse.main import app
    return TestClient(app)


def add_reading(db, meter_id: str, timestamp: datetime, **fields) -> MeterReading:
    values = {**HEALTHY, **fields}
    reading = MeterReading(meter_id=meter_id, timestamp=timestamp, **values)
    db.add(reading)
    db.commit()
    return reading


def add_user(db, email: str, role: str = "user", password: str = "password123") -> User:
    user = User(
        email=email,
        hashed_password=hash_password(password),
        full_name=email.split("@")[0].title(),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user.id), user.role)}"}


@pytest.fixture
def admin(db) -> User:
    return add_user(db, "admin@electric.com", role="admin")


@pytest.fixture
def operator(db) -> User:
    return add_user(db, "user@company.com", role="user")


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def user_headers(operator) -> dict[str, str]:
    return auth_headers(operator)
