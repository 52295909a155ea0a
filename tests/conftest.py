"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests,
and a frozen clock so "today" is whatever the test says it is.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_streakboard.db")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from streakboard.core.clock import FrozenClock, get_clock  # noqa: E402
from streakboard.db.base import Base, get_db  # noqa: E402
from streakboard.main import app  # noqa: E402
from streakboard.models.user import UserRecord  # noqa: E402

SQLITE_URL = "sqlite:///./test_streakboard.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Tuesday, inside the "2026-spring" quarter (Jan–Mar).
START = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_users():
    yield
    db = TestingSessionLocal()
    try:
        db.query(UserRecord).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return FrozenClock(START)


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
