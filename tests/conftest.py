"""Shared fixtures: an in-memory database and a directory bound to it."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import init_db
from app.main import app
from app.services.account_directory import AccountDirectory, get_account_directory

# Lowest work factor bcrypt accepts; keeps the suite fast
TEST_ROUNDS = 4


def make_directory(engine) -> AccountDirectory:
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return AccountDirectory(session_factory, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with the users table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def directory(engine):
    return make_directory(engine)


@pytest.fixture
def client(directory):
    """TestClient whose routes use the in-memory directory."""
    app.dependency_overrides[get_account_directory] = lambda: directory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def tableless_directory():
    """Directory over a database whose users table was never created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield make_directory(engine)
    engine.dispose()
