"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

# Add repo root for imports when the package is not installed
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from classbook.db import create_session_factory, init_db
from classbook.models.domain import User, Teacher
from classbook.repositories.unit_of_work import SqlUnitOfWork
from classbook.services.config_service import DATABASE_URL_ENV


@pytest.fixture(autouse=True)
def clear_database_env(monkeypatch):
    """Keep a developer's CLASSBOOK_DATABASE_URL out of the tests."""
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)


@pytest.fixture
def now():
    """Fixed point in time used as the service clock."""
    return datetime(2030, 6, 1, 12, 0, 0)


@pytest.fixture
def tomorrow(now):
    return now + timedelta(days=1)


@pytest.fixture
def yesterday(now):
    return now - timedelta(days=1)


@pytest.fixture
def engine():
    """In-memory SQLite database shared by every connection of the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def uow(session_factory):
    return SqlUnitOfWork(session_factory)


@pytest.fixture
def seeded_people(uow):
    """Two users and one teacher, committed."""
    with uow:
        uow.users.save(User(id=1, username="alice"))
        uow.users.save(User(id=2, username="bob"))
        uow.teachers.save(Teacher(id=10, first_name="Grace", last_name="Hopper"))
        uow.commit()
    return {"user_ids": [1, 2], "teacher_id": 10}
