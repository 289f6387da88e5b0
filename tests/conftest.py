"""Pytest configuration and shared fixtures for HabitFlow tests.

This module provides store fixtures for both backends, test data factories,
and a Flask test client, without touching a real data directory.
"""

from __future__ import annotations

import os
import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitflow.app import create_app
from habitflow.config import TestingConfig
from habitflow.infra.database import create_session_factory
from habitflow.infra.repositories import InMemoryHabitRepository, SQLModelHabitRepository
from habitflow.models import Habit, HabitLog, HabitStatus
from habitflow.services.tracker import HabitTracker

TODAY = date(2024, 5, 10)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point configuration at a temp directory and clear HABITFLOW_* overrides."""

    for key in list(os.environ):
        if key.startswith("HABITFLOW_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HABITFLOW_DATA_DIR", str(tmp_path / "instance"))
    yield


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the SQL repository expects."""

    return create_session_factory(db_engine)


@pytest.fixture(params=["memory", "sqlite"])
def repository(request):
    """Run a test once against each habit store backend."""

    if request.param == "memory":
        return InMemoryHabitRepository()
    return SQLModelHabitRepository(request.getfixturevalue("session_factory"))


@pytest.fixture
def tracker(repository):
    """Tracker over the parametrized store with a fixed clock."""

    return HabitTracker(repository, clock=lambda: TODAY)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(tracker):
    """Factory for creating habits through the tracker.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(name: str = "Exercise", **fields) -> Habit:
        return tracker.create_habit({"name": name, **fields})

    return _create_habit


def make_log(habit_id: int, occurred_on: date, status: str = "completed") -> HabitLog:
    """Build an unsaved log for calculator tests."""

    return HabitLog(habit_id=habit_id, occurred_on=occurred_on, status=HabitStatus(status).value)


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path):
    config = TestingConfig()
    tracker = HabitTracker(InMemoryHabitRepository(), clock=lambda: TODAY)
    return create_app(config, tracker=tracker, configure_logging=False)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
