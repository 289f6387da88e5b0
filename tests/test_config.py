"""Tests for environment-driven configuration and store selection."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.pool import StaticPool

from habitflow.config import BaseConfig, DevConfig, TestingConfig
from habitflow.extensions import build_repository, build_tracker
from habitflow.infra.repositories import InMemoryHabitRepository, SQLModelHabitRepository
from habitflow.models import Habit
from habitflow.services.habits import StreakMode


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "instance").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.STORAGE == "memory"
    assert config.STREAK_MODE == "entries"
    assert config.CASCADE_DELETE is True
    assert config.SEED_SAMPLE_DATA is False
    assert config.DEV_MODE is True
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'habitflow.db'}"


def test_dev_config_seeds_by_default():
    assert DevConfig().SEED_SAMPLE_DATA is True
    assert DevConfig().DEBUG is True


def test_dev_config_seed_can_be_disabled(monkeypatch):
    monkeypatch.setenv("HABITFLOW_SEED_SAMPLE_DATA", "false")
    assert DevConfig().SEED_SAMPLE_DATA is False


def test_testing_config_never_seeds(monkeypatch):
    monkeypatch.setenv("HABITFLOW_SEED_SAMPLE_DATA", "true")
    config = TestingConfig()
    assert config.TESTING is True
    assert config.SEED_SAMPLE_DATA is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HABITFLOW_STORAGE", " SQLite ")
    monkeypatch.setenv("HABITFLOW_STREAK_MODE", "calendar")
    monkeypatch.setenv("HABITFLOW_CASCADE_DELETE", "no")
    monkeypatch.setenv("HABITFLOW_DATABASE_URL", "sqlite://")

    config = BaseConfig()

    assert config.STORAGE == "sqlite"
    assert config.STREAK_MODE == "calendar"
    assert config.CASCADE_DELETE is False
    assert config.DATABASE_URL == "sqlite://"


@pytest.mark.parametrize(
    "name,value",
    [("HABITFLOW_STORAGE", "postgres"), ("HABITFLOW_STREAK_MODE", "weekly")],
)
def test_invalid_choices_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        BaseConfig()


def test_secret_required_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("HABITFLOW_DEV_MODE", "false")
    with pytest.raises(ValueError, match="HABITFLOW_SECRET_KEY"):
        BaseConfig()

    monkeypatch.setenv("HABITFLOW_SECRET_KEY", "s3cret")
    assert BaseConfig().SECRET_KEY == "s3cret"


def test_engine_options_for_file_database():
    options = BaseConfig().sqlalchemy_engine_options()
    assert options == {"connect_args": {"check_same_thread": False}}


@pytest.mark.parametrize("url", ["sqlite://", "sqlite:///:memory:"])
def test_engine_options_for_in_memory_database(monkeypatch, url):
    monkeypatch.setenv("HABITFLOW_DATABASE_URL", url)
    options = BaseConfig().sqlalchemy_engine_options()
    assert options["poolclass"] is StaticPool


def test_build_repository_selects_backend(monkeypatch):
    assert isinstance(build_repository(BaseConfig()), InMemoryHabitRepository)

    monkeypatch.setenv("HABITFLOW_STORAGE", "sqlite")
    monkeypatch.setenv("HABITFLOW_DATABASE_URL", "sqlite://")
    repository = build_repository(BaseConfig())
    assert isinstance(repository, SQLModelHabitRepository)

    created = repository.create_habit(Habit(name="Read", created_at=date(2024, 5, 10)))
    assert repository.get_habit(created.id).name == "Read"


def test_build_tracker_uses_config(monkeypatch):
    monkeypatch.setenv("HABITFLOW_STREAK_MODE", "calendar")
    monkeypatch.setenv("HABITFLOW_CASCADE_DELETE", "0")

    tracker = build_tracker(BaseConfig())

    assert tracker.streak_mode is StreakMode.CALENDAR
    assert tracker.cascade_delete is False
