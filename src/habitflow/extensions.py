"""Store and tracker wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .domain.repositories.habit import HabitRepository
from .infra.database import bootstrap_database
from .infra.repositories import InMemoryHabitRepository, SQLModelHabitRepository
from .logging_config import get_logger
from .services.tracker import HabitTracker

logger = get_logger(__name__)

EXTENSION_KEY = "habitflow"


def build_repository(config: BaseConfig) -> HabitRepository:
    """Return the habit store selected by ``config.STORAGE``."""

    if config.STORAGE == "sqlite":
        database = bootstrap_database(config)
        return SQLModelHabitRepository(database.session_factory)
    return InMemoryHabitRepository()


def build_tracker(config: BaseConfig, repository: HabitRepository | None = None) -> HabitTracker:
    return HabitTracker(
        repository or build_repository(config),
        streak_mode=config.STREAK_MODE,
        cascade_delete=config.CASCADE_DELETE,
    )


def init_tracker(app: Flask, tracker: HabitTracker | None = None) -> HabitTracker:
    """Attach a tracker to the app, seeding sample data when configured."""

    config: BaseConfig = app.config["HABITFLOW_CONFIG"]
    tracker = tracker or build_tracker(config)
    app.extensions[EXTENSION_KEY] = tracker

    if config.SEED_SAMPLE_DATA and not tracker.list_habits():
        from .services.seed import seed_sample_data

        seed_sample_data(tracker)

    logger.info(
        "Habit tracker ready",
        extra={"storage": config.STORAGE, "streak_mode": tracker.streak_mode.value},
    )
    return tracker


def get_tracker() -> HabitTracker:
    """Return the tracker bound to the current app."""

    tracker = current_app.extensions.get(EXTENSION_KEY)
    if tracker is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("Habit tracker not initialized")
    return tracker
