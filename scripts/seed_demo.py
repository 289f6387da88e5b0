"""Demo data seeding script for the SQLite store."""

from __future__ import annotations

import os

from habitflow.config import BaseConfig
from habitflow.extensions import build_tracker
from habitflow.services.seed import seed_sample_data


def seed_demo() -> None:
    """Populate the SQLite database with the sample habits."""

    os.environ.setdefault("HABITFLOW_STORAGE", "sqlite")
    config = BaseConfig()
    tracker = build_tracker(config)
    if tracker.list_habits():
        print("Database already has habits; skipping seed.")
        return
    summary = seed_sample_data(tracker)
    print(f"Seeded {summary.habits} habits and {summary.logs} logs into {config.DATABASE_URL}")


if __name__ == "__main__":
    seed_demo()
