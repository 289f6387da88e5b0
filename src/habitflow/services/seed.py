"""Sample habits with a month of randomized history for demos."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Optional

from ..logging_config import get_logger
from ..models.habit import HabitStatus
from .tracker import HabitTracker

logger = get_logger(__name__)

SAMPLE_CREATED_AT = date(2023, 3, 1)
COMPLETION_PROBABILITY = 0.7

HABIT_SPECS = [
    {
        "name": "Morning Meditation",
        "description": "15 minutes of mindfulness meditation",
        "frequency_days": "1,2,3,4,5",
        "reminder_time": time(6, 0),
        "color": "#4F46E5",
    },
    {
        "name": "Exercise",
        "description": "45 minutes workout session",
        "frequency_days": "1,3,5",
        "reminder_time": time(17, 30),
        "color": "#A855F7",
    },
    {
        "name": "Read a Book",
        "description": "Read for 30 minutes",
        "frequency_days": "0,1,2,3,4,5,6",
        "reminder_time": time(20, 0),
        "color": "#F97316",
    },
    {
        "name": "Drink Water",
        "description": "8 glasses throughout the day",
        "frequency_days": "0,1,2,3,4,5,6",
        "reminder_time": time(9, 0),
        "color": "#06B6D4",
    },
]


@dataclass(slots=True)
class SeedSummary:
    """Counts returned after seeding."""

    habits: int
    logs: int


def seed_sample_data(
    tracker: HabitTracker,
    *,
    days: int = 30,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> SeedSummary:
    """Create the sample habits and one log per habit for each of the last ``days`` days.

    Each log is completed with 70% probability. Pass a seeded ``rng`` for
    repeatable data.
    """

    rng = rng or random.Random()
    today = today or tracker.clock()

    habit_ids = [
        tracker.create_habit(spec, created_at=SAMPLE_CREATED_AT).id for spec in HABIT_SPECS
    ]

    logs = 0
    for offset in range(days):
        day = today - timedelta(days=offset)
        for habit_id in habit_ids:
            completed = rng.random() < COMPLETION_PROBABILITY
            tracker.create_or_update_habit_log(
                {
                    "habit_id": habit_id,
                    "date": day,
                    "status": HabitStatus.COMPLETED if completed else HabitStatus.PENDING,
                }
            )
            logs += 1

    logger.info("Sample data seeded", extra={"habits": len(habit_ids), "logs": logs})
    return SeedSummary(habits=len(habit_ids), logs=logs)


__all__ = ["HABIT_SPECS", "SeedSummary", "seed_sample_data"]
