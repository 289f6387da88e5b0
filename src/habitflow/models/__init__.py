"""SQLModel table exports."""

from .habit import DEFAULT_COLOR, EVERY_DAY, Habit, HabitLog, HabitStatus

__all__ = [
    "DEFAULT_COLOR",
    "EVERY_DAY",
    "Habit",
    "HabitLog",
    "HabitStatus",
]
