"""Request and response schemas."""

from .habit import (
    DashboardStatsRead,
    HabitCreate,
    HabitLogRead,
    HabitLogToggle,
    HabitLogUpsert,
    HabitRead,
    HabitUpdate,
    HabitWithStatsRead,
)

__all__ = [
    "DashboardStatsRead",
    "HabitCreate",
    "HabitLogRead",
    "HabitLogToggle",
    "HabitLogUpsert",
    "HabitRead",
    "HabitUpdate",
    "HabitWithStatsRead",
]
