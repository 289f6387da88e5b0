"""Service layer exports."""

from .habits import DashboardStats, HabitWithStats, StreakMode
from .tracker import HabitTracker

__all__ = ["DashboardStats", "HabitTracker", "HabitWithStats", "StreakMode"]
