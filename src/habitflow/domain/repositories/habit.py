"""Habit repository protocol."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol

from ...models.habit import Habit, HabitLog, HabitStatus


class HabitRepository(Protocol):
    """Store for habits and their per-day logs.

    Logs are unique per ``(habit_id, day)``. Every ``day`` argument may be a
    ``datetime``; implementations truncate it to its calendar date. Each
    operation is atomic with respect to concurrent callers.
    """

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_habits(self) -> list[Habit]:
        """List all habits in ID order."""
        ...

    def create_habit(self, habit: Habit) -> Habit:
        """Persist a new habit and assign its ID."""
        ...

    def update_habit(self, habit_id: int, changes: Mapping[str, Any]) -> Optional[Habit]:
        """Apply field changes; return None for an unknown ID."""
        ...

    def delete_habit(self, habit_id: int, *, cascade: bool = True) -> bool:
        """Delete a habit, and its logs when ``cascade`` is set, atomically.

        Returns False for an unknown ID and leaves its logs alone.
        """
        ...

    # Habit log operations
    def get_log(self, habit_id: int, day: date | datetime) -> Optional[HabitLog]:
        """Get the log for a habit on a day."""
        ...

    def list_logs_for_date(self, day: date | datetime) -> list[HabitLog]:
        """Get logs for every habit on a day."""
        ...

    def list_logs_for_habit(self, habit_id: int) -> list[HabitLog]:
        """Get all logs for a habit, in storage order."""
        ...

    def list_logs(self) -> list[HabitLog]:
        """Get every stored log."""
        ...

    def upsert_log(
        self, habit_id: int, day: date | datetime, *, status: Optional[HabitStatus] = None
    ) -> HabitLog:
        """Insert or update the log at (habit_id, day), keeping an existing ID."""
        ...

    def toggle_log(self, habit_id: int, day: date | datetime) -> HabitLog:
        """Flip the day's completion, creating a completed log if absent."""
        ...


def toggled_status(existing: Optional[HabitLog]) -> HabitStatus:
    """Status a toggle writes: completed becomes pending, anything else completed."""

    if existing is not None and existing.completed:
        return HabitStatus.PENDING
    return HabitStatus.COMPLETED
