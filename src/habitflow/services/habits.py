"""Habit statistics: streaks, completion rates and dashboard aggregates."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable

from ..models.habit import Habit, HabitLog


class StreakMode(str, Enum):
    """How the current streak treats days with no log at all.

    ``ENTRIES`` counts consecutive completed log records newest-first; a
    missing day does not break the run, only an explicit non-completed log
    does. ``CALENDAR`` also stops at the first missing calendar day.
    """

    ENTRIES = "entries"
    CALENDAR = "calendar"


@dataclass(slots=True)
class HabitWithStats:
    """A habit joined with its computed statistics and its logs (newest first)."""

    habit: Habit
    current_streak: int
    longest_streak: int
    completion_rate: int
    logs: list[HabitLog] = field(default_factory=list)


@dataclass(slots=True)
class DashboardStats:
    current_streaks: int
    completion_rate: int
    total_habits: int


def sort_logs(logs: Iterable[HabitLog]) -> list[HabitLog]:
    """Return logs ordered by date, most recent first."""

    return sorted(logs, key=lambda log: log.occurred_on, reverse=True)


def current_streak(
    logs: Iterable[HabitLog],
    *,
    mode: StreakMode | str = StreakMode.ENTRIES,
    today: date | None = None,
) -> int:
    """Count the run of completed logs starting from the most recent one."""

    mode = StreakMode(mode)
    ordered = sort_logs(logs)
    if not ordered:
        return 0

    if mode is StreakMode.CALENDAR:
        today = today or date.today()
        # A run that ended before yesterday is no longer current.
        if today - ordered[0].occurred_on > timedelta(days=1):
            return 0

    streak = 0
    previous: date | None = None
    for log in ordered:
        if not log.completed:
            break
        if (
            mode is StreakMode.CALENDAR
            and previous is not None
            and log.occurred_on != previous - timedelta(days=1)
        ):
            break
        streak += 1
        previous = log.occurred_on
    return streak


def longest_streak(logs: Iterable[HabitLog]) -> int:
    """Longest run of completed logs in date order, ignoring day gaps."""

    longest = 0
    run = 0
    for log in sorted(logs, key=lambda item: item.occurred_on):
        if log.completed:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest


def completion_rate(completed: int, total: int) -> int:
    """Whole-number percentage of ``completed`` over ``total``, rounding half up."""

    if total <= 0:
        return 0
    ratio = Decimal(completed * 100) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def habit_with_stats(
    habit: Habit,
    logs: Iterable[HabitLog],
    *,
    mode: StreakMode | str = StreakMode.ENTRIES,
    today: date | None = None,
) -> HabitWithStats:
    ordered = sort_logs(logs)
    completed = sum(1 for log in ordered if log.completed)
    return HabitWithStats(
        habit=habit,
        current_streak=current_streak(ordered, mode=mode, today=today),
        longest_streak=longest_streak(ordered),
        completion_rate=completion_rate(completed, len(ordered)),
        logs=ordered,
    )


def habits_with_stats(
    habits: Iterable[Habit],
    logs: Iterable[HabitLog],
    *,
    mode: StreakMode | str = StreakMode.ENTRIES,
    today: date | None = None,
) -> list[HabitWithStats]:
    """Join every habit with its own logs and statistics."""

    logs_by_habit: dict[int, list[HabitLog]] = defaultdict(list)
    for log in logs:
        logs_by_habit[log.habit_id].append(log)

    return [
        habit_with_stats(habit, logs_by_habit.get(habit.id, []), mode=mode, today=today)
        for habit in habits
    ]


def dashboard_stats(
    habits: Iterable[Habit],
    logs: Iterable[HabitLog],
    *,
    mode: StreakMode | str = StreakMode.ENTRIES,
    today: date | None = None,
) -> DashboardStats:
    """Aggregate streaks over habits and a completion rate over every log.

    The rate is global over raw log count (orphaned logs included), not an
    average of per-habit rates.
    """

    habits = list(habits)
    logs = list(logs)
    per_habit = habits_with_stats(habits, logs, mode=mode, today=today)
    completed = sum(1 for log in logs if log.completed)
    return DashboardStats(
        current_streaks=sum(item.current_streak for item in per_habit),
        completion_rate=completion_rate(completed, len(logs)),
        total_habits=len(habits),
    )


__all__ = [
    "DashboardStats",
    "HabitWithStats",
    "StreakMode",
    "completion_rate",
    "current_streak",
    "dashboard_stats",
    "habit_with_stats",
    "habits_with_stats",
    "longest_streak",
    "sort_logs",
]
