"""In-memory implementation of the Habit repository."""

from __future__ import annotations

import itertools
import threading
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ...dates import to_day
from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog, HabitStatus
from ...domain.repositories.habit import toggled_status

logger = get_logger(__name__)

LogKey = tuple[int, date]


def _copy(record):
    # Hand out detached copies so callers cannot mutate stored state.
    return type(record).model_validate(record.model_dump())


class InMemoryHabitRepository:
    """Dict-backed habit repository with monotonic ID counters."""

    def __init__(self) -> None:
        self._habits: dict[int, Habit] = {}
        self._logs: dict[LogKey, HabitLog] = {}
        self._habit_ids = itertools.count(1)
        self._log_ids = itertools.count(1)
        self._lock = threading.RLock()

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        with self._lock:
            habit = self._habits.get(habit_id)
            return _copy(habit) if habit is not None else None

    def list_habits(self) -> list[Habit]:
        with self._lock:
            return [_copy(self._habits[key]) for key in sorted(self._habits)]

    def create_habit(self, habit: Habit) -> Habit:
        with self._lock:
            stored = _copy(habit)
            stored.id = next(self._habit_ids)
            self._habits[stored.id] = stored
            logger.info("Habit created", extra={"habit_id": stored.id})
            return _copy(stored)

    def update_habit(self, habit_id: int, changes: Mapping[str, Any]) -> Optional[Habit]:
        with self._lock:
            habit = self._habits.get(habit_id)
            if habit is None:
                return None
            for key, value in changes.items():
                if key != "id":
                    setattr(habit, key, value)
            return _copy(habit)

    def delete_habit(self, habit_id: int, *, cascade: bool = True) -> bool:
        with self._lock:
            if self._habits.pop(habit_id, None) is None:
                return False
            removed = 0
            if cascade:
                keys = [key for key in self._logs if key[0] == habit_id]
                for key in keys:
                    del self._logs[key]
                removed = len(keys)
            logger.info(
                "Habit deleted", extra={"habit_id": habit_id, "cascade": cascade, "logs_removed": removed}
            )
            return True

    # Habit log operations
    def get_log(self, habit_id: int, day: date | datetime) -> Optional[HabitLog]:
        with self._lock:
            log = self._logs.get((habit_id, to_day(day)))
            return _copy(log) if log is not None else None

    def list_logs_for_date(self, day: date | datetime) -> list[HabitLog]:
        target = to_day(day)
        with self._lock:
            return [_copy(log) for (_, occurred_on), log in self._logs.items() if occurred_on == target]

    def list_logs_for_habit(self, habit_id: int) -> list[HabitLog]:
        with self._lock:
            return [_copy(log) for (owner, _), log in self._logs.items() if owner == habit_id]

    def list_logs(self) -> list[HabitLog]:
        with self._lock:
            return [_copy(log) for log in self._logs.values()]

    def upsert_log(
        self, habit_id: int, day: date | datetime, *, status: Optional[HabitStatus] = None
    ) -> HabitLog:
        key = (habit_id, to_day(day))
        with self._lock:
            existing = self._logs.get(key)
            if existing is not None:
                if status is not None:
                    existing.status = HabitStatus(status).value
                return _copy(existing)

            log = HabitLog(
                id=next(self._log_ids),
                habit_id=habit_id,
                occurred_on=key[1],
                status=HabitStatus(status or HabitStatus.PENDING).value,
            )
            self._logs[key] = log
            logger.debug("Habit log created", extra={"habit_id": habit_id, "log_id": log.id})
            return _copy(log)

    def toggle_log(self, habit_id: int, day: date | datetime) -> HabitLog:
        # RLock: the read and the write happen under one acquisition.
        with self._lock:
            return self.upsert_log(
                habit_id, day, status=toggled_status(self._logs.get((habit_id, to_day(day))))
            )

