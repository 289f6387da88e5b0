"""Habit tracker operations consumed by the HTTP layer and the CLI."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..dates import to_day
from ..domain.repositories.habit import HabitRepository
from ..errors import ValidationFailed
from ..logging_config import get_logger
from ..models.habit import Habit, HabitLog
from ..schemas.habit import HabitCreate, HabitLogUpsert, HabitUpdate
from .habits import (
    DashboardStats,
    HabitWithStats,
    StreakMode,
    dashboard_stats,
    habits_with_stats,
)

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)
Payload = Union[Mapping[str, Any], BaseModel]
DayLike = Union[date, datetime, str]


def validate_payload(schema: type[SchemaT], payload: Payload) -> SchemaT:
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed.from_pydantic(exc) from exc


def _coerce_day(value: DayLike) -> date:
    try:
        return to_day(value)
    except (TypeError, ValueError) as exc:
        raise ValidationFailed("Invalid date format", {"date": [str(exc)]}) from exc


class HabitTracker:
    """Habit CRUD, daily logs and statistics over an injected repository."""

    def __init__(
        self,
        repository: HabitRepository,
        *,
        streak_mode: StreakMode | str = StreakMode.ENTRIES,
        cascade_delete: bool = True,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.repository = repository
        self.streak_mode = StreakMode(streak_mode)
        self.cascade_delete = cascade_delete
        self.clock = clock

    # Habits
    def list_habits(self) -> list[Habit]:
        return self.repository.list_habits()

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        return self.repository.get_habit(habit_id)

    def create_habit(self, payload: Payload, *, created_at: date | None = None) -> Habit:
        form = validate_payload(HabitCreate, payload)
        habit = Habit(**form.model_dump(), created_at=created_at or self.clock())
        created = self.repository.create_habit(habit)
        logger.info(f"Habit created: {created.name}", extra={"habit_id": created.id})
        return created

    def update_habit(self, habit_id: int, payload: Payload) -> Optional[Habit]:
        """Apply a partial update; returns None when the habit does not exist."""

        form = validate_payload(HabitUpdate, payload)
        updated = self.repository.update_habit(habit_id, form.changes())
        if updated is None:
            logger.info("Update skipped, habit not found", extra={"habit_id": habit_id})
        return updated

    def delete_habit(self, habit_id: int) -> bool:
        """Delete a habit, and its logs when cascade delete is enabled.

        Unknown IDs return False rather than raising.
        """

        return self.repository.delete_habit(habit_id, cascade=self.cascade_delete)

    # Logs
    def get_habit_logs_for_date(self, day: DayLike) -> list[HabitLog]:
        return self.repository.list_logs_for_date(_coerce_day(day))

    def get_habit_log(self, habit_id: int, day: DayLike) -> Optional[HabitLog]:
        return self.repository.get_log(habit_id, _coerce_day(day))

    def create_or_update_habit_log(self, payload: Payload) -> HabitLog:
        form = validate_payload(HabitLogUpsert, payload)
        return self.repository.upsert_log(
            form.habit_id, form.occurred_on, status=form.resolved_status()
        )

    def toggle_habit_completion(self, habit_id: int, day: DayLike) -> HabitLog:
        log = self.repository.toggle_log(habit_id, _coerce_day(day))
        logger.debug(
            "Habit log toggled",
            extra={"habit_id": habit_id, "date": log.occurred_on.isoformat(), "status": log.status},
        )
        return log

    # Statistics
    def get_habits_with_stats(self) -> list[HabitWithStats]:
        return habits_with_stats(
            self.repository.list_habits(),
            self.repository.list_logs(),
            mode=self.streak_mode,
            today=self.clock(),
        )

    def get_dashboard_stats(self) -> DashboardStats:
        return dashboard_stats(
            self.repository.list_habits(),
            self.repository.list_logs(),
            mode=self.streak_mode,
            today=self.clock(),
        )


__all__ = ["HabitTracker", "validate_payload"]
