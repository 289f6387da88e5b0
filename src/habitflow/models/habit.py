"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, time
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

DEFAULT_COLOR = "#4F46E5"
EVERY_DAY = "0,1,2,3,4,5,6"


class HabitStatus(str, Enum):
    """Canonical state of a single day's log."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Habit(SQLModel, table=True):
    """A user-defined recurring activity."""

    __tablename__: ClassVar[str] = "habit"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    # Weekday indices, 0 = Sunday. Stored for display only.
    frequency_days: str = Field(default=EVERY_DAY, nullable=False, max_length=32)
    reminder_time: Optional[time] = Field(default=None)
    color: str = Field(default=DEFAULT_COLOR, nullable=False, max_length=16)
    created_at: date = Field(default_factory=date.today, nullable=False)


class HabitLog(SQLModel, table=True):
    """Completion state of one habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_log"
    __table_args__ = (
        UniqueConstraint("habit_id", "occurred_on", name="uq_habit_log_habit_day"),
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    # No foreign key: logs may outlive their habit when cascade delete is off.
    habit_id: int = Field(nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    status: str = Field(default=HabitStatus.PENDING.value, nullable=False, max_length=16)

    @property
    def completed(self) -> bool:
        return self.status == HabitStatus.COMPLETED.value
