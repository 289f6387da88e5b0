"""Pydantic payloads for habit and habit log operations."""

from __future__ import annotations

import re
from datetime import date, time
from typing import Iterable, Optional

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..dates import to_day
from ..models.habit import DEFAULT_COLOR, EVERY_DAY, HabitStatus

_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _clean_name(value: Optional[str]) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Please provide a habit name.")
    return value.strip()


def _clean_frequency(value: str | Iterable[int] | None) -> str:
    """Normalise weekday indices to a sorted, de-duplicated ``"0,1,..."`` string."""

    if value is None:
        raise ValueError("Frequency days cannot be empty.")
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",") if part.strip()]
    else:
        parts = [str(part) for part in value]
    if not parts:
        raise ValueError("Frequency days cannot be empty.")

    days: set[int] = set()
    for part in parts:
        if not part.isdigit() or not 0 <= int(part) <= 6:
            raise ValueError(f"Invalid weekday index {part!r}; expected 0-6.")
        days.add(int(part))
    return ",".join(str(day) for day in sorted(days))


def _clean_color(value: Optional[str]) -> str:
    if not isinstance(value, str) or not _COLOR_PATTERN.match(value):
        raise ValueError("Color must be a hex value like #4F46E5.")
    return value.upper()


class _Payload(BaseModel):
    """Accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class HabitCreate(_Payload):
    """Fields required to create a habit."""

    name: str = Field(max_length=80)
    description: Optional[str] = Field(default=None, max_length=255)
    frequency_days: str = Field(default=EVERY_DAY)
    reminder_time: Optional[time] = None
    color: str = Field(default=DEFAULT_COLOR)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)

    @field_validator("frequency_days", mode="before")
    @classmethod
    def validate_frequency(cls, value):
        return _clean_frequency(value)

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, value):
        return _clean_color(value)

    @field_validator("description", mode="after")
    @classmethod
    def blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class HabitUpdate(_Payload):
    """Partial habit update; only fields the caller sent are applied."""

    name: Optional[str] = Field(default=None, max_length=80)
    description: Optional[str] = Field(default=None, max_length=255)
    frequency_days: Optional[str] = None
    reminder_time: Optional[time] = None
    color: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)

    @field_validator("frequency_days", mode="before")
    @classmethod
    def validate_frequency(cls, value):
        return _clean_frequency(value)

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, value):
        return _clean_color(value)

    @field_validator("description", mode="after")
    @classmethod
    def blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class HabitLogUpsert(_Payload):
    """Create-or-update payload for a single day's log.

    ``status`` is canonical. ``completed`` is accepted for compatibility and
    mapped onto a status; when both are sent they must agree.
    """

    habit_id: int = Field(ge=1)
    occurred_on: date = Field(alias="date")
    completed: Optional[bool] = None
    status: Optional[HabitStatus] = None

    @field_validator("occurred_on", mode="before")
    @classmethod
    def truncate_day(cls, value):
        if isinstance(value, (str, date)):
            return to_day(value)
        return value

    @model_validator(mode="after")
    def check_consistency(self) -> "HabitLogUpsert":
        if self.completed is None or self.status is None:
            return self
        if self.completed and self.status is not HabitStatus.COMPLETED:
            raise ValueError("A completed log must have status 'completed'.")
        if not self.completed and self.status is HabitStatus.COMPLETED:
            raise ValueError("Status 'completed' requires completed=true.")
        return self

    def resolved_status(self) -> Optional[HabitStatus]:
        """Return the status to write, or None when the caller sent neither field."""

        if self.status is not None:
            return self.status
        if self.completed is None:
            return None
        return HabitStatus.COMPLETED if self.completed else HabitStatus.PENDING


class HabitLogToggle(_Payload):
    """Toggle request for a habit on a day."""

    habit_id: int = Field(ge=1)
    occurred_on: date = Field(alias="date")

    @field_validator("occurred_on", mode="before")
    @classmethod
    def truncate_day(cls, value):
        if isinstance(value, (str, date)):
            return to_day(value)
        return value


class _Response(BaseModel):
    """Read models: built from attributes, serialised with camelCase keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class HabitRead(_Response):
    id: int
    name: str
    description: Optional[str] = None
    frequency_days: str
    reminder_time: Optional[time] = None
    color: str
    created_at: date


class HabitLogRead(_Response):
    id: int
    habit_id: int
    occurred_on: date = Field(serialization_alias="date")
    completed: bool
    status: HabitStatus


class HabitWithStatsRead(HabitRead):
    current_streak: int
    longest_streak: int
    completion_rate: int
    logs: list[HabitLogRead] = Field(default_factory=list)

    @classmethod
    def from_stats(cls, item) -> "HabitWithStatsRead":
        base = HabitRead.model_validate(item.habit).model_dump()
        return cls(
            **base,
            current_streak=item.current_streak,
            longest_streak=item.longest_streak,
            completion_rate=item.completion_rate,
            logs=[HabitLogRead.model_validate(log) for log in item.logs],
        )


class DashboardStatsRead(_Response):
    current_streaks: int
    completion_rate: int
    total_habits: int


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
