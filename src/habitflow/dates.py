"""Calendar-day parsing and truncation helpers."""

from __future__ import annotations

from datetime import date, datetime


def parse_day(raw: str) -> date:
    """Parse ``yyyy-MM-dd`` (or a full ISO datetime) into a calendar date.

    Any time-of-day component is discarded.
    """

    text = raw.strip()
    if not text:
        raise ValueError("Invalid date format: empty value")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        # datetime.fromisoformat only understands a trailing "Z" from 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date format: {raw!r}") from exc


def to_day(value: date | datetime | str) -> date:
    """Normalise a date, datetime or date string to a plain calendar date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_day(value)
    raise TypeError(f"Expected a date, datetime or string, got {type(value).__name__}")


__all__ = ["parse_day", "to_day"]
