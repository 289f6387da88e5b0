"""Error types surfaced by the habit tracker."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake


class HabitFlowError(Exception):
    """Base class for tracker errors."""


class ValidationFailed(HabitFlowError):
    """Caller supplied input that does not satisfy the habit or log contract."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationFailed":
        """Flatten a pydantic error into field -> messages."""

        structured: dict[str, list[str]] = {}
        for error in exc.errors(include_url=False):
            loc = error.get("loc", ())
            key = to_snake(str(loc[0])) if loc else "__root__"
            structured.setdefault(key, []).append(error.get("msg", "Invalid value"))

        summary = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in structured.items()
        )
        return cls(f"Validation error: {summary}", structured)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


__all__ = ["HabitFlowError", "ValidationFailed"]
