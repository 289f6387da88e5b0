"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository, toggled_status

__all__ = ["HabitRepository", "toggled_status"]
