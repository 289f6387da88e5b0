"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from sqlalchemy import case, delete
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session, select

from ...dates import to_day
from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog, HabitStatus
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_habits(self) -> list[Habit]:
        """List all habits in ID order."""
        with self.session_factory() as session:
            rows = list(session.exec(select(Habit).order_by(Habit.id)).all())  # type: ignore
            session.expunge_all()
            return rows

    def create_habit(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.id = None
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info("Habit created", extra={"habit_id": habit.id})
            return habit

    def update_habit(self, habit_id: int, changes: Mapping[str, Any]) -> Optional[Habit]:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return None
            for key, value in changes.items():
                if key != "id":
                    setattr(habit, key, value)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete_habit(self, habit_id: int, *, cascade: bool = True) -> bool:
        """Delete a habit, and with ``cascade`` its logs, in one transaction."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return False
            session.delete(habit)
            removed = 0
            if cascade:
                result = session.execute(delete(HabitLog).where(HabitLog.habit_id == habit_id))
                removed = result.rowcount
            session.commit()
            logger.info(
                "Habit deleted", extra={"habit_id": habit_id, "cascade": cascade, "logs_removed": removed}
            )
            return True

    # Habit log operations
    def get_log(self, habit_id: int, day: date | datetime) -> Optional[HabitLog]:
        """Get a specific habit log."""
        with self.session_factory() as session:
            obj = self._find_log(session, habit_id, to_day(day))
            if obj:
                session.expunge(obj)
            return obj

    def list_logs_for_date(self, day: date | datetime) -> list[HabitLog]:
        """Get logs across all habits for one day."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.occurred_on == to_day(day))
                .order_by(HabitLog.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_logs_for_habit(self, habit_id: int) -> list[HabitLog]:
        """Get all logs for a habit."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .order_by(HabitLog.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_logs(self) -> list[HabitLog]:
        with self.session_factory() as session:
            rows = list(session.exec(select(HabitLog).order_by(HabitLog.id)).all())  # type: ignore
            session.expunge_all()
            return rows

    def upsert_log(
        self, habit_id: int, day: date | datetime, *, status: Optional[HabitStatus] = None
    ) -> HabitLog:
        """Insert or update a habit log with a single INSERT ... ON CONFLICT."""
        occurred_on = to_day(day)
        statement = sqlite_insert(HabitLog).values(
            habit_id=habit_id,
            occurred_on=occurred_on,
            status=HabitStatus(status or HabitStatus.PENDING).value,
        )
        if status is None:
            statement = statement.on_conflict_do_nothing(index_elements=["habit_id", "occurred_on"])
        else:
            statement = statement.on_conflict_do_update(
                index_elements=["habit_id", "occurred_on"],
                set_={"status": statement.excluded.status},
            )
        return self._write_log(statement, habit_id, occurred_on)

    def toggle_log(self, habit_id: int, day: date | datetime) -> HabitLog:
        """Flip completion for a day; the database evaluates the new status."""
        occurred_on = to_day(day)
        statement = (
            sqlite_insert(HabitLog)
            .values(habit_id=habit_id, occurred_on=occurred_on, status=HabitStatus.COMPLETED.value)
            .on_conflict_do_update(
                index_elements=["habit_id", "occurred_on"],
                set_={
                    "status": case(
                        (HabitLog.status == HabitStatus.COMPLETED.value, HabitStatus.PENDING.value),
                        else_=HabitStatus.COMPLETED.value,
                    )
                },
            )
        )
        return self._write_log(statement, habit_id, occurred_on)

    @staticmethod
    def _find_log(session: Session, habit_id: int, occurred_on: date) -> Optional[HabitLog]:
        return session.exec(
            select(HabitLog)
            .where(HabitLog.habit_id == habit_id)
            .where(HabitLog.occurred_on == occurred_on)
        ).first()

    def _write_log(self, statement, habit_id: int, occurred_on: date) -> HabitLog:
        # The write opens the transaction, so the read below sees it and no
        # other connection can change the row before commit.
        with self.session_factory() as session:
            session.execute(statement)
            log = self._find_log(session, habit_id, occurred_on)
            session.commit()
            session.expunge(log)
        logger.debug(
            "Habit log written", extra={"habit_id": habit_id, "log_id": log.id, "status": log.status}
        )
        return log
