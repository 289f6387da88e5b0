"""Contract tests run against both habit store backends."""

from __future__ import annotations

from datetime import date, datetime, time

from habitflow.models import Habit, HabitStatus


def _habit(name: str = "Read") -> Habit:
    return Habit(name=name, frequency_days="1,3,5", created_at=date(2024, 1, 1))


def test_habit_crud(repository):
    """Create, read, update and delete a habit."""
    created = repository.create_habit(_habit("Meditate"))
    assert created.id is not None

    fetched = repository.get_habit(created.id)
    assert fetched is not None
    assert fetched.name == "Meditate"

    updated = repository.update_habit(created.id, {"name": "Meditate daily", "reminder_time": time(6, 30)})
    assert updated.name == "Meditate daily"
    assert updated.reminder_time == time(6, 30)
    assert updated.frequency_days == "1,3,5"
    assert updated.id == created.id

    assert [habit.name for habit in repository.list_habits()] == ["Meditate daily"]

    assert repository.delete_habit(created.id) is True
    assert repository.get_habit(created.id) is None


def test_unknown_habit(repository):
    assert repository.get_habit(404) is None
    assert repository.update_habit(404, {"name": "Nope"}) is None
    assert repository.delete_habit(404) is False


def test_habit_ids_never_reused(repository):
    first = repository.create_habit(_habit("One"))
    second = repository.create_habit(_habit("Two"))
    repository.delete_habit(second.id)
    third = repository.create_habit(_habit("Three"))
    assert first.id < second.id < third.id


def test_returned_habits_are_detached(repository):
    created = repository.create_habit(_habit("Read"))
    fetched = repository.get_habit(created.id)
    fetched.name = "Changed locally"
    assert repository.get_habit(created.id).name == "Read"


def test_upsert_then_get_returns_same_record(repository):
    day = date(2024, 5, 1)
    created = repository.upsert_log(1, day, status=HabitStatus.IN_PROGRESS)

    fetched = repository.get_log(1, day)
    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.status == HabitStatus.IN_PROGRESS.value
    assert fetched.completed is False


def test_upsert_same_key_updates_in_place(repository):
    """Two upserts on one (habit, day) leave a single record with a stable ID."""
    day = date(2024, 5, 1)
    first = repository.upsert_log(1, day, status=HabitStatus.PENDING)
    second = repository.upsert_log(1, day, status=HabitStatus.COMPLETED)

    assert second.id == first.id
    assert second.completed is True
    logs = repository.list_logs_for_habit(1)
    assert len(logs) == 1
    assert logs[0].status == HabitStatus.COMPLETED.value


def test_upsert_without_status_keeps_existing(repository):
    day = date(2024, 5, 1)
    repository.upsert_log(1, day, status=HabitStatus.COMPLETED)
    merged = repository.upsert_log(1, day)
    assert merged.status == HabitStatus.COMPLETED.value


def test_upsert_new_log_defaults_to_pending(repository):
    log = repository.upsert_log(1, date(2024, 5, 1))
    assert log.status == HabitStatus.PENDING.value
    assert log.completed is False


def test_time_of_day_is_ignored(repository):
    created = repository.upsert_log(1, datetime(2024, 5, 1, 23, 59), status=HabitStatus.COMPLETED)
    assert created.occurred_on == date(2024, 5, 1)

    fetched = repository.get_log(1, datetime(2024, 5, 1, 0, 0, 1))
    assert fetched is not None
    assert fetched.id == created.id
    assert [log.id for log in repository.list_logs_for_date(datetime(2024, 5, 1, 12))] == [created.id]


def test_list_logs_for_date_spans_habits(repository):
    day = date(2024, 5, 1)
    repository.upsert_log(1, day, status=HabitStatus.COMPLETED)
    repository.upsert_log(2, day, status=HabitStatus.PENDING)
    repository.upsert_log(1, date(2024, 5, 2), status=HabitStatus.COMPLETED)

    logs = repository.list_logs_for_date(day)
    assert sorted(log.habit_id for log in logs) == [1, 2]
    assert len(repository.list_logs()) == 3


def test_list_logs_for_habit(repository):
    repository.upsert_log(1, date(2024, 5, 1))
    repository.upsert_log(1, date(2024, 5, 2))
    repository.upsert_log(2, date(2024, 5, 1))

    assert {log.occurred_on for log in repository.list_logs_for_habit(1)} == {
        date(2024, 5, 1),
        date(2024, 5, 2),
    }
    assert repository.list_logs_for_habit(3) == []


def test_delete_habit_cascades_to_its_logs(repository):
    habit = repository.create_habit(_habit("Read"))
    other = repository.create_habit(_habit("Run"))
    repository.upsert_log(habit.id, date(2024, 5, 1))
    repository.upsert_log(habit.id, date(2024, 5, 2))
    repository.upsert_log(other.id, date(2024, 5, 1))

    assert repository.delete_habit(habit.id) is True

    assert repository.list_logs_for_habit(habit.id) == []
    assert [log.habit_id for log in repository.list_logs()] == [other.id]


def test_delete_habit_without_cascade_keeps_logs(repository):
    habit = repository.create_habit(_habit("Read"))
    repository.upsert_log(habit.id, date(2024, 5, 1), status=HabitStatus.COMPLETED)

    assert repository.delete_habit(habit.id, cascade=False) is True

    assert repository.get_habit(habit.id) is None
    assert len(repository.list_logs_for_habit(habit.id)) == 1


def test_delete_unknown_habit_leaves_orphan_logs(repository):
    repository.upsert_log(404, date(2024, 5, 1))
    assert repository.delete_habit(404) is False
    assert len(repository.list_logs_for_habit(404)) == 1


def test_log_ids_are_monotonic(repository):
    habit = repository.create_habit(_habit("Read"))
    first = repository.upsert_log(habit.id, date(2024, 5, 1))
    second = repository.upsert_log(habit.id, date(2024, 5, 2))
    repository.delete_habit(habit.id)
    third = repository.upsert_log(habit.id, date(2024, 5, 3))
    assert first.id < second.id < third.id
