"""Habit and habit log API routes."""

from __future__ import annotations

from flask import abort, jsonify, request

from ...errors import ValidationFailed
from ...extensions import get_tracker
from ...schemas.habit import (
    DashboardStatsRead,
    HabitLogRead,
    HabitLogToggle,
    HabitRead,
    HabitWithStatsRead,
)
from ...services.tracker import validate_payload
from . import bp


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return payload


@bp.get("/habits")
def list_habits():
    habits = get_tracker().list_habits()
    return jsonify([HabitRead.model_validate(habit).to_json() for habit in habits])


@bp.get("/habits/stats")
def habits_with_stats():
    items = get_tracker().get_habits_with_stats()
    return jsonify([HabitWithStatsRead.from_stats(item).to_json() for item in items])


@bp.get("/dashboard/stats")
def dashboard_stats():
    stats = get_tracker().get_dashboard_stats()
    return jsonify(DashboardStatsRead.model_validate(stats).to_json())


@bp.get("/habits/<int:habit_id>")
def get_habit(habit_id: int):
    habit = get_tracker().get_habit(habit_id)
    if habit is None:
        abort(404, description="Habit not found")
    return jsonify(HabitRead.model_validate(habit).to_json())


@bp.post("/habits")
def create_habit():
    habit = get_tracker().create_habit(_json_body())
    return jsonify(HabitRead.model_validate(habit).to_json()), 201


@bp.put("/habits/<int:habit_id>")
def update_habit(habit_id: int):
    habit = get_tracker().update_habit(habit_id, _json_body())
    if habit is None:
        abort(404, description="Habit not found")
    return jsonify(HabitRead.model_validate(habit).to_json())


@bp.delete("/habits/<int:habit_id>")
def delete_habit(habit_id: int):
    if not get_tracker().delete_habit(habit_id):
        abort(404, description="Habit not found")
    return "", 204


@bp.get("/habit-logs/date/<day>")
def habit_logs_for_date(day: str):
    logs = get_tracker().get_habit_logs_for_date(day)
    return jsonify([HabitLogRead.model_validate(log).to_json() for log in logs])


@bp.post("/habit-logs")
def upsert_habit_log():
    log = get_tracker().create_or_update_habit_log(_json_body())
    return jsonify(HabitLogRead.model_validate(log).to_json()), 201


@bp.post("/habit-logs/toggle")
def toggle_habit_log():
    form = validate_payload(HabitLogToggle, _json_body())
    log = get_tracker().toggle_habit_completion(form.habit_id, form.occurred_on)
    return jsonify(HabitLogRead.model_validate(log).to_json())
