"""Flask CLI commands for HabitFlow."""

from __future__ import annotations

import json
import random

import click

from .extensions import get_tracker
from .schemas.habit import DashboardStatsRead


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitflow-seed")
    @click.option("--days", default=30, show_default=True, help="Days of history per habit")
    @click.option("--seed", "rng_seed", type=int, default=None, help="Random seed for repeatable data")
    def habitflow_seed(days: int, rng_seed: int | None) -> None:
        """Load the sample habits with randomized history."""

        from .services.seed import seed_sample_data

        summary = seed_sample_data(get_tracker(), days=days, rng=random.Random(rng_seed))
        click.echo(f"Seeded {summary.habits} habits and {summary.logs} logs.")

    @app.cli.command("habitflow-stats")
    def habitflow_stats() -> None:
        """Print dashboard statistics as JSON."""

        stats = get_tracker().get_dashboard_stats()
        click.echo(json.dumps(DashboardStatsRead.model_validate(stats).to_json()))
