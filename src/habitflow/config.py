"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()

STORAGE_BACKENDS = {"memory", "sqlite"}
STREAK_MODES = {"entries", "calendar"}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_choice(name: str, default: str, choices: set[str]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in choices:
        raise ValueError(f"{name} must be one of {sorted(choices)}, got {value!r}.")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitFlow"
    DB_FILENAME = "habitflow.db"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITFLOW_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITFLOW_DEV_MODE", default=True)
        self.STORAGE = _env_choice("HABITFLOW_STORAGE", "memory", STORAGE_BACKENDS)
        self.DATABASE_URL = os.getenv("HABITFLOW_DATABASE_URL", self._build_sqlite_url())
        self.STREAK_MODE = _env_choice("HABITFLOW_STREAK_MODE", "entries", STREAK_MODES)
        self.CASCADE_DELETE = _env_bool("HABITFLOW_CASCADE_DELETE", default=True)
        self.SEED_SAMPLE_DATA = _env_bool("HABITFLOW_SEED_SAMPLE_DATA", default=False)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITFLOW_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and the SQLite file live."""

        data_root = os.getenv("HABITFLOW_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
            if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
                # One shared connection, otherwise each session sees an empty database.
                engine_options["poolclass"] = StaticPool
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration; loads sample habits unless told otherwise."""

    DEBUG = True

    def __init__(self) -> None:
        super().__init__()
        self.SEED_SAMPLE_DATA = _env_bool("HABITFLOW_SEED_SAMPLE_DATA", default=True)


class TestingConfig(BaseConfig):
    """Configuration for the test suite."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.SEED_SAMPLE_DATA = False
