"""Engine and session wiring for the SQL-backed habit store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, NamedTuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


class Database(NamedTuple):
    engine: Engine
    session_factory: SessionFactory


def create_db_engine(config: BaseConfig) -> Engine:
    """Build an engine for ``config.DATABASE_URL`` with the config's engine options."""
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine: Engine) -> None:
    """Create the habit tables if they do not exist yet."""
    from ..models.habit import Habit, HabitLog

    SQLModel.metadata.create_all(engine, tables=[Habit.__table__, HabitLog.__table__])


def create_session_factory(engine: Engine) -> SessionFactory:
    """Return a callable opening a transactional session scope.

    The scope commits on success and rolls back on error. Objects stay
    usable after commit.
    """

    @contextmanager
    def session_scope() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return session_scope


def bootstrap_database(config: BaseConfig | None = None) -> Database:
    """Create the engine, ensure the schema, and return both with a session factory."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    logger.info("Database ready", extra={"url": engine.url.render_as_string(hide_password=True)})
    return Database(engine, create_session_factory(engine))
