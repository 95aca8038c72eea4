"""Database engine ownership and session creation."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.meredith.runtime.config.config_data import ConfigData
from src.meredith.runtime.context import get_config


def build_engine(config: ConfigData) -> Engine:
    """Create the SQLAlchemy engine described by ``config.database``.

    SQLite engines get thread-sharing connect args and no pool sizing; server
    databases get a sized, pre-pinged pool tagged with the application name.
    """
    db = config.database
    kwargs: dict[str, Any] = {"echo": db.echo}

    if db.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 20}
        if config.app.environment == "production":
            logger.warning("Running production on SQLite; use PostgreSQL instead")
    else:
        kwargs["pool_size"] = db.pool_size
        kwargs["max_overflow"] = db.max_overflow
        kwargs["pool_timeout"] = db.pool_timeout
        kwargs["pool_recycle"] = db.pool_recycle
        kwargs["pool_pre_ping"] = True
        if db.url.startswith("postgresql"):
            kwargs["connect_args"] = {
                "application_name": f"meredith_{config.app.environment}",
                "connect_timeout": 30,
            }

    engine = create_engine(db.connection_string, **kwargs)
    logger.bind(
        backend=engine.dialect.name,
        pool_size=None if db.is_sqlite else db.pool_size,
    ).info("Database engine created for {}", config.app.environment)
    return engine


class DbSessionService:
    """Own the engine and hand out sessions bound to it.

    Tests pass their own engine to share an in-memory database.
    """

    def __init__(self, engine: Engine | None = None):
        self._engine = engine if engine is not None else build_engine(get_config())

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        # Entities are copied out of rows, so nothing needs reloading after commit
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.bind(error_type=type(e).__name__).error("Transaction rolled back: {}", e)
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Return True when ``SELECT 1`` succeeds."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error("Database health check failed: {}", e)
            return False
        return True

    def get_pool_status(self) -> dict[str, int]:
        """Connection pool counters; zero for pools that do not track them."""
        pool = self._engine.pool

        def counter(name: str) -> int:
            method = getattr(pool, name, None)
            return method() if callable(method) else 0

        return {
            "size": counter("size"),
            "checked_in": counter("checkedin"),
            "checked_out": counter("checkedout"),
            "overflow": counter("overflow"),
        }
