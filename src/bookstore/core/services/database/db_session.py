"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from src.bookstore.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    """Owns the shared engine and hands out per-request sessions.

    Constructed once by the application lifespan and disposed on shutdown.
    """

    def __init__(self, db_config: DatabaseConfig):
        self._config = db_config
        engine_kwargs = self._get_engine_kwargs(db_config)
        logger.info(
            "Initializing database engine for {} backend",
            "sqlite" if db_config.is_sqlite else "server",
        )
        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

    @staticmethod
    def _get_engine_kwargs(db_config: DatabaseConfig) -> dict[str, Any]:
        """Pool and connection arguments for the configured backend."""
        engine_kwargs: dict[str, Any] = {"echo": db_config.echo}

        if db_config.is_sqlite:
            # Sessions are used from FastAPI's threadpool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if db_config.is_memory:
                # One connection, so every session sees the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
            return engine_kwargs

        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,
            }
        )
        return engine_kwargs

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that is always closed afterwards."""
        session = self.get_session()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        """Close every pooled connection."""
        logger.info("Disposing database engine")
        self._engine.dispose()
