"""Explicit schema setup, run once at startup or from the CLI."""

from loguru import logger
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all missing tables. Existing tables are left untouched."""
        from src.bookstore.entities.service.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database schema ready: {}", ", ".join(self.table_names()))

    def table_names(self) -> list[str]:
        return sorted(inspect(self._engine).get_table_names())
