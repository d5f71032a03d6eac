"""Database initialization script."""

from src.bookstore.core.services.database.db_manage import DbManageService
from src.bookstore.core.services.database.db_session import DbSessionService
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> list[str]:
    """Create all database tables and return the resulting table names."""
    config = config or get_config()
    database_service = DbSessionService(config.database)
    try:
        db_manage_service = DbManageService(database_service.engine)
        db_manage_service.create_all()
        return db_manage_service.table_names()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
