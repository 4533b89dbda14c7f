"""Database initialization script."""

from bookshelf.core.errors import DatabaseStartupError
from bookshelf.core.services.database import DbManageService, DbSessionService
from bookshelf.runtime.config.config_data import ConfigData
from bookshelf.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> None:
    """Create the books table, failing when the database does not answer."""
    config = config or get_config()
    database_service = DbSessionService(config.database)
    try:
        if not database_service.health_check():
            raise DatabaseStartupError("Database is not reachable")
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
