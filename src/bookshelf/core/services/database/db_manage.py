"""Schema management for the books table."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create the books table if it does not exist yet."""
        from bookshelf.entities.book import BookTable

        SQLModel.metadata.create_all(self._engine, tables=[BookTable.__table__])
        logger.info("Database initialized with tables.")
