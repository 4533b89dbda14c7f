"""Database engine and session factory used across the application."""

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from bookshelf.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig):
        """Create the shared, pooled engine. No connection is opened yet."""

        self._config = db_config
        engine_kwargs = {
            "pool_pre_ping": True,  # Validate connections before use
            "echo": False,
            "connect_args": self._get_connect_args(db_config),
        }

        if db_config.backend == "sqlite" and self._is_memory_sqlite(db_config):
            # One connection shared by every thread, or each would see its own database
            engine_kwargs["poolclass"] = StaticPool

        logger.info(
            "Initializing database engine using connection string: {}",
            db_config.safe_connection_string,
        )
        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

    @staticmethod
    def _is_memory_sqlite(db_config: DatabaseConfig) -> bool:
        return make_url(db_config.connection_string).database in (None, "", ":memory:")

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if db_config.backend == "postgresql":
            connect_args.update(
                {
                    "application_name": "bookshelf",
                    "connect_timeout": db_config.connect_timeout,
                    # The server aborts statements that outlive the request deadline
                    "options": f"-c statement_timeout={db_config.statement_timeout_ms}",
                }
            )

        elif db_config.backend == "sqlite":
            connect_args.update(
                {
                    "check_same_thread": False,  # Sessions hop between worker threads
                    "timeout": 20,  # Lock timeout
                }
            )

        return connect_args

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Rows stay readable after commit
            autoflush=True,
        )

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
