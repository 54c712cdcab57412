from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi import Request

from synergysphere.config.settings import Settings
from synergysphere.database.base import Base
from synergysphere.utils.logger import get_logger

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, pool_size: int = 10, idle_timeout: int = 10) -> Engine:
    """
    Creates the engine behind the connection pool.
    Server databases get a bounded QueuePool; in-memory SQLite shares a
    single connection so every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=0,
        pool_recycle=idle_timeout,
        pool_pre_ping=True,
    )


class Database:
    """
    Owns the engine and session factory for one application instance.
    Acquired in the app lifespan on startup and disposed on shutdown.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_engine(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            idle_timeout=settings.DB_POOL_IDLE_TIMEOUT,
        ))

    def ping(self):
        """
        Startup health check. Raises if the database is unreachable.
        """
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def create_all(self):
        # Import models so they are registered on the metadata
        import synergysphere.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connection pool disposed")


def get_db(request: Request):
    """
    Database session dependency.
    Yields a database session and ensures it is closed after request.
    Implements request-scoped transactions:
    - Commits on success
    - Rolls back on exception
    """
    db = request.app.state.database.session()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
