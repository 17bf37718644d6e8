from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.core.config import Settings

# Create Base class for models
Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine (and its connection pool) for the configured database.

    Called once at application startup; the engine is shared by every request.
    """
    url = settings.DATABASE_URL

    if url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    connect_args = {"sslmode": "require"} if settings.DB_SSL_REQUIRE else {}
    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        connect_args=connect_args,
    )


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY and ON DELETE CASCADE unless enabled per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine, create_tables: bool = False) -> None:
    """
    Initialize database.

    Alembic owns the schema in deployed environments; create_tables is for
    local development against a throwaway database.
    """
    from jobtracker.models import job, user  # noqa: F401  Import models to register them

    if create_tables:
        Base.metadata.create_all(bind=engine)
