import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from barbershop.core.db import register_query_timing

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///barbershop.db"

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def get_engine():
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine
    global _database_url
    global _SessionLocal
    database_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    # If engine not created yet or DATABASE_URL changed, (re)create engine
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
            _SessionLocal = None

        url = make_url(database_url)
        is_postgres = url.drivername.startswith("postgres")

        if is_postgres:
            _engine = create_engine(
                database_url,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,  # Detects and refreshes stale connections
                pool_recycle=3600,  # Recycle connections every hour to avoid idle timeouts
                connect_args={
                    "application_name": "barbershop_reports",  # Visible in pg_stat_activity
                    "connect_timeout": 10,
                },
                echo=False,  # Controlled by logging config
            )
        elif url.drivername.startswith("sqlite") and url.database in (None, "", ":memory:"):
            # Use a single shared in-memory database across the process
            # so DDL persists across connections (tests create tables and
            # then open new sessions).
            _engine = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            _engine = create_engine(database_url, echo=False)

        register_query_timing(_engine)
        logger.debug(
            "SQLAlchemy engine created",
            extra={
                "context": {
                    "dialect": _engine.dialect.name,
                    "database": url.database,
                }
            },
        )
        _database_url = database_url
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return _SessionLocal


def SessionLocal():
    """Calling SessionLocal() returns a new Session bound to the current engine."""
    return get_sessionmaker()()


def create_tables():
    """Create all tables in database using the lazy engine."""
    # Ensure models are imported so Base.metadata is populated
    from barbershop.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from barbershop.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
