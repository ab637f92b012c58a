"""
Central pytest configuration for the barbershop reporting tests.

Environment variables are set before the application is imported so the
import-time configuration (timezone, default rate, lazy engine) picks up
the test values.
"""

import os
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

# Test database configuration (set early so import-time engines use it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["TZ"] = "UTC"
os.environ["LOG_TO_FILE"] = "0"
os.environ.setdefault("LOG_LEVEL", "WARNING")
for _name in ("COMMISSION_DEFAULT_RATE", "ACTIVE_CLIENT_WINDOW_DAYS", "REPORT_YEARS_BACK"):
    os.environ.pop(_name, None)

from config.markers import *  # noqa: E402,F401,F403

UTC = ZoneInfo("UTC")


# =====================================================
# CLOCK FIXTURES
# =====================================================


@pytest.fixture
def now():
    """Fixed evaluation instant: Wednesday 2025-08-20 15:30 UTC."""
    return datetime(2025, 8, 20, 15, 30, tzinfo=UTC)


# =====================================================
# FLASK APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def app():
    """Create a Flask application for testing with proper configuration."""
    from barbershop.main import create_app

    app = create_app()
    app.config.update(
        {
            "TESTING": True,
            "PROPAGATE_EXCEPTIONS": True,  # Show exceptions in tests
        }
    )
    return app


@pytest.fixture
def client(app):
    """Create a test client for Flask application with proper context."""
    with app.test_client() as client:
        with app.app_context():
            yield client


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def db_session():
    """Session on a freshly created in-memory schema, dropped afterwards."""
    from barbershop.db.session import SessionLocal, create_tables, drop_tables

    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        drop_tables()

