"""Shared pytest configuration for the notification dispatcher tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``app`` package) is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()


@pytest.fixture()
def database():
    """Provide the database module with freshly created tables."""

    from app.infrastructure import database as database_module

    database_module.initialize_database()
    database_module.Base.metadata.drop_all(bind=database_module.engine, checkfirst=True)
    database_module.Base.metadata.create_all(bind=database_module.engine)
    yield database_module
    database_module.Base.metadata.drop_all(bind=database_module.engine, checkfirst=True)


@pytest.fixture()
def db_session(database):
    """Yield a session bound to the freshly created test database."""

    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def pytest_sessionfinish(session, exitstatus):
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
