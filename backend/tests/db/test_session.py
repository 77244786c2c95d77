# backend/tests/db/test_session.py
"""Tests for database session configuration."""

from sqlalchemy.pool import StaticPool

from loginlog.core.config import Settings
from loginlog.db.session import engine_options


def test_postgres_pool_settings():
    """Pool size and overflow come from settings for server databases."""
    options = engine_options(
        Settings(DATABASE_URI=None, DATABASE_POOL_SIZE=30, DATABASE_MAX_OVERFLOW=50)
    )

    assert options["pool_size"] == 30
    assert options["max_overflow"] == 50
    assert options["pool_pre_ping"] is True


def test_pool_defaults():
    options = engine_options(Settings(DATABASE_URI=None))

    assert options["pool_size"] == 20
    assert options["max_overflow"] == 40


def test_sqlite_memory_uses_static_pool():
    options = engine_options(Settings(DATABASE_URI="sqlite+aiosqlite:///:memory:"))

    assert options["poolclass"] is StaticPool
    assert "pool_size" not in options


def test_sqlite_file_has_no_pool_sizing():
    options = engine_options(Settings(DATABASE_URI="sqlite+aiosqlite:///./capture.db"))

    assert "poolclass" not in options
    assert "pool_size" not in options
