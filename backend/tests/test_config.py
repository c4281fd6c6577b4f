"""
Tests for connection settings helpers.
"""
from receptionist.config.redis import build_redis_url
from receptionist.config.settings import Settings
from receptionist.models.database import build_database_url


def test_database_url_from_fields():
    config = Settings(_env_file=None, DATABASE_URL=None, DB_USER="u", DB_PASSWORD="p",
                      DB_HOST="db", DB_PORT=5433, DB_NAME="calls")

    assert build_database_url(config) == "postgresql+asyncpg://u:p@db:5433/calls"


def test_database_url_override():
    config = Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///./receptionist.db")

    assert build_database_url(config) == "sqlite+aiosqlite:///./receptionist.db"


def test_redis_url_with_and_without_password():
    assert build_redis_url(Settings(_env_file=None, REDIS_HOST="cache", REDIS_PORT=6380,
                                    REDIS_PASSWORD=None, REDIS_DB=2)) == "redis://cache:6380/2"
    assert build_redis_url(Settings(_env_file=None, REDIS_HOST="cache", REDIS_PORT=6379,
                                    REDIS_PASSWORD="pw", REDIS_DB=0)) == "redis://:pw@cache:6379/0"
