"""
Unit Tests for Settings
"""
import pytest
from pydantic import ValidationError

from app.core.config import Settings, parse_cors_origins


class TestSettings:
    """Test settings parsing and derived values"""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.MOCK_LIST_HARD_CAP == 100
        assert config.MOCK_MAX_DELAY_MS == 5000
        assert config.MOCK_API_KEY_HEADER == "x-api-key"

    def test_mock_prefix_normalized(self):
        assert Settings(_env_file=None, MOCK_PREFIX="api/mock/").MOCK_PREFIX == "/api/mock"

    def test_hard_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MOCK_LIST_HARD_CAP=0)

    def test_postgres_url_uses_asyncpg(self):
        config = Settings(_env_file=None, DATABASE_URL="postgresql://u:p@db:5432/mock")

        assert config.get_database_url() == "postgresql+asyncpg://u:p@db:5432/mock"

    def test_sqlite_url_uses_aiosqlite(self):
        config = Settings(_env_file=None, DATABASE_URL="sqlite:///./mock.db")

        assert config.get_database_url() == "sqlite+aiosqlite:///./mock.db"

    def test_async_url_untouched(self):
        config = Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///./x.db")

        assert config.get_database_url() == "sqlite+aiosqlite:///./x.db"

    def test_is_production(self):
        assert Settings(_env_file=None, ENVIRONMENT="production").is_production
        assert not Settings(_env_file=None, ENVIRONMENT="development").is_production


class TestParseCorsOrigins:

    def test_comma_separated(self):
        assert parse_cors_origins("http://a, http://b") == ["http://a", "http://b"]

    def test_json_list(self):
        assert parse_cors_origins('["http://a"]') == ["http://a"]

    def test_list_passthrough(self):
        assert parse_cors_origins(["http://a"]) == ["http://a"]
