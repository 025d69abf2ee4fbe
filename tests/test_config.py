"""
Flavors API — Settings Tests
=============================
"""

import pytest
from pydantic import ValidationError

from flavors_api.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(database_url="sqlite+aiosqlite://")

        assert settings.port == 3000
        assert settings.host == "0.0.0.0"
        assert settings.reset_db_on_startup is False

    def test_reads_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        assert Settings(database_url="sqlite+aiosqlite://").port == 8080

    @pytest.mark.parametrize(
        "url",
        [
            "postgres://u:p@db:5432/flavors",
            "postgresql://u:p@db:5432/flavors",
        ],
    )
    def test_postgres_urls_use_asyncpg(self, url):
        settings = Settings(database_url=url)

        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/flavors"

    def test_async_url_untouched(self):
        url = "postgresql+asyncpg://u:p@db/flavors"

        assert Settings(database_url=url).database_url == url

    def test_database_url_required(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_log_level_normalized(self):
        assert Settings(database_url="sqlite+aiosqlite://", log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(database_url="sqlite+aiosqlite://", log_level="LOUD")
