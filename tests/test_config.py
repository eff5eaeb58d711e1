"""Tests for environment-driven settings."""

from dropset.core.config import Settings


def test_defaults_use_local_sqlite_store(monkeypatch):
    for name in ("DATABASE_URL", "STORAGE_NAMESPACE", "LOCAL_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.is_sqlite
    assert settings.database_url == "sqlite+aiosqlite:///./dropset.db"
    assert settings.sync_database_url == "sqlite:///./dropset.db"
    assert settings.storage_namespace == "dropset_pro"
    assert settings.local_timezone is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/dropset")
    monkeypatch.setenv("STORAGE_NAMESPACE", "dropset_test")
    monkeypatch.setenv("LOCAL_TIMEZONE", "Europe/Berlin")

    settings = Settings(_env_file=None)

    assert not settings.is_sqlite
    assert settings.sync_database_url == "postgresql://u:p@db/dropset"
    assert settings.storage_namespace == "dropset_test"
    assert settings.local_timezone == "Europe/Berlin"
