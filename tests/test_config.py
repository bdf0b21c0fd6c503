import pytest

from config import SyncConfig


ENV_VARS = [
    "DATABASE_URL",
    "DB_POOL_SIZE",
    "POINT_TABLE",
    "POINT_ID_COLUMN",
    "QDRANT_URL",
    "QDRANT_API_KEY",
    "QDRANT_TIMEOUT",
    "SYNC_PAGE_SIZE",
    "SYNC_WORKERS",
    "SYNC_MAX_RETRIES",
    "SYNC_COLLECTIONS",
    "SYNC_DRY_RUN",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/trieve")

    config = SyncConfig()

    assert config.validate() == (True, "")
    assert config.page_size == 1000
    assert config.workers == 1
    assert config.db_pool_size == 10
    assert config.max_retries == 0
    assert config.qdrant_url == "http://localhost:6333"
    assert config.qdrant_api_key is None
    assert config.point_table == "chunk_metadata"
    assert config.point_id_column == "qdrant_point_id"
    assert config.collections == []
    assert config.dry_run is False


def test_database_url_is_required():
    assert SyncConfig().validate() == (False, "DATABASE_URL is required")


def test_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/trieve")
    monkeypatch.setenv("SYNC_PAGE_SIZE", "200")
    monkeypatch.setenv("SYNC_WORKERS", "4")
    monkeypatch.setenv("SYNC_COLLECTIONS", " a, b ,,c ")
    monkeypatch.setenv("SYNC_DRY_RUN", "Yes")
    monkeypatch.setenv("QDRANT_API_KEY", "secret")

    config = SyncConfig()

    assert config.page_size == 200
    assert config.workers == 4
    assert config.collections == ["a", "b", "c"]
    assert config.dry_run is True
    assert config.qdrant_api_key == "secret"
    assert "secret" not in config.describe()
    assert "dry run" in config.describe()


def test_non_integer_setting_raises(monkeypatch):
    monkeypatch.setenv("SYNC_PAGE_SIZE", "lots")

    with pytest.raises(ValueError, match="SYNC_PAGE_SIZE"):
        SyncConfig()


@pytest.mark.parametrize(
    "name, value, message",
    [
        ("DB_POOL_SIZE", "25", "DB_POOL_SIZE"),
        ("SYNC_PAGE_SIZE", "0", "SYNC_PAGE_SIZE"),
        ("SYNC_WORKERS", "0", "SYNC_WORKERS"),
        ("SYNC_MAX_RETRIES", "-1", "SYNC_MAX_RETRIES"),
        ("POINT_TABLE", "chunks; drop table x", "POINT_TABLE"),
    ],
)
def test_invalid_values(monkeypatch, name, value, message):
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/trieve")
    monkeypatch.setenv(name, value)

    is_valid, error = SyncConfig().validate()

    assert not is_valid
    assert message in error
