import duckdb
import pytest

from pagination import ConfigurationError
from pagination import db


@pytest.fixture(autouse=True)
def clear_caches():
    db.get_db_path.cache_clear()
    db.get_default_page_size.cache_clear()
    yield
    db.get_db_path.cache_clear()
    db.get_default_page_size.cache_clear()


def test_db_path_defaults_to_memory(monkeypatch):
    monkeypatch.delenv(db.DB_ENV_VAR, raising=False)
    assert db.get_db_path() is None


def test_db_path_from_env(monkeypatch, tmp_path):
    target = tmp_path / "pages.duckdb"
    monkeypatch.setenv(db.DB_ENV_VAR, str(target))
    assert db.get_db_path() == target


def test_default_page_size(monkeypatch):
    monkeypatch.delenv(db.PAGE_SIZE_ENV_VAR, raising=False)
    assert db.get_default_page_size() == db.DEFAULT_PAGE_SIZE


def test_page_size_from_env(monkeypatch):
    monkeypatch.setenv(db.PAGE_SIZE_ENV_VAR, "50")
    assert db.get_default_page_size() == 50


@pytest.mark.parametrize("value", ["many", "0"])
def test_invalid_page_size_env(monkeypatch, value):
    monkeypatch.setenv(db.PAGE_SIZE_ENV_VAR, value)
    with pytest.raises(ConfigurationError):
        db.get_default_page_size()


def test_connect_in_memory(monkeypatch):
    monkeypatch.delenv(db.DB_ENV_VAR, raising=False)
    with db.connect() as connection:
        assert connection.execute("SELECT 42").fetchone() == (42,)


def test_connect_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="DuckDB file not found"):
        with db.connect(tmp_path / "missing.duckdb"):
            pass


def test_connect_existing_file(tmp_path):
    path = tmp_path / "pages.duckdb"
    setup = duckdb.connect(str(path))
    setup.execute("CREATE TABLE t AS SELECT 1 AS id")
    setup.close()

    with db.connect(path, read_only=True) as connection:
        assert connection.execute("SELECT id FROM t").fetchall() == [(1,)]


def test_connect_rejects_non_duckdb_file(tmp_path):
    path = tmp_path / "notes.duckdb"
    path.write_text("not a database", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Cannot open DuckDB database"):
        with db.connect(path):
            pass


def test_read_only_ignored_for_memory(monkeypatch):
    monkeypatch.delenv(db.DB_ENV_VAR, raising=False)
    with db.connect(read_only=True) as connection:
        connection.execute("CREATE TABLE t AS SELECT 1 AS id")
        assert connection.execute("SELECT id FROM t").fetchall() == [(1,)]


def test_env_path_opened_read_only(monkeypatch, tmp_path):
    path = tmp_path / "pages.duckdb"
    setup = duckdb.connect(str(path))
    setup.execute("CREATE TABLE t AS SELECT 1 AS id")
    setup.close()
    monkeypatch.setenv(db.DB_ENV_VAR, str(path))

    with db.connect(read_only=True) as connection:
        with pytest.raises(duckdb.Error):
            connection.execute("INSERT INTO t VALUES (2)")
