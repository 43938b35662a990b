# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from simpletodo.config import DEFAULT_QUERY_URL, Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "SIMPLETODO_QUERY_URL",
        "SIMPLETODO_QUERY_FIELD",
        "SIMPLETODO_TABLE_NAME",
        "SIMPLETODO_DATA_DIR",
        "SIMPLETODO_READ_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.query_url == DEFAULT_QUERY_URL == "http://localhost:8081/query"
    assert s.query_field == "sql"
    assert s.table_name == "todos"
    assert s.data_dir == Path(".local/simpletodo")
    assert s.read_timeout == 10.0


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SIMPLETODO_QUERY_URL", "http://db:9000/query")
    monkeypatch.setenv("SIMPLETODO_QUERY_FIELD", "query")
    monkeypatch.setenv("SIMPLETODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SIMPLETODO_READ_TIMEOUT_SECONDS", "not-a-number")

    s = Settings.from_env()

    assert s.query_url == "http://db:9000/query"
    assert s.query_field == "query"
    assert s.data_dir == tmp_path
    assert s.read_timeout == 10.0
