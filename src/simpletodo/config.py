# src/simpletodo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

One Settings object for the whole app. Every value has a default, so the
client starts against a local database server without any configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SIMPLETODO"

DEFAULT_QUERY_URL = "http://localhost:8081/query"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Query endpoint ----
    query_url: str
    query_field: str
    table_name: str

    # ---- Transport timeouts (seconds) ----
    connect_timeout: float
    read_timeout: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "simpletodo").strip() or "simpletodo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/simpletodo"))

        query_url = _env(_k("QUERY_URL"), DEFAULT_QUERY_URL).strip() or DEFAULT_QUERY_URL
        # The bundled database server reads the statement from "sql".
        query_field = _env(_k("QUERY_FIELD"), "sql").strip() or "sql"
        table_name = _env(_k("TABLE_NAME"), "todos").strip() or "todos"

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 10.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            query_url=query_url,
            query_field=query_field,
            table_name=table_name,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading .env and the environment once."""
    global _settings
    if _settings is None:
        load_dotenv(override=False)
        _settings = Settings.from_env()
    return _settings
