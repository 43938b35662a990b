# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from types import SimpleNamespace

import pytest
import pytest_asyncio

from simpletodo.cli.bootstrap import create_initial_state
from simpletodo.core.state import AppState

from .fakes import FakeQueryServer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="simpletodo-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        query_url="http://db.test/query",
        query_field="sql",
        table_name="todos",
        connect_timeout=1.0,
        read_timeout=1.0,
    )


@pytest.fixture()
def server() -> FakeQueryServer:
    return FakeQueryServer()


@pytest_asyncio.fixture()
async def state(settings: SimpleNamespace, server: FakeQueryServer) -> AsyncIterator[AppState]:
    """
    AppState wired to the in-memory query server.

    The real QueryClient is kept (only the HTTP transport is faked), because
    the request/response envelope handling is part of what we want to test.
    """
    app_state = create_initial_state(settings=settings, transport=server.transport())
    try:
        yield app_state
    finally:
        await app_state.client.aclose()
