# tests/test_query_client.py

from __future__ import annotations

import httpx
import pytest

from simpletodo.db.client import QueryClient, QueryResult, rows_to_records
from simpletodo.errors import QueryError, TransportError

from .fakes import FakeQueryServer

URL = "http://db.test/query"


def test_rows_to_records_zips_by_column_order() -> None:
    records = rows_to_records(["is_done", "id", "task"], [["0", "5", "a"], ["1", "6", "b"]])
    assert records == [
        {"is_done": "0", "id": "5", "task": "a"},
        {"is_done": "1", "id": "6", "task": "b"},
    ]


def test_rows_to_records_pads_short_rows() -> None:
    assert rows_to_records(["id", "task"], [["1"]]) == [{"id": "1", "task": None}]


def test_envelope_parsing() -> None:
    ok = QueryResult.from_envelope({"success": True, "affectedRows": 2, "columns": [], "rows": []})
    assert ok.success and ok.affected_rows == 2 and ok.error is None

    bad = QueryResult.from_envelope({"success": False, "error": "syntax error"})
    assert not bad.success
    assert bad.error == "syntax error"
    with pytest.raises(QueryError, match="syntax error"):
        bad.raise_for_error()

    # success must be literally true; a missing error still yields a message
    vague = QueryResult.from_envelope({"success": "yes"})
    assert not vague.success
    assert vague.error == "Query failed."


@pytest.mark.asyncio
async def test_execute_posts_sql_under_configured_field() -> None:
    server = FakeQueryServer(query_field="query")
    server.seed("todos", [(1, "Buy milk", 0)])

    async with QueryClient(URL, query_field="query", transport=server.transport()) as client:
        result = await client.execute("SELECT * FROM todos")

    assert server.bodies == [{"query": "SELECT * FROM todos"}]
    assert result.success
    assert result.columns == ["id", "task", "is_done"]
    assert result.records() == [{"id": "1", "task": "Buy milk", "is_done": "0"}]


@pytest.mark.asyncio
async def test_application_failure_is_returned_not_raised() -> None:
    server = FakeQueryServer()
    async with QueryClient(URL, transport=server.transport()) as client:
        result = await client.execute("SELEKT nonsense")

    assert not result.success
    assert result.error == "syntax error"


@pytest.mark.asyncio
async def test_error_status_with_json_error_body_is_an_application_failure() -> None:
    server = FakeQueryServer()
    server.respond_next("SELECT", httpx.Response(400, json={"error": "Parse error"}))

    async with QueryClient(URL, transport=server.transport()) as client:
        result = await client.execute("SELECT * FROM todos")

    assert not result.success
    assert result.error == "Parse error"
    assert result.status_code == 400


@pytest.mark.asyncio
async def test_error_status_with_unparseable_body_is_a_transport_failure() -> None:
    server = FakeQueryServer()
    server.respond_next("SELECT", httpx.Response(404, text="Not Found"))

    async with QueryClient(URL, transport=server.transport()) as client:
        with pytest.raises(TransportError, match="status code 404"):
            await client.execute("SELECT * FROM todos")


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error() -> None:
    server = FakeQueryServer()
    server.down = True

    async with QueryClient(URL, transport=server.transport()) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.execute("SELECT * FROM todos")

    assert URL in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_malformed_url_raises_transport_error() -> None:
    server = FakeQueryServer()

    async with QueryClient("http://[::1/query", transport=server.transport()) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.execute("SELECT * FROM todos")

    assert "http://[::1/query" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
    assert server.queries == []
