# src/simpletodo/db/client.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..errors import QueryError, TransportError

logger = logging.getLogger(__name__)


def rows_to_records(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> list[dict[str, Any]]:
    """
    Zip positional row values with column names.

    Column order comes from the response; nothing here assumes a layout.
    A short row yields None for the missing trailing columns.
    """
    records: list[dict[str, Any]] = []
    for row in rows:
        records.append({col: (row[idx] if idx < len(row) else None) for idx, col in enumerate(columns)})
    return records


@dataclass(slots=True, frozen=True)
class QueryResult:
    """Parsed response envelope: {success, error?, columns?, rows?, affectedRows?}."""

    success: bool
    error: str | None = None
    columns: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)
    affected_rows: int = 0
    status_code: int = 200

    @classmethod
    def from_envelope(cls, data: dict[str, Any], *, status_code: int = 200) -> QueryResult:
        success = data.get("success") is True

        error_raw = data.get("error")
        error = error_raw if isinstance(error_raw, str) and error_raw else None
        if not success and error is None:
            error = "Query failed."

        columns_raw = data.get("columns")
        columns = [str(c) for c in columns_raw] if isinstance(columns_raw, list) else []

        rows_raw = data.get("rows")
        rows: list[list[Any]] = []
        if isinstance(rows_raw, list):
            rows = [list(r) for r in rows_raw if isinstance(r, list)]

        affected_raw = data.get("affectedRows")
        affected_rows = affected_raw if isinstance(affected_raw, int) and not isinstance(affected_raw, bool) else 0

        return cls(
            success=success,
            error=None if success else error,
            columns=columns,
            rows=rows,
            affected_rows=affected_rows,
            status_code=status_code,
        )

    def records(self) -> list[dict[str, Any]]:
        return rows_to_records(self.columns, self.rows)

    def raise_for_error(self) -> QueryResult:
        if not self.success:
            raise QueryError(self.error or "Query failed.", status_code=self.status_code)
        return self


def _describe_transport_error(exc: Exception, url: str) -> str:
    detail = str(exc).strip() or exc.__class__.__name__
    return f"Request to {url} failed: {detail}"


class QueryClient:
    """
    Sends one SQL string per HTTP POST to the query endpoint.

    Application failures (success=false) come back as a QueryResult;
    only transport-level problems raise (TransportError).
    """

    def __init__(
        self,
        url: str,
        *,
        query_field: str = "sql",
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.query_field = query_field
        if timeout is None:
            timeout = httpx.Timeout(10.0, connect=5.0)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> QueryClient:
        connect_s = float(getattr(settings, "connect_timeout", 5.0))
        read_s = float(getattr(settings, "read_timeout", 10.0))
        timeout = httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)
        return cls(
            settings.query_url,
            query_field=getattr(settings, "query_field", "sql"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> QueryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, sql: str) -> QueryResult:
        logger.debug("Query: %s", sql)

        try:
            resp = await self._client.post(self.url, json={self.query_field: sql})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Query transport failed url=%s (%s)", self.url, e.__class__.__name__)
            raise TransportError(_describe_transport_error(e, self.url)) from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not isinstance(data, dict):
            logger.warning("Query endpoint returned a non-JSON body status=%s", resp.status_code)
            if resp.is_success:
                raise TransportError(f"Invalid response from {self.url}: expected a JSON object.")
            raise TransportError(f"Request failed with status code {resp.status_code}")

        if not resp.is_success:
            # The server reports parse errors and exceptions as {"error": "..."} with 400/500.
            error = data.get("error")
            if isinstance(error, str) and error:
                logger.info("Query rejected status=%s error=%s", resp.status_code, error)
                return QueryResult(success=False, error=error, status_code=resp.status_code)
            raise TransportError(f"Request failed with status code {resp.status_code}")

        result = QueryResult.from_envelope(data, status_code=resp.status_code)
        if result.success:
            logger.debug("Query ok columns=%d rows=%d affected=%d", len(result.columns), len(result.rows), result.affected_rows)
        else:
            logger.info("Query failed error=%s", result.error)
        return result
