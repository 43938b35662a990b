# tests/test_console_connector.py

from __future__ import annotations

import asyncio
import io
import os
import threading

import pytest

from simpletodo.connectors.console_connector import run_console_loop

from .fakes import FakeQueryServer


@pytest.mark.asyncio
async def test_console_loop_runs_lines_until_end_of_input(state, server: FakeQueryServer, capsys) -> None:
    stream = io.StringIO("buy milk\n/toggle 999\n")

    await asyncio.wait_for(run_console_loop(state, stream=stream), timeout=5)

    assert [t.task for t in state.view.todos] == ["buy milk"]
    assert "No task with id=999" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_console_loop_stops_at_exit_command(state, server: FakeQueryServer) -> None:
    stream = io.StringIO("/exit\nnever added\n")

    await asyncio.wait_for(run_console_loop(state, stream=stream), timeout=5)

    assert state.view.todos == []
    assert not any(q.startswith("INSERT") for q in server.queries)


@pytest.mark.asyncio
async def test_console_loop_cancels_while_waiting_for_input(state, server: FakeQueryServer) -> None:
    read_fd, write_fd = os.pipe()
    stream = os.fdopen(read_fd, "r")
    before = set(threading.enumerate())
    reader: threading.Thread | None = None

    task = asyncio.create_task(run_console_loop(state, stream=stream))
    try:
        for _ in range(200):
            started = [t for t in threading.enumerate() if t not in before and t.name == "console-stdin"]
            if started:
                reader = started[0]
                break
            await asyncio.sleep(0.01)

        assert reader is not None
        assert reader.daemon

        task.cancel()
        done, _ = await asyncio.wait([task], timeout=2)
        assert task in done
        assert task.cancelled()
    finally:
        os.close(write_fd)
        if reader is not None:
            reader.join(timeout=2)
        stream.close()
