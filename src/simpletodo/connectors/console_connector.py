# src/simpletodo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import threading
from datetime import datetime
from typing import TextIO

from ..cli.commands import registry as command_registry
from ..cli.render import render_todos
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _start_line_reader(stream: TextIO | None = None) -> asyncio.Queue[str | None]:
    """
    Read lines on a daemon thread and hand them to the running loop.

    None marks end of input. The thread is a daemon, so a pending readline()
    never holds up interpreter exit.
    """
    loop = asyncio.get_running_loop()
    lines: asyncio.Queue[str | None] = asyncio.Queue()
    src = stream if stream is not None else sys.stdin

    def deliver(line: str | None) -> None:
        # The loop may already be closed when input arrives during shutdown.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(lines.put_nowait, line)

    def pump() -> None:
        while True:
            try:
                raw = src.readline()
            except (OSError, ValueError) as e:
                logger.warning("Console input unavailable: %s", e)
                raw = ""
            if not raw:
                deliver(None)
                return
            deliver(raw.rstrip("\r\n"))

    threading.Thread(target=pump, name="console-stdin", daemon=True).start()
    return lines


async def handle_line(state: AppState, line: str) -> str | None:
    """
    One REPL step: slash commands go to the registry, any other text is a new task.
    Returns the text to print (None for blank input).
    """
    if not line.strip():
        return None

    try:
        reply = await command_registry.handle(state, line, emit=_print_ts)
        if reply is not None:
            return reply

        if state.view.loading:
            return "Still loading, try again in a moment."
        await state.todo_list.add_todo(line)
        return render_todos(state.view)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


async def run_console_loop(state: AppState, *, stream: TextIO | None = None) -> None:
    app_name = str(getattr(state.settings, "app_name", "simpletodo"))
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    _print_ts("Loading...")
    await state.todo_list.initialize()
    _print_ts(render_todos(state.view))

    lines = _start_line_reader(stream)
    while True:
        print("> ", end="", flush=True)
        try:
            user_input = await lines.get()
        except asyncio.CancelledError:
            logger.info("Console interrupted, exiting.")
            print()
            raise

        if user_input is None:
            logger.info("Console EOF received, exiting.")
            print()
            break

        if user_input.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = await handle_line(state, user_input)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
