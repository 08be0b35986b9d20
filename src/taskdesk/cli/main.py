# src/taskdesk/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the AppContainer, restores a persisted session,
then runs the console REPL until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.bootstrap import create_app
from ..cli.commands import registry as command_registry
from ..config import get_settings
from ..core.state import AppContainer
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleNavigator:
    """Login "view" of the console: tell the user to log in again."""

    def go_to_login(self) -> None:
        _print_ts("[SESSION] Your session has expired. Use /login <email> <password>.")


async def run_console_loop(app: AppContainer) -> None:
    logger.info("Console started (api=%s).", app.client.base_url)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            line = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = await command_registry.handle(app, line)
        if reply is None:
            reply = "Commands start with '/'. Use /help to list available commands."
        print(reply)


async def _run(settings) -> None:
    app = create_app(settings=settings, navigator=ConsoleNavigator())
    try:
        await app.session.start()
        if app.auth.is_authenticated and app.auth.user is not None:
            _print_ts(f"[SESSION] Welcome back, {app.auth.user.name}.")
        await run_console_loop(app)
    finally:
        await app.session.shutdown()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/taskdesk")
    log_file = setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", getattr(settings, "app_name", "taskdesk"), log_file)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Console KeyboardInterrupt, exiting.")
        print()
    logger.info("Bye.")


if __name__ == "__main__":
    main()
