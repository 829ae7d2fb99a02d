# src/task_tracker/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.ports import Prompt
from ..core.state import AppState
from ..tasks.task_errors import TaskTrackerError

logger = logging.getLogger(__name__)

COMMAND_PROMPT = "\nEnter command: "


def _print(text: str) -> None:
    print(text, flush=True)


def run_console_loop(
    state: AppState,
    *,
    ask: Prompt = input,
    out=_print,
    registry: CommandRegistry | None = None,
) -> None:
    """
    Read-eval-print loop: one command, at most one task operation, then back to the prompt.

    A failing command is reported and the loop keeps going; only exit, EOF or
    Ctrl+C end it.
    """
    registry = registry or command_registry
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Task Manager"))

    logger.info("Console connector started.")
    out(f"=== Welcome to {app_name} ===")
    out("Type 'help' to see available commands.")

    while state.running:
        try:
            line = ask(COMMAND_PROMPT).strip()
            reply = registry.handle(state, line, ask, emit=out)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            out("")
            break
        except TaskTrackerError as e:
            logger.info("Command failed: %s", e)
            out(f"Error: {e}")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            out("Internal error while handling a command.")
            continue

        if reply is not None:
            out(reply)

    logger.info("Console connector finished.")
