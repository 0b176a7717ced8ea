# src/agency_desk/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..assistant.chat import agency_chat
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..llm.client import friendly_llm_error_message

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    try:
        if sys.stdout.isatty():
            sys.stdout.write("\033[1A\033[2K\r")
            sys.stdout.write(line + "\n")
            sys.stdout.flush()
        else:
            print(line)
    except OSError:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleMessenger:
    """OutboundMessenger that prints alerts to the terminal."""

    async def send_text(self, *, text: str, to_user_id: str | None = None) -> None:
        target = f" -> {to_user_id}" if to_user_id else ""
        _print_ts(f"[ALERT{target}] {text}")


def _bell(state: AppState) -> str:
    n = state.notifications.unread_count
    return f" ({n})" if n else ""


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (session=%s).", getattr(state.session, "user_id", None))
    _print_ts("[CONSOLE] Type your messages. Use /help for commands. Use /exit to quit.\n")

    lock = getattr(state, "lock", None)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "agency"))

    if state.notifications.unread_count:
        _print_ts(
            f"[NOTIFICATIONS] {state.notifications.unread_count} task(s) due soon. "
            "Use /notifications to view."
        )

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(f">>> You{_bell(state)}: ").strip()
            _rewrite_prev_line(f"[{_ts_local()}] >>> You: {user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            if lock:
                with lock:
                    cmd_response = command_registry.handle(state, user_input, emit=emit)
            else:
                cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            print(f"[{_ts_local()}] {cmd_response}")
            continue

        try:
            if lock:
                with lock:
                    answer = agency_chat(state, user_input)
            else:
                answer = agency_chat(state, user_input)
        except RuntimeError as e:
            msg = friendly_llm_error_message(e)
            logger.info("LLM runtime error: %s", msg)
            _print_ts(f"[LLM] {msg}")
            continue
        except Exception:
            logger.exception("Console chat handler crashed.")
            _print_ts("Internal error while generating a reply.")
            continue

        print(f"[{_ts_local()}] <<< {app_name}: {answer}\n", flush=True)

    logger.info("Console connector finished.")
