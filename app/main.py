"""Assemble the dispatcher and run the command-line host."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from app.config import (
    get_assistant_config,
    get_log_backup_count,
    get_log_level,
    get_log_max_bytes,
    get_log_redaction_patterns,
    get_script_backend_kind,
    get_script_backend_url,
    get_script_timeout,
    get_turn_log_path,
    is_log_redaction_enabled,
    is_logging_enabled,
)
from core.conversation_memory import RecipientMemory
from core.dispatcher import Dispatcher
from core.handler_registry import HandlerRegistry
from core.outcome import MalformedInputError, Outcome
from core.parsers.calendar import Clock
from core.script_backend import RecordingBackend, ScriptBackend, create_backend
from core.turn_logger import TurnLogger
from handlers import load_all_core_handlers


# -- Dispatcher construction ---------------------------------------------------
def build_dispatcher(
    env: Dict[str, str] | None = None,
    *,
    backend: Optional[ScriptBackend] = None,
    clock: Clock = datetime.now,
) -> Dispatcher:
    """Wire config, backend, handlers, memory and turn logger.

    WHAT: build the one long-lived dispatcher used by the CLI and the web API.
    WHY: both hosts must route commands identically.
    HOW: read settings through ``app.config``; an explicit ``backend`` (dry
    runs, tests) replaces the configured one.
    """
    config = get_assistant_config(env)
    if backend is None:
        backend = create_backend(
            get_script_backend_kind(env),
            base_url=get_script_backend_url(env),
            timeout=get_script_timeout(env),
        )

    registry = HandlerRegistry()
    load_all_core_handlers(registry, config=config, backend=backend, memory=RecipientMemory(), clock=clock)

    turn_logger = TurnLogger(
        log_path=get_turn_log_path(env),
        enabled=is_logging_enabled(env),
        redact=is_log_redaction_enabled(env),
        patterns=get_log_redaction_patterns(env),
        max_bytes=get_log_max_bytes(env),
        backup_count=get_log_backup_count(env),
    )
    return Dispatcher(registry, turn_logger=turn_logger)


def format_outcome(outcome: Outcome) -> str:
    if outcome.is_error:
        return f"Error: {outcome.message}"
    return outcome.message or "Done."


def _print_preview(dispatcher: Dispatcher, command: str) -> int:
    try:
        parsed = dispatcher.preview(command)
    except MalformedInputError as exc:
        print(f"Error: {exc}")
        return 1
    if parsed is None:
        print("No handler recognizes this command.")
        return 1
    print(json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False, default=str))
    return 0


def _run_once(dispatcher: Dispatcher, command: str, recorder: Optional[RecordingBackend]) -> int:
    seen = len(recorder.scripts) if recorder else 0
    outcome = dispatcher.dispatch(command)
    if recorder:
        for script in recorder.scripts[seen:]:
            print("--- script ---")
            print(script)
    print(format_outcome(outcome))
    return 1 if outcome.is_error else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn one line of text into a desktop automation action.")
    parser.add_argument("command", nargs="*", help="Run a single command and exit.")
    parser.add_argument(
        "--parse",
        metavar="TEXT",
        help="Show how TEXT would be handled without running it (tell/message still look up contacts).",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print generated scripts instead of running them.")
    return parser


# -- Interactive CLI loop ------------------------------------------------------
def main(argv: Sequence[str] | None = None) -> int:
    """Run one command, a parse preview, or the interactive loop.

    The loop exits on EOF/KeyboardInterrupt or the words "quit"/"exit".
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    recorder = RecordingBackend() if args.dry_run else None
    dispatcher = build_dispatcher(backend=recorder)

    if args.parse is not None:
        return _print_preview(dispatcher, args.parse)

    words: List[str] = list(args.command)
    if words:
        return _run_once(dispatcher, " ".join(words), recorder)

    print("Command interpreter ready. Type 'quit' or 'exit' to stop.")
    while True:
        try:
            command = input("> ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if command.strip().lower() in {"quit", "exit"}:
            print("Goodbye!")
            break
        if not command.strip():
            continue

        _run_once(dispatcher, command, recorder)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
