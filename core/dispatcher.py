"""Route a command string to the first handler that recognizes it.

The dispatcher is the single entry point shared by the CLI and the HTTP
surface. Handlers are tried in registration order; the first one whose
invocation list recognizes the command handles it. The browser handler
accepts any text, so with the built-in set a command always finds a home.
"""

from __future__ import annotations

import logging
import threading
from time import perf_counter
from typing import Iterable, List, Optional, Tuple

from core.handler import Handler
from core.outcome import MALFORMED_INPUT, NO_HANDLER, Outcome
from core.parsers.types import Invocation, ParsedCommand
from core.turn_logger import TurnLogger, TurnRecord

logger = logging.getLogger(__name__)

EMPTY_COMMAND_MESSAGE = "Nothing to do: the command is empty"
NO_HANDLER_MESSAGE = "No handler available for this command"


class Dispatcher:
    """Holds the ordered handler list and runs one command at a time."""

    def __init__(self, handlers: Iterable[Handler], *, turn_logger: Optional[TurnLogger] = None) -> None:
        self._handlers: List[Handler] = list(handlers)
        self._turn_logger = turn_logger
        self._lock = threading.Lock()

    @property
    def handlers(self) -> List[Handler]:
        return list(self._handlers)

    def handler_names(self) -> List[str]:
        return [handler.name for handler in self._handlers]

    def match(self, command: str) -> Optional[Tuple[Handler, Invocation]]:
        """Return the first handler (and its invocation) that recognizes ``command``."""
        for handler in self._handlers:
            invocation = handler.match(command)
            if invocation is not None:
                return handler, invocation
        return None

    def preview(self, command: str) -> Optional[ParsedCommand]:
        """Parse ``command`` without running its action.

        Returns ``None`` when no handler claims the command. A claimed command
        whose text cannot be parsed raises ``MalformedInputError``. Parsing a
        ``tell``/``message`` command still sends read-only contact lookups to
        the backend; the message itself is never sent.
        """
        matched = self.match(command)
        if matched is None:
            return None
        handler, invocation = matched
        return ParsedCommand(handler=handler.name, invocation=invocation.name, fields=invocation.parse(command))

    def dispatch(self, command: str) -> Outcome:
        """Run ``command`` through the first matching handler and return its outcome."""
        with self._lock:
            start = perf_counter()
            invocation_name: Optional[str] = None
            if not command or not command.strip():
                outcome = Outcome.error(MALFORMED_INPUT, EMPTY_COMMAND_MESSAGE)
            else:
                matched = self.match(command)
                if matched is None:
                    outcome = Outcome.error(NO_HANDLER, NO_HANDLER_MESSAGE)
                else:
                    handler, invocation = matched
                    invocation_name = invocation.name
                    logger.debug("Dispatching to %s via %s", handler.name, invocation.name)
                    outcome = handler.handle(command, invocation)
            latency_ms = int((perf_counter() - start) * 1000)
            self._log_turn(command, outcome, invocation_name, latency_ms)
            return outcome

    def _log_turn(self, command: str, outcome: Outcome, invocation: Optional[str], latency_ms: int) -> None:
        if outcome.is_error:
            logger.info("Command failed (%s): %s", outcome.error_code, outcome.message)
        if not self._turn_logger:
            return
        record = TurnRecord.new(
            command=command,
            handler=outcome.handler,
            invocation=invocation,
            fields=outcome.fields,
            is_error=outcome.is_error,
            error_code=outcome.error_code,
            message=outcome.message,
            latency_ms=latency_ms,
        )
        try:
            self._turn_logger.log_turn(record)
        except OSError:
            logger.exception("Failed to write turn log to %s", self._turn_logger.log_path)


__all__ = ["Dispatcher", "EMPTY_COMMAND_MESSAGE", "NO_HANDLER_MESSAGE"]
