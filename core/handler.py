"""Base classes for intent handlers.

A handler owns an ordered list of invocations. ``match`` returns the first
invocation that recognizes a command, and the caller hands that same
invocation back to ``handle``; handlers keep no record of the last match.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence, Tuple

from core.outcome import MALFORMED_INPUT, MalformedInputError, Outcome
from core.parsers.types import FieldMap, Invocation
from core.script_backend import ScriptBackend


class Handler:
    name = "handler"

    def __init__(self, invocations: Sequence[Invocation]) -> None:
        self._invocations: Tuple[Invocation, ...] = tuple(invocations)

    @property
    def invocations(self) -> Tuple[Invocation, ...]:
        return self._invocations

    def match(self, command: str) -> Optional[Invocation]:
        """Return the first invocation that recognizes ``command`` (list order wins)."""
        for invocation in self._invocations:
            if invocation.recognize(command):
                return invocation
        return None

    def should_handle(self, command: str) -> bool:
        return self.match(command) is not None

    def handle(self, command: str, invocation: Invocation) -> Outcome:
        """Parse with the matched ``invocation`` and act on the fields.

        Parse failures become ``malformed_input`` outcomes instead of exceptions.
        """
        try:
            fields = invocation.parse(command)
        except MalformedInputError as exc:
            return Outcome.error(MALFORMED_INPUT, str(exc), handler=self.name)
        outcome = self.run(fields)
        if not outcome.fields:
            outcome = replace(outcome, fields=dict(fields))
        return replace(outcome, handler=self.name)

    def run(self, fields: FieldMap) -> Outcome:
        raise NotImplementedError


class ScriptHandler(Handler):
    """Handler whose action is a script sent to the automation backend."""

    def __init__(self, invocations: Sequence[Invocation], backend: ScriptBackend) -> None:
        super().__init__(invocations)
        self._backend = backend

    def execute(self, script: str, **extras: object) -> Outcome:
        return Outcome.from_script_result(self._backend.execute(script), **extras)


__all__ = ["Handler", "ScriptHandler"]
