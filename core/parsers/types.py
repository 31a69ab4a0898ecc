"""Shared types for invocation parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from core.outcome import MalformedInputError
from core.parser_utils.text import strip_prefix

FieldMap = Dict[str, Optional[object]]


class Invocation:
    """One surface syntax of a command: decide whether it applies, then extract fields."""

    name = "invocation"

    def recognize(self, command: str) -> bool:
        raise NotImplementedError

    def parse(self, command: str) -> FieldMap:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class PrefixInvocation(Invocation):
    """Invocation keyed on a fixed, case-insensitive leading phrase."""

    prefix = ""

    def recognize(self, command: str) -> bool:
        return strip_prefix(command.lstrip(), self.prefix) is not None

    def remainder(self, command: str) -> str:
        rest = strip_prefix(command.lstrip(), self.prefix)
        if rest is None:
            raise MalformedInputError(f"Expected the command to start with '{self.prefix.strip()}'")
        return rest


@dataclass
class ParsedCommand:
    """What a command would do, without running it."""

    handler: str
    invocation: str
    fields: FieldMap = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {"handler": self.handler, "invocation": self.invocation, "fields": dict(self.fields)}


__all__ = ["FieldMap", "Invocation", "MalformedInputError", "ParsedCommand", "PrefixInvocation"]
