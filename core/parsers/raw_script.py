"""Raw AppleScript pass-through: ``applescript:<script>``."""

from __future__ import annotations

from core.parsers.types import FieldMap, PrefixInvocation

SCRIPT = "script"


class RawScriptInvocation(PrefixInvocation):
    name = "applescript"
    prefix = "applescript:"

    def parse(self, command: str) -> FieldMap:
        # Everything after the first colon, untouched.
        _, _, script = command.partition(":")
        return {SCRIPT: script}


__all__ = ["SCRIPT", "RawScriptInvocation"]
