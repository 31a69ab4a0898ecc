"""Message intent parsing: ``tell``, ``message`` and ``say ... to`` phrasings."""

from __future__ import annotations

from core.outcome import MalformedInputError
from core.parser_utils.text import contains_word, find_word, split_tokens
from core.parsers.types import FieldMap, PrefixInvocation
from core.script_backend import ScriptBackend
from core.script_templates import build_contact_lookup_script

RECIPIENT = "recipient"
MESSAGE = "message"


class TellInvocation(PrefixInvocation):
    """``tell <name> <message>`` where the name is one to three words.

    Which words form the name is decided by asking the backend's contact
    lookup, longest candidate first.
    """

    name = "tell"
    prefix = "tell "
    max_name_tokens = 3

    def __init__(self, backend: ScriptBackend) -> None:
        self._backend = backend

    def parse(self, command: str) -> FieldMap:
        remainder = self.remainder(command).strip()
        tokens = split_tokens(remainder, self.max_name_tokens + 1)
        for size in range(min(self.max_name_tokens, len(tokens)), 0, -1):
            resolved = self.validate_name(" ".join(tokens[:size]))
            if resolved is not None:
                return {RECIPIENT: resolved, MESSAGE: " ".join(tokens[size:])}
        return {RECIPIENT: None, MESSAGE: remainder}

    def validate_name(self, candidate: str) -> str | None:
        """Return the contact's full name, or None when no contact matches.

        A lookup that succeeds without printing a name keeps the candidate text.
        """
        result = self._backend.execute(build_contact_lookup_script(candidate))
        if result.is_error:
            return None
        normalized = " ".join(result.output.split())
        return normalized or candidate


class MessageInvocation(TellInvocation):
    name = "message"
    prefix = "message "


class SayToInvocation(PrefixInvocation):
    """``say <message> to <recipient>``; without ``to`` the recipient is left open."""

    name = "say_to"
    prefix = "say "

    def parse(self, command: str) -> FieldMap:
        remainder = self.remainder(command).strip()
        if not contains_word(remainder, "to"):
            return {RECIPIENT: None, MESSAGE: remainder}

        split_at = find_word(remainder, "to", last=True)
        message = remainder[: split_at.start()].strip()
        recipient = remainder[split_at.end():].strip()
        if not message or not recipient:
            raise MalformedInputError("Expected 'say <message> to <recipient>'")
        return {RECIPIENT: recipient, MESSAGE: message}


__all__ = ["MESSAGE", "RECIPIENT", "MessageInvocation", "SayToInvocation", "TellInvocation"]
