"""Send an iMessage to a contact, remembering the last recipient."""

from __future__ import annotations

from typing import Optional

from core.conversation_memory import RecipientMemory
from core.handler import ScriptHandler
from core.outcome import MISSING_REQUIRED_FIELD, Outcome
from core.parser_utils.text import trim
from core.parsers.message import MESSAGE, RECIPIENT, MessageInvocation, SayToInvocation, TellInvocation
from core.parsers.types import FieldMap
from core.script_backend import ScriptBackend
from core.script_templates import build_send_message_script


class SendMessageHandler(ScriptHandler):
    """``tell``/``message``/``say ... to`` commands.

    When a command names no recipient, the last recipient that was messaged
    successfully is used instead.
    """

    name = "send_message"

    def __init__(self, backend: ScriptBackend, *, memory: Optional[RecipientMemory] = None) -> None:
        super().__init__([TellInvocation(backend), MessageInvocation(backend), SayToInvocation()], backend)
        self.memory = memory if memory is not None else RecipientMemory()

    def run(self, fields: FieldMap) -> Outcome:
        recipient = trim(fields.get(RECIPIENT)) or self.memory.last
        if not recipient:
            return Outcome.error(MISSING_REQUIRED_FIELD, "No valid recipient specified")
        message = trim(fields.get(MESSAGE))
        if not message:
            return Outcome.error(MISSING_REQUIRED_FIELD, "No message specified")

        resolved = {RECIPIENT: recipient, MESSAGE: message}
        outcome = self.execute(build_send_message_script(recipient, message), fields=resolved)
        if not outcome.is_error:
            self.memory.remember(recipient)
        return outcome
