"""Run a user-supplied AppleScript verbatim."""

from __future__ import annotations

from core.handler import ScriptHandler
from core.outcome import Outcome
from core.parsers.raw_script import SCRIPT, RawScriptInvocation
from core.parsers.types import FieldMap
from core.script_backend import ScriptBackend


class RawScriptHandler(ScriptHandler):
    name = "raw_script"

    def __init__(self, backend: ScriptBackend) -> None:
        super().__init__([RawScriptInvocation()], backend)

    def run(self, fields: FieldMap) -> Outcome:
        return self.execute(str(fields.get(SCRIPT) or ""))
