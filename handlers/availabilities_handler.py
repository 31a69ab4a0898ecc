"""List today's busy slots in the configured calendar."""

from __future__ import annotations

from core.assistant_config import AssistantConfig
from core.handler import ScriptHandler
from core.outcome import Outcome
from core.parsers.calendar import AvailabilitiesInvocation
from core.parsers.types import FieldMap
from core.script_backend import ScriptBackend
from core.script_templates import build_availabilities_script


class CalendarAvailabilitiesHandler(ScriptHandler):
    name = "calendar_availabilities"

    def __init__(self, backend: ScriptBackend, config: AssistantConfig) -> None:
        super().__init__([AvailabilitiesInvocation()], backend)
        self._config = config

    def run(self, fields: FieldMap) -> Outcome:
        return self.execute(build_availabilities_script(self._config.calendar_name))
