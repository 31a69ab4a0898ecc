"""Create a calendar event from an ``add event`` description."""

from __future__ import annotations

from datetime import datetime

from core.assistant_config import AssistantConfig
from core.handler import ScriptHandler
from core.outcome import Outcome
from core.parser_utils.datetime import DEFAULT_DURATION_HOURS
from core.parsers.calendar import AddEventInvocation, Clock
from core.parsers.event_tokenizer import DURATION_HOURS, EVENT_NAME, LOCATION, START_DATE
from core.parsers.types import FieldMap
from core.script_backend import ScriptBackend
from core.script_templates import build_add_event_script


class AddCalendarEventHandler(ScriptHandler):
    name = "add_calendar_event"

    def __init__(self, backend: ScriptBackend, config: AssistantConfig, *, clock: Clock = datetime.now) -> None:
        super().__init__([AddEventInvocation(clock)], backend)
        self._config = config

    def run(self, fields: FieldMap) -> Outcome:
        duration = fields.get(DURATION_HOURS)
        script = build_add_event_script(
            summary=str(fields.get(EVENT_NAME) or ""),
            start_date=str(fields.get(START_DATE) or ""),
            duration_hours=float(duration) if duration is not None else DEFAULT_DURATION_HOURS,
            location=str(fields.get(LOCATION) or ""),
            calendar=self._config.calendar_name,
        )
        return self.execute(script)
