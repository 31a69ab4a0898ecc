"""Register the built-in intent handlers with the shared registry.

The order below is the dispatch priority. Message, raw-script and calendar
commands have distinctive prefixes and must be tried before the browser
handler, which accepts any input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.assistant_config import AssistantConfig
from core.conversation_memory import RecipientMemory
from core.handler_registry import HandlerRegistry
from core.parsers.calendar import Clock
from core.script_backend import ScriptBackend
from handlers.availabilities_handler import CalendarAvailabilitiesHandler
from handlers.browser_handler import BrowserHandler
from handlers.calendar_event_handler import AddCalendarEventHandler
from handlers.raw_script_handler import RawScriptHandler
from handlers.send_message_handler import SendMessageHandler

HANDLER_ORDER = (
    "send_message",
    "raw_script",
    "add_calendar_event",
    "calendar_availabilities",
    "browser",
)


def load_all_core_handlers(
    registry: HandlerRegistry,
    *,
    config: AssistantConfig,
    backend: ScriptBackend,
    memory: Optional[RecipientMemory] = None,
    clock: Clock = datetime.now,
) -> None:
    # Register every core handler with ``registry`` in dispatch order
    registry.register_handler(SendMessageHandler(backend, memory=memory))
    registry.register_handler(RawScriptHandler(backend))
    registry.register_handler(AddCalendarEventHandler(backend, config, clock=clock))
    registry.register_handler(CalendarAvailabilitiesHandler(backend, config))
    registry.register_handler(BrowserHandler(backend, config))


__all__ = [
    "HANDLER_ORDER",
    "AddCalendarEventHandler",
    "BrowserHandler",
    "CalendarAvailabilitiesHandler",
    "RawScriptHandler",
    "SendMessageHandler",
    "load_all_core_handlers",
]
