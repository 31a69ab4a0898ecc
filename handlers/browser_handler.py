"""Open the input as a URL, or search for it."""

from __future__ import annotations

from core.assistant_config import AssistantConfig
from core.handler import ScriptHandler
from core.outcome import Outcome
from core.parsers.browser import URL, BrowserInvocation
from core.parsers.types import FieldMap
from core.script_backend import ScriptBackend
from core.script_templates import build_open_url_script


class BrowserHandler(ScriptHandler):
    name = "browser"

    def __init__(self, backend: ScriptBackend, config: AssistantConfig) -> None:
        super().__init__([BrowserInvocation(config.search_url_template)], backend)

    def run(self, fields: FieldMap) -> Outcome:
        return self.execute(build_open_url_script(str(fields.get(URL) or "")))
