"""Static assistant configuration handed to handlers at construction."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from core.parsers.browser import DEFAULT_SEARCH_URL_TEMPLATE

DEFAULT_ASSISTANT_CONFIG = Path("config/assistant.yml")
DEFAULT_CALENDAR_NAME = "Calendar"
DEFAULT_BUSINESS_HOURS_START = 9
DEFAULT_BUSINESS_HOURS_END = 17


@dataclass(frozen=True)
class AssistantConfig:
    """Calendar name, business hours and search template; read-only during dispatch."""

    calendar_name: str = DEFAULT_CALENDAR_NAME
    business_hours_start: int = DEFAULT_BUSINESS_HOURS_START
    business_hours_end: int = DEFAULT_BUSINESS_HOURS_END
    search_url_template: str = DEFAULT_SEARCH_URL_TEMPLATE

    def __post_init__(self) -> None:
        if not self.calendar_name.strip():
            raise ValueError("calendar_name must not be empty")
        if not (0 <= self.business_hours_start <= 24 and 0 <= self.business_hours_end <= 24):
            raise ValueError("Business hours must be between 0 and 24")
        if self.business_hours_start >= self.business_hours_end:
            raise ValueError("business_hours_start must be earlier than business_hours_end")
        if "{query}" not in self.search_url_template:
            raise ValueError("search_url_template must contain a {query} placeholder")

    def with_overrides(self, overrides: Mapping[str, Any]) -> "AssistantConfig":
        """Return a copy with every non-None override applied."""
        known = {item.name for item in fields(self)}
        changes = {key: value for key, value in overrides.items() if key in known and value is not None}
        return replace(self, **changes) if changes else self


def load_assistant_config(path: Path | str | None = None, *, missing_ok: bool = True) -> AssistantConfig:
    """Load the YAML assistant config into an ``AssistantConfig`` instance.

    A missing file yields the defaults unless ``missing_ok`` is False.
    """

    target = Path(path) if path else DEFAULT_ASSISTANT_CONFIG
    if not target.exists():
        if missing_ok:
            return AssistantConfig()
        raise FileNotFoundError(f"Assistant config not found: {target}")

    data = yaml.safe_load(target.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Assistant config {target} must be a mapping at the top level.")

    calendar = _section(data, "calendar", target)
    business_hours = _section(calendar, "business_hours", target)
    browser = _section(data, "browser", target)

    values: Dict[str, Optional[Any]] = {
        "calendar_name": _optional_str(calendar.get("name")),
        "business_hours_start": _optional_int(business_hours.get("start"), "calendar.business_hours.start"),
        "business_hours_end": _optional_int(business_hours.get("end"), "calendar.business_hours.end"),
        "search_url_template": _optional_str(browser.get("search_url_template")),
    }
    return AssistantConfig().with_overrides(values)


def _section(data: Dict[str, Any], key: str, source: Path) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Assistant config {source}: '{key}' must be a mapping.")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any, label: str) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be an integer hour, got {value!r}") from exc


__all__ = ["AssistantConfig", "DEFAULT_ASSISTANT_CONFIG", "load_assistant_config"]
