"""Catch-all parsing: treat the input as a URL to open or a phrase to search."""

from __future__ import annotations

import re
from urllib.parse import quote_plus

from core.parsers.types import FieldMap, Invocation

URL = "url"
QUERY = "query"

DEFAULT_SEARCH_URL_TEMPLATE = "https://www.google.com/search?q={query}"

_DOMAIN_PATTERN = re.compile(
    r"^(https?://)?(www\.)?[-a-z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b([-a-z0-9@:%_+.~#?&/=]*)$",
    re.IGNORECASE,
)
_EXPLICIT_URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
_SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def looks_like_url(text: str) -> bool:
    """True for ``name.tld`` shaped input, with or without scheme/path/query."""
    candidate = (text or "").strip()
    if not candidate:
        return False
    return bool(_DOMAIN_PATTERN.match(candidate) or _EXPLICIT_URL_PATTERN.match(candidate))


def normalize_url(text: str) -> str:
    candidate = text.strip()
    if _SCHEME_PATTERN.match(candidate):
        return candidate
    return f"http://{candidate}"


def build_search_url(query: str, template: str = DEFAULT_SEARCH_URL_TEMPLATE) -> str:
    return template.replace("{query}", quote_plus(query.strip()))


class BrowserInvocation(Invocation):
    """Recognizes everything, so it must stay last in the handler order."""

    name = "open"

    def __init__(self, search_url_template: str = DEFAULT_SEARCH_URL_TEMPLATE) -> None:
        self._search_url_template = search_url_template

    def recognize(self, command: str) -> bool:
        return True

    def parse(self, command: str) -> FieldMap:
        target = command.strip()
        if looks_like_url(target):
            return {URL: normalize_url(target), QUERY: None}
        return {URL: build_search_url(target, self._search_url_template), QUERY: target}


__all__ = [
    "DEFAULT_SEARCH_URL_TEMPLATE",
    "QUERY",
    "URL",
    "BrowserInvocation",
    "build_search_url",
    "looks_like_url",
    "normalize_url",
]
