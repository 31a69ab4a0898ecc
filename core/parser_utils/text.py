"""Common text-processing helpers shared across invocation parsers."""

from __future__ import annotations

import re
from typing import List, Optional


def contains_word(text: str, word: str) -> bool:
    """Return True when ``word`` appears in ``text`` as a whole word (case-insensitive)."""

    if not text or not word:
        return False
    return find_word(text, word) is not None


def find_word(text: str, word: str, *, last: bool = False) -> Optional[re.Match[str]]:
    """Locate ``word`` delimited by whitespace or the string edges; ``last`` returns the final occurrence."""

    pattern = re.compile(rf"(?<!\S){re.escape(word)}(?!\S)", re.IGNORECASE)
    if not last:
        return pattern.search(text)
    found: Optional[re.Match[str]] = None
    for match in pattern.finditer(text):
        found = match
    return found


def strip_prefix(text: str, prefix: str) -> Optional[str]:
    """Return ``text`` without ``prefix`` (case-insensitive), or None when it does not start with it."""

    if text[: len(prefix)].lower() != prefix.lower():
        return None
    return text[len(prefix):]


def trim(value: Optional[str]) -> str:
    """Strip surrounding whitespace and treat ``None`` as an empty string."""

    return (value or "").strip()


def count_delimiter(text: str, delimiter: str) -> int:
    """Count non-overlapping occurrences of ``delimiter``."""

    if not delimiter:
        return 0
    return text.count(delimiter)


def split_tokens(text: str, max_tokens: Optional[int] = None) -> List[str]:
    """Split on runs of whitespace; the last token keeps the rest when ``max_tokens`` is set."""

    if max_tokens is None:
        return text.split()
    if max_tokens <= 0:
        return []
    return text.split(None, max_tokens - 1)


def split_on_spaces(text: str) -> List[str]:
    """Split on the ASCII space only, dropping empty pieces from repeated spaces."""

    return [token for token in text.split(" ") if token]


__all__ = [
    "contains_word",
    "count_delimiter",
    "find_word",
    "split_on_spaces",
    "split_tokens",
    "strip_prefix",
    "trim",
]
