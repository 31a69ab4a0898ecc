"""Shared helper utilities for command parsing."""

from .text import contains_word, find_word, split_on_spaces, split_tokens, strip_prefix
from .datetime import normalize_start_date, parse_duration_hours

__all__ = [
    "contains_word",
    "find_word",
    "normalize_start_date",
    "parse_duration_hours",
    "split_on_spaces",
    "split_tokens",
    "strip_prefix",
]
