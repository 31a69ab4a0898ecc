"""Invocation parsers, one module per intent."""

from . import browser, calendar, event_tokenizer, message, raw_script

__all__ = ["browser", "calendar", "event_tokenizer", "message", "raw_script"]
