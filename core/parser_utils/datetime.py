"""Date/time helpers for turning casual start phrases into backend date literals.

The calendar backend accepts strings such as ``4/20/26 3:00 PM``. Users type
``on 4/20 3pm``, ``tomorrow 9-9:30 a.m.`` or ``today 2 to 4``; the helpers here
split glued tokens, collapse time ranges (reporting the duration they imply)
and resolve relative words against a reference datetime.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from core.outcome import MalformedInputError
from core.parser_utils.text import count_delimiter

_CLOCK_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{2}))?$")
_BARE_HOUR_PATTERN = re.compile(r"^\d{1,2}$")
_GLUED_MERIDIEM_PATTERN = re.compile(r"^(?P<clock>\d{1,2}(?::\d{2})?)(?P<meridiem>[ap]\.?m\.?)$", re.IGNORECASE)
_GLUED_RANGE_PATTERN = re.compile(
    r"^(?:(?P<start>\d{1,2}(?::\d{2})?)(?P<start_meridiem>[ap]\.?m\.?)?)?"
    r"-(?P<end>\d{1,2}(?::\d{2})?)?(?P<meridiem>[ap]\.?m\.?)?$",
    re.IGNORECASE,
)
_DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)\s*(?:h|hr|hrs|hour|hours)?$", re.IGNORECASE)
_MERIDIEMS = {"am": "AM", "a.m.": "AM", "a.m": "AM", "pm": "PM", "p.m.": "PM", "p.m": "PM"}
_OPPOSITE_MERIDIEM = {"AM": "PM", "PM": "AM"}
_RANGE_SEPARATORS = {"to", "-"}
_RELATIVE_DAYS = {"today": 0, "tomorrow": 1, "tmw": 1}

DEFAULT_DURATION_HOURS = 1.0


def format_short_date(value: datetime) -> str:
    """Render ``MM/DD/YY``."""
    return value.strftime("%m/%d/%y")


def format_timestamp(value: datetime) -> str:
    """Render ``MM/DD/YY H:MM AM`` for an exact moment."""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{format_short_date(value)} {hour}:{value.minute:02d} {meridiem}"


def parse_clock_hours(token: str) -> Optional[float]:
    """Return ``9`` → 9.0 and ``9:30`` → 9.5; None for anything else."""
    match = _CLOCK_PATTERN.match(token or "")
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if hour > 23 or minute > 59:
        return None
    return hour + minute / 60


def format_clock(hours: float) -> str:
    hour, minute = divmod(int(round(hours * 60)), 60)
    return f"{hour}:{minute:02d}"


def normalize_meridiem(token: str) -> Optional[str]:
    return _MERIDIEMS.get((token or "").lower())


def parse_duration_hours(words: Sequence[str]) -> float:
    """Read an explicit duration such as ``2``, ``1.5 hours`` or ``.5h``."""
    text = " ".join(words).strip()
    match = _DURATION_PATTERN.match(text)
    if not match:
        raise MalformedInputError(f"Could not read a duration in hours from '{text}'")
    value = float(match.group(1))
    if value <= 0:
        raise MalformedInputError("Event duration must be greater than zero")
    return value


def _has_date_token(tokens: Sequence[str]) -> bool:
    return any("/" in token or token.lower() in _RELATIVE_DAYS for token in tokens)


def split_glued_tokens(tokens: Sequence[str]) -> List[str]:
    """Separate ``9-9:30am`` into ``9 - 9:30 AM`` and ``3pm`` into ``3 PM``.

    A glued ``N-M`` without any meridiem reads as a time range only when the
    phrase also names a day; on its own (``4-20``) it is rejected.
    """
    tokens = list(tokens)
    result: List[str] = []
    for index, token in enumerate(tokens):
        ranged = _GLUED_RANGE_PATTERN.match(token)
        if ranged and (ranged.group("start") or ranged.group("end")):
            following = tokens[index + 1] if index + 1 < len(tokens) else ""
            has_meridiem = bool(
                ranged.group("start_meridiem") or ranged.group("meridiem") or normalize_meridiem(following)
            )
            if ranged.group("start") and ranged.group("end") and not has_meridiem and not _has_date_token(tokens):
                raise MalformedInputError(
                    f"Could not tell whether '{token}' is a date or a time range; "
                    "write dates with '/' or add am/pm to the times"
                )
            if ranged.group("start"):
                result.append(ranged.group("start"))
            if ranged.group("start_meridiem"):
                result.append(normalize_meridiem(ranged.group("start_meridiem")) or ranged.group("start_meridiem"))
            result.append("-")
            if ranged.group("end"):
                result.append(ranged.group("end"))
            if ranged.group("meridiem"):
                result.append(normalize_meridiem(ranged.group("meridiem")) or ranged.group("meridiem"))
            continue
        glued = _GLUED_MERIDIEM_PATTERN.match(token)
        if glued:
            result.append(glued.group("clock"))
            result.append(normalize_meridiem(glued.group("meridiem")) or glued.group("meridiem"))
            continue
        result.append(token)
    return result


def _to_24h(hours: float, meridiem: Optional[str]) -> float:
    if meridiem == "PM" and hours < 12:
        return hours + 12
    if meridiem == "AM" and hours >= 12:
        return hours - 12
    return hours


def _range_duration(start: float, start_meridiem: Optional[str], end: float, end_meridiem: Optional[str]) -> float:
    duration = _to_24h(end, end_meridiem) - _to_24h(start, start_meridiem)
    # A range such as "11-1" or "11 PM - 1 AM" crosses noon or midnight.
    for _ in range(2):
        if duration >= 0:
            break
        duration += 12
    if duration <= 0:
        raise MalformedInputError("The event's end time must come after its start time")
    return duration


def infer_time_range(tokens: Sequence[str]) -> Tuple[List[str], Optional[float]]:
    """Collapse the first ``start to end`` range to its start time.

    Returns the rewritten tokens and the duration in hours, or the tokens
    unchanged and None when no range is present. A meridiem after the end
    time also applies to the start time unless the start carries its own;
    a borrowed meridiem flips when the start would otherwise follow the end
    (``11-1pm`` starts at 11 AM).
    """
    words = list(tokens)
    for index, token in enumerate(words):
        if token.lower() not in _RANGE_SEPARATORS or index + 1 >= len(words):
            continue
        end_hours = parse_clock_hours(words[index + 1])
        if end_hours is None:
            continue
        start_index = index - 1
        start_meridiem = normalize_meridiem(words[start_index]) if start_index >= 0 else None
        if start_meridiem:
            start_index -= 1
        if start_index < 0:
            continue
        start_hours = parse_clock_hours(words[start_index])
        if start_hours is None:
            continue
        end_meridiem = normalize_meridiem(words[index + 2]) if index + 2 < len(words) else None

        effective_start = start_meridiem
        if effective_start is None and end_meridiem:
            effective_start = end_meridiem
            if _to_24h(start_hours, effective_start) > _to_24h(end_hours, end_meridiem):
                effective_start = _OPPOSITE_MERIDIEM[end_meridiem]

        duration = _range_duration(
            start_hours,
            effective_start,
            end_hours,
            end_meridiem or start_meridiem,
        )
        collapsed = [format_clock(start_hours)]
        tail_index = index + 2
        if effective_start:
            collapsed.append(effective_start)
            if end_meridiem:
                tail_index += 1
        return words[:start_index] + collapsed + words[tail_index:], duration
    return words, None


def resolve_relative_tokens(tokens: Sequence[str], reference: datetime) -> List[str]:
    """Replace relative days, bare hours and year-less dates with literals."""
    resolved: List[str] = []
    for token in tokens:
        lowered = token.lower()
        if lowered in _RELATIVE_DAYS:
            resolved.append(format_short_date(reference + timedelta(days=_RELATIVE_DAYS[lowered])))
        elif _BARE_HOUR_PATTERN.match(token):
            resolved.append(f"{int(token)}:00")
        elif count_delimiter(token, "/") == 1:
            resolved.append(f"{token}/{reference:%y}")
        else:
            resolved.append(normalize_meridiem(token) or token)
    return resolved


def normalize_start_date(tokens: Sequence[str], reference: Optional[datetime] = None) -> Tuple[str, Optional[float]]:
    """Return the backend date literal for a start phrase plus any inferred duration.

    An empty phrase means "now". Applying this to its own output is a no-op.
    """
    reference = reference or datetime.now()
    words = split_glued_tokens(tokens)
    words, inferred_duration = infer_time_range(words)
    words = resolve_relative_tokens(words, reference)
    if not words:
        return format_timestamp(reference), inferred_duration
    return " ".join(words), inferred_duration


__all__ = [
    "DEFAULT_DURATION_HOURS",
    "format_clock",
    "format_short_date",
    "format_timestamp",
    "infer_time_range",
    "normalize_meridiem",
    "normalize_start_date",
    "parse_clock_hours",
    "parse_duration_hours",
    "resolve_relative_tokens",
    "split_glued_tokens",
]
