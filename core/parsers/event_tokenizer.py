"""Split an event description into facets: name, start date, location, duration.

Keywords switch the facet that following words accumulate into. In
``Meeting (Bit by Bit) at MLK on 4/20 3 PM for 2`` the words before ``at``
name the event, ``at`` starts the location, ``on`` the start date and ``for``
the duration.

Words wrapped in double quotes are taken verbatim, so ``"Dinner at Joe's"``
stays in the event name instead of starting a location.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from core.outcome import MalformedInputError
from core.parser_utils.datetime import DEFAULT_DURATION_HOURS, normalize_start_date, parse_duration_hours
from core.parser_utils.text import split_on_spaces
from core.parsers.types import FieldMap

EVENT_NAME = "eventName"
START_DATE = "startDate"
LOCATION = "location"
DURATION_HOURS = "durationHours"

_DATE_TRIGGERS = {"on", "today", "tomorrow", "tmw"}
_INLINE_DATE_TRIGGERS = {"today", "tomorrow", "tmw"}
_FACET_TRIGGERS = {"at": LOCATION, "for": DURATION_HOURS}
_QUOTE = '"'


def tokenize_event(text: str) -> Dict[str, List[str]]:
    """Distribute the words of ``text`` over the four facets."""
    facets: Dict[str, List[str]] = {EVENT_NAME: [], START_DATE: [], LOCATION: [], DURATION_HOURS: []}
    current = EVENT_NAME
    quoted = False

    for token in split_on_spaces(text):
        touched_quote = False
        if token.startswith(_QUOTE):
            quoted = not quoted
            token = token[1:]
            touched_quote = True
        if token.endswith(_QUOTE):
            quoted = not quoted
            token = token[:-1]
            touched_quote = True

        if quoted or touched_quote:
            if token:
                facets[current].append(token)
            continue

        lowered = token.lower()
        if lowered in _DATE_TRIGGERS:
            current = START_DATE
            if lowered in _INLINE_DATE_TRIGGERS:
                facets[current].append(token)
            continue
        if lowered in _FACET_TRIGGERS:
            current = _FACET_TRIGGERS[lowered]
            continue
        facets[current].append(token)

    if quoted:
        raise MalformedInputError("Unterminated quote in event description")
    return facets


def parse_event_description(text: str, reference: Optional[datetime] = None) -> FieldMap:
    """Return the event FieldMap with a backend-ready ``startDate``.

    ``durationHours`` comes from an explicit ``for`` phrase, else from a time
    range in the start phrase, else defaults to one hour.
    """
    facets = tokenize_event(text)
    start_date, inferred_duration = normalize_start_date(facets[START_DATE], reference)

    if facets[DURATION_HOURS]:
        duration = parse_duration_hours(facets[DURATION_HOURS])
    elif inferred_duration is not None:
        duration = inferred_duration
    else:
        duration = DEFAULT_DURATION_HOURS

    return {
        EVENT_NAME: " ".join(facets[EVENT_NAME]),
        START_DATE: start_date,
        LOCATION: " ".join(facets[LOCATION]),
        DURATION_HOURS: duration,
    }


__all__ = [
    "DURATION_HOURS",
    "EVENT_NAME",
    "LOCATION",
    "START_DATE",
    "parse_event_description",
    "tokenize_event",
]
