"""Calendar intent parsing: ``add event ...`` and ``availabilities``."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from core.parsers.event_tokenizer import parse_event_description
from core.parsers.types import FieldMap, Invocation, PrefixInvocation

Clock = Callable[[], datetime]


class AddEventInvocation(PrefixInvocation):
    """``add event <name> [at <place>] [on <date> <time>] [for <hours>]``."""

    name = "add_event"
    prefix = "add event "

    def __init__(self, clock: Clock = datetime.now) -> None:
        self._clock = clock

    def parse(self, command: str) -> FieldMap:
        return parse_event_description(self.remainder(command), self._clock())


class AvailabilitiesInvocation(Invocation):
    """The bare word ``availabilities``; any trailing argument means another intent."""

    name = "availabilities"
    keyword = "availabilities"

    def recognize(self, command: str) -> bool:
        return command.strip().lower() == self.keyword

    def parse(self, command: str) -> FieldMap:
        return {}


__all__ = ["AddEventInvocation", "AvailabilitiesInvocation", "Clock"]
