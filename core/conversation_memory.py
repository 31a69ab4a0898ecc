"""Lightweight in-memory recipient history for the message handler."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, Optional


@dataclass
class RecipientEntry:
    name: str
    remembered_at: str = field(default_factory=lambda: datetime.now(tz=timezone.utc).isoformat())


class RecipientMemory:
    """Ring buffer of recipients that received a message successfully.

    Lives as long as the handler that owns it; nothing is persisted.
    """

    def __init__(self, max_entries: int = 10) -> None:
        self._entries: Deque[RecipientEntry] = deque(maxlen=max(1, max_entries))

    def remember(self, name: str) -> Optional[RecipientEntry]:
        cleaned = (name or "").strip()
        if not cleaned:
            return None
        entry = RecipientEntry(name=cleaned)
        self._entries.append(entry)
        return entry

    @property
    def last(self) -> Optional[str]:
        if not self._entries:
            return None
        return self._entries[-1].name


__all__ = ["RecipientEntry", "RecipientMemory"]
