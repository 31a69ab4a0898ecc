"""Maintain the ordered handler list with guard rails against misuse.

Registration order is dispatch priority: the first registered handler that
recognizes a command wins. Changing the order changes which intent a command
maps to.
"""

from __future__ import annotations

from typing import Dict, Iterator, List

from core.handler import Handler


class HandlerRegistry:
    """Registry that maps handler names to handlers, preserving registration order."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register_handler(self, handler: Handler) -> None:
        if handler.name in self._handlers:
            raise ValueError(f"Handler '{handler.name}' is already registered")
        self._handlers[handler.name] = handler

    def get(self, name: str) -> Handler:
        try:
            return self._handlers[name]
        except KeyError as exc:
            raise KeyError(f"Handler '{name}' is not registered") from exc

    def ordered(self) -> List[Handler]:
        return list(self._handlers.values())

    def names(self) -> List[str]:
        return list(self._handlers.keys())

    def __iter__(self) -> Iterator[Handler]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._handlers)
