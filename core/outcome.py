"""Outcome values shared by handlers, the dispatcher, and the host surfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

NO_HANDLER = "no_handler"
MISSING_REQUIRED_FIELD = "missing_required_field"
BACKEND_ERROR = "backend_error"
MALFORMED_INPUT = "malformed_input"


class MalformedInputError(ValueError):
    """Raised by an invocation when recognized input cannot be turned into fields."""


@dataclass(frozen=True)
class Outcome:
    """Result of one command: success flag plus the text the host should show.

    Unpacks as ``(is_error, message)`` so hosts can treat it as the plain pair.
    ``error_code`` is one of the module-level codes when ``is_error`` is set.
    """

    is_error: bool
    message: str = ""
    error_code: Optional[str] = None
    handler: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str = "", **extras: Any) -> "Outcome":
        return cls(is_error=False, message=message, **extras)

    @classmethod
    def error(cls, error_code: str, message: str, **extras: Any) -> "Outcome":
        return cls(is_error=True, message=message, error_code=error_code, **extras)

    @classmethod
    def from_script_result(cls, result: Any, **extras: Any) -> "Outcome":
        """Pass a backend ``(is_error, output)`` pair through unchanged."""
        is_error, output = result
        if is_error:
            return cls.error(BACKEND_ERROR, output, **extras)
        return cls.ok(output, **extras)

    def __iter__(self) -> Iterator[Any]:
        yield self.is_error
        yield self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_error": self.is_error,
            "message": self.message,
            "error_code": self.error_code,
            "handler": self.handler,
            "fields": dict(self.fields),
        }


__all__ = [
    "BACKEND_ERROR",
    "MALFORMED_INPUT",
    "MISSING_REQUIRED_FIELD",
    "NO_HANDLER",
    "MalformedInputError",
    "Outcome",
]
