"""JSONL turn log for dispatched commands.

Every call to ``Dispatcher.dispatch`` can append one ``TurnRecord``: the
command text, the handler and invocation that claimed it, the parsed fields
and the resulting outcome. Contact names, phone numbers and free-form message
bodies pass through here, so text fields are scrubbed before they reach disk
and the file is size-capped with numbered backups.
"""

from __future__ import annotations

import json
import re
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple

from core.text_utils import hash_text

REDACTION_RULES: Dict[str, Pattern[str]] = {
    "credit_card": re.compile(r"\b(?:\d[ -]*){13,19}\b"),
    "gov_id": re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),
    "email": re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE),
    "phone": re.compile(r"(?:\+?\d[\d\s\-().]{6,}\d)"),
    "url": re.compile(r"https?://[^\s]+", re.IGNORECASE),
}
# Scrubbed keys of a serialized TurnRecord.
_TEXT_FIELDS = ("command", "fields", "message")


@dataclass
class TurnRecord:
    """One dispatched command as written to the turn log."""

    timestamp: str
    command: str
    command_hash: str
    handler: Optional[str] = None
    invocation: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    is_error: bool = False
    error_code: Optional[str] = None
    message: str = ""
    latency_ms: Optional[int] = None

    @classmethod
    def new(cls, *, command: str, fields: Optional[Dict[str, Any]] = None, **details: Any) -> "TurnRecord":
        """Stamp the UTC time and the normalized command hash; other columns pass through."""
        return cls(
            timestamp=datetime.now(tz=timezone.utc).isoformat(),
            command=command,
            command_hash=hash_text(command),
            fields=dict(fields or {}),
            **details,
        )


class Redactor:
    """Replace matches of the selected rules with ``[REDACTED_<RULE>]``.

    Rules run in ``REDACTION_RULES`` order, so card and ID numbers are
    replaced before the looser phone pattern can claim their digits.
    """

    def __init__(self, rule_names: Optional[Iterable[str]] = None) -> None:
        wanted = set(rule_names) if rule_names else set(REDACTION_RULES)
        self._rules: List[Tuple[str, Pattern[str]]] = [
            (name, pattern) for name, pattern in REDACTION_RULES.items() if name in wanted
        ]

    @property
    def rule_names(self) -> List[str]:
        return [name for name, _ in self._rules]

    def scrub(self, value: Any) -> Any:
        if isinstance(value, str):
            for name, pattern in self._rules:
                value = pattern.sub(f"[REDACTED_{name.upper()}]", value)
            return value
        if isinstance(value, dict):
            return {key: self.scrub(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.scrub(item) for item in value]
        return value


def rotate_file(path: Path, backup_count: int) -> None:
    """Shift ``path`` to ``path.1`` (``.1`` to ``.2`` and so on), keeping ``backup_count`` files.

    With no backups the live file is simply removed.
    """
    if backup_count <= 0:
        path.unlink()
        return
    oldest = Path(f"{path}.{backup_count}")
    if oldest.exists():
        oldest.unlink()
    for index in range(backup_count - 1, 0, -1):
        source = Path(f"{path}.{index}")
        if source.exists():
            source.replace(Path(f"{path}.{index + 1}"))
    path.replace(Path(f"{path}.1"))


class TurnLogger:
    """Append ``TurnRecord`` rows to a JSONL file.

    ``max_bytes`` of 0 disables rotation. Writes are serialized with a lock
    because the HTTP host may log from worker threads.
    """

    def __init__(
        self,
        *,
        log_path: Path,
        enabled: bool = True,
        redact: bool = True,
        patterns: Optional[Iterable[str]] = None,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._log_path = Path(log_path)
        self._enabled = enabled
        self._redactor = Redactor(patterns) if redact else None
        self._max_bytes = max_bytes
        self._backup_count = backup_count
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def log_path(self) -> Path:
        return self._log_path

    def log_turn(self, record: TurnRecord) -> None:
        if not self._enabled:
            return
        row = asdict(record)
        if self._redactor is not None:
            for key in _TEXT_FIELDS:
                row[key] = self._redactor.scrub(row[key])
        line = json.dumps(row, ensure_ascii=False, default=str) + "\n"

        with self._lock:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            if self._needs_rotation(len(line.encode("utf-8"))):
                rotate_file(self._log_path, self._backup_count)
            with self._log_path.open("a", encoding="utf-8") as handle:
                handle.write(line)

    def _needs_rotation(self, incoming_bytes: int) -> bool:
        if self._max_bytes <= 0 or not self._log_path.exists():
            return False
        return self._log_path.stat().st_size + incoming_bytes > self._max_bytes


__all__ = ["REDACTION_RULES", "Redactor", "TurnLogger", "TurnRecord", "rotate_file"]
