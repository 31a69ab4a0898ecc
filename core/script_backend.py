"""Execute generated AppleScript and report ``(is_error, output)``.

Handlers only build scripts; one of these adapters runs them. ``osascript``
runs locally on macOS, ``http`` forwards to a relay on a Mac, and
``dry_run`` records scripts without running anything.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, List, NamedTuple, Optional, Protocol, Tuple, Union

import requests

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0
_USER_AGENT = "knight-command/1.0"


class ScriptResult(NamedTuple):
    is_error: bool
    output: str


class ScriptBackend(Protocol):
    def execute(self, script: str) -> ScriptResult:
        ...


class OsascriptBackend:
    """Run scripts through the local ``osascript`` binary."""

    def __init__(self, *, timeout: float = _DEFAULT_TIMEOUT, executable: str = "osascript") -> None:
        self._timeout = timeout
        self._executable = executable

    def execute(self, script: str) -> ScriptResult:
        try:
            completed = subprocess.run(
                [self._executable, "-"],
                input=script,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("AppleScript timed out after %.1fs", self._timeout)
            return ScriptResult(True, f"Script timed out after {self._timeout:g} seconds")
        except FileNotFoundError:
            logger.warning("%s not found; the osascript backend requires macOS", self._executable)
            return ScriptResult(True, f"{self._executable} is not available on this system")

        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"osascript exited with status {completed.returncode}"
            logger.info("AppleScript failed (rc=%s): %s", completed.returncode, detail)
            return ScriptResult(True, detail)
        return ScriptResult(False, completed.stdout.strip("\r\n"))


class HttpScriptBackend:
    """Forward scripts to a relay that answers ``{"is_error": bool, "output": str}``.

    The relay is called once per script; failed requests are reported, not retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._endpoint = f"{base_url.rstrip('/')}/execute"
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT, "Accept": "application/json"})

    def execute(self, script: str) -> ScriptResult:
        try:
            response = self._session.post(self._endpoint, json={"script": script}, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Script relay request to %s failed: %s", self._endpoint, exc)
            return ScriptResult(True, f"Script relay request failed: {exc}")

        try:
            data = response.json()
        except ValueError:
            return ScriptResult(True, "Script relay returned a non-JSON response")
        if not isinstance(data, dict):
            return ScriptResult(True, "Script relay returned an unexpected payload")
        return ScriptResult(bool(data.get("is_error")), str(data.get("output") or ""))


Responder = Callable[[str], Union[ScriptResult, Tuple[bool, str]]]


class RecordingBackend:
    """Keep every script received; answer from ``responder`` or a fixed result."""

    def __init__(self, responder: Optional[Responder] = None, *, result: ScriptResult = ScriptResult(False, "")) -> None:
        self.scripts: List[str] = []
        self._responder = responder
        self._result = result

    def execute(self, script: str) -> ScriptResult:
        self.scripts.append(script)
        if self._responder is None:
            return self._result
        is_error, output = self._responder(script)
        return ScriptResult(bool(is_error), output)


BACKEND_KINDS = ("osascript", "http", "dry_run")


def create_backend(kind: str, *, base_url: str = "", timeout: float = _DEFAULT_TIMEOUT) -> ScriptBackend:
    """Build the backend named by ``kind`` (one of ``BACKEND_KINDS``)."""
    normalized = (kind or "").strip().lower()
    if normalized == "osascript":
        return OsascriptBackend(timeout=timeout)
    if normalized == "http":
        if not base_url:
            raise ValueError("The http script backend requires SCRIPT_BACKEND_URL")
        return HttpScriptBackend(base_url, timeout=timeout)
    if normalized == "dry_run":
        return RecordingBackend()
    raise ValueError(f"Unknown script backend '{kind}'; expected one of {', '.join(BACKEND_KINDS)}")


__all__ = [
    "BACKEND_KINDS",
    "HttpScriptBackend",
    "OsascriptBackend",
    "RecordingBackend",
    "ScriptBackend",
    "ScriptResult",
    "create_backend",
]
