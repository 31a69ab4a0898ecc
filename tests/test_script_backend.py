import subprocess
from types import SimpleNamespace

import pytest
import requests

from core.script_backend import (
    HttpScriptBackend,
    OsascriptBackend,
    RecordingBackend,
    ScriptResult,
    create_backend,
)


def test_osascript_success_strips_trailing_newline(monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs))
        return SimpleNamespace(returncode=0, stdout="Alvin Chen\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = OsascriptBackend(timeout=5).execute('return "Alvin Chen"')

    assert result == ScriptResult(False, "Alvin Chen")
    args, kwargs = calls[0]
    assert args == ["osascript", "-"]
    assert kwargs["input"] == 'return "Alvin Chen"'
    assert kwargs["timeout"] == 5


def test_osascript_failure_reports_stderr(monkeypatch):
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda args, **kwargs: SimpleNamespace(returncode=1, stdout="", stderr="execution error: nope (-1728)\n"),
    )
    assert OsascriptBackend().execute("bad") == ScriptResult(True, "execution error: nope (-1728)")


def test_osascript_timeout_is_an_error(monkeypatch):
    def fake_run(args, **kwargs):
        raise subprocess.TimeoutExpired(cmd=args, timeout=kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = OsascriptBackend(timeout=2).execute("delay 10")
    assert result.is_error
    assert "timed out" in result.output


def test_osascript_missing_binary_is_an_error(monkeypatch):
    def fake_run(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = OsascriptBackend().execute("beep")
    assert result == ScriptResult(True, "osascript is not available on this system")


class StubResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._payload


class StubSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.requests = []
        self._response = response
        self._error = error

    def post(self, url, json=None, timeout=None):
        self.requests.append((url, json, timeout))
        if self._error:
            raise self._error
        return self._response


def test_http_backend_posts_script_and_reads_result():
    session = StubSession(StubResponse({"is_error": False, "output": "done"}))
    backend = HttpScriptBackend("http://relay.local:8765/", timeout=3, session=session)

    assert backend.execute("beep") == ScriptResult(False, "done")
    assert session.requests == [("http://relay.local:8765/execute", {"script": "beep"}, 3)]
    assert session.headers["Accept"] == "application/json"


@pytest.mark.parametrize(
    "session, message",
    [
        (StubSession(error=requests.ConnectionError("refused")), "Script relay request failed: refused"),
        (StubSession(StubResponse(status_code=500)), "Script relay request failed: 500 Server Error"),
        (StubSession(StubResponse(json_error=True)), "Script relay returned a non-JSON response"),
        (StubSession(StubResponse(["unexpected"])), "Script relay returned an unexpected payload"),
    ],
)
def test_http_backend_failures_become_error_results(session, message):
    result = HttpScriptBackend("http://relay.local", session=session).execute("beep")
    assert result == ScriptResult(True, message)


def test_http_backend_passes_relay_error_through():
    session = StubSession(StubResponse({"is_error": True, "output": "Calendar got an error"}))
    assert HttpScriptBackend("http://relay.local", session=session).execute("x") == ScriptResult(True, "Calendar got an error")


def test_recording_backend_accepts_plain_tuples():
    backend = RecordingBackend(lambda script: (script == "fail", script.upper()))
    assert backend.execute("ok") == ScriptResult(False, "OK")
    assert backend.execute("fail") == ScriptResult(True, "FAIL")
    assert backend.scripts == ["ok", "fail"]


def test_create_backend_validates_kind():
    assert isinstance(create_backend("dry_run"), RecordingBackend)
    assert isinstance(create_backend("OSASCRIPT"), OsascriptBackend)
    assert isinstance(create_backend("http", base_url="http://relay.local"), HttpScriptBackend)
    with pytest.raises(ValueError):
        create_backend("http")
    with pytest.raises(ValueError):
        create_backend("shell")
