"""FastAPI application exposing the dispatcher over HTTP."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from app.main import build_dispatcher
from core.dispatcher import Dispatcher
from core.outcome import MalformedInputError


class CommandRequest(BaseModel):
    command: str


def _require_command(payload: CommandRequest) -> str:
    if not (payload.command or "").strip():
        raise HTTPException(status_code=400, detail="Command is required.")
    return payload.command


def create_app(dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    """WHAT: instantiate FastAPI around a single shared dispatcher.

    WHY: the HTTP host must route commands exactly like the CLI does.
    HOW: accept a dispatcher override (tests), otherwise build the configured
    one, cache it on ``app.state`` and register the routes.
    """
    app = FastAPI(title="Command Interpreter API", version="1.0.0")
    app.state.dispatcher = dispatcher or build_dispatcher()

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.get("/api/handlers")
    def list_handlers() -> Dict[str, Any]:
        """Handler names in dispatch order, with the invocations each accepts."""
        return {
            "handlers": [
                {"name": handler.name, "invocations": [invocation.name for invocation in handler.invocations]}
                for handler in app.state.dispatcher.handlers
            ]
        }

    @app.post("/api/dispatch")
    def dispatch(payload: CommandRequest) -> Dict[str, Any]:
        command = _require_command(payload)
        outcome = app.state.dispatcher.dispatch(command)
        return outcome.to_dict()

    @app.post("/api/parse")
    def parse(payload: CommandRequest) -> Dict[str, Any]:
        """Show which handler would take the command and what it would extract.

        ``tell``/``message`` commands still run contact lookups on the backend.
        """
        command = _require_command(payload)
        try:
            parsed = app.state.dispatcher.preview(command)
        except MalformedInputError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        if parsed is None:
            raise HTTPException(status_code=404, detail="No handler recognizes this command.")
        return parsed.to_dict()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from app.config import get_web_ui_host, get_web_ui_port

    uvicorn.run(
        "app.web_api:app",
        host=get_web_ui_host(),
        port=get_web_ui_port(),
        reload=False,
    )
