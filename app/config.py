"""Centralize defaults and environment lookups for the command interpreter."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from core.assistant_config import AssistantConfig, load_assistant_config

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_ASSISTANT_CONFIG_PATH = "config/assistant.yml"
_DEFAULT_SCRIPT_BACKEND = "osascript"
_DEFAULT_SCRIPT_BACKEND_URL = "http://127.0.0.1:8765"
_DEFAULT_SCRIPT_TIMEOUT_SECONDS = 30.0
_DEFAULT_LOGGING_ENABLED: bool = True
_DEFAULT_LOG_REDACTION_ENABLED: bool = True
_DEFAULT_LOG_DIR = "logs"
_TURN_LOG_FILENAME = "turns.jsonl"
_DEFAULT_LOG_REDACTION_PATTERNS = "email,phone,credit_card,gov_id,url"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_WEB_UI_HOST = "127.0.0.1"
_DEFAULT_WEB_UI_PORT = 9000

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env(env: Dict[str, str] | None) -> Dict[str, str] | os._Environ[str]:
    return env if env is not None else os.environ


def _read_bool(env: Dict[str, str] | None, key: str, default: bool) -> bool:
    raw = _env(env).get(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _FALSE_VALUES:
        return False
    if normalized in _TRUE_VALUES:
        return True
    return default


def _read_int(env: Dict[str, str] | None, key: str) -> Optional[int]:
    raw = _env(env).get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


# ---------------------------------------------------------------------------
# Assistant configuration (YAML file + environment overrides)
# ---------------------------------------------------------------------------
def get_assistant_config_path(env: Dict[str, str] | None = None) -> Path:
    """Return the path of the optional YAML assistant config."""

    override = _env(env).get("ASSISTANT_CONFIG_PATH")
    return Path(override) if override else Path(_DEFAULT_ASSISTANT_CONFIG_PATH)


def get_assistant_config(env: Dict[str, str] | None = None) -> AssistantConfig:
    """Build the handler configuration from the YAML file and environment.

    Environment values win over the file; the file wins over built-in defaults.
    Invalid values raise ``ValueError`` so misconfiguration surfaces at startup.
    """

    source = _env(env)
    config = load_assistant_config(get_assistant_config_path(env))
    return config.with_overrides(
        {
            "calendar_name": (source.get("CALENDAR_NAME") or "").strip() or None,
            "business_hours_start": _read_int(env, "BUSINESS_HOURS_START"),
            "business_hours_end": _read_int(env, "BUSINESS_HOURS_END"),
            "search_url_template": (source.get("SEARCH_URL_TEMPLATE") or "").strip() or None,
        }
    )


# ---------------------------------------------------------------------------
# Script backend
# ---------------------------------------------------------------------------
def get_script_backend_kind(env: Dict[str, str] | None = None) -> str:
    """Return ``osascript``, ``http`` or ``dry_run``."""

    return (_env(env).get("SCRIPT_BACKEND") or _DEFAULT_SCRIPT_BACKEND).strip().lower()


def get_script_backend_url(env: Dict[str, str] | None = None) -> str:
    return _env(env).get("SCRIPT_BACKEND_URL", _DEFAULT_SCRIPT_BACKEND_URL)


def get_script_timeout(env: Dict[str, str] | None = None) -> float:
    """Return the per-script timeout in seconds."""

    raw = _env(env).get("SCRIPT_TIMEOUT_SECONDS")
    if raw is None:
        return _DEFAULT_SCRIPT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_SCRIPT_TIMEOUT_SECONDS
    return value if value > 0 else _DEFAULT_SCRIPT_TIMEOUT_SECONDS


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def is_logging_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether turn logging is active."""

    return _read_bool(env, "LOGGING_ENABLED", _DEFAULT_LOGGING_ENABLED)


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    """Return the base directory for turn-by-turn logs."""

    override = _env(env).get("LOG_DIR")
    return Path(override) if override else Path(_DEFAULT_LOG_DIR)


def get_turn_log_path(env: Dict[str, str] | None = None) -> Path:
    """Return the full path for the turn log JSONL file."""

    return get_log_dir(env) / _TURN_LOG_FILENAME


def is_log_redaction_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether sensitive values should be scrubbed before logging."""

    return _read_bool(env, "LOG_REDACTION_ENABLED", _DEFAULT_LOG_REDACTION_ENABLED)


def get_log_redaction_patterns(env: Dict[str, str] | None = None) -> List[str]:
    """Return the list of redaction pattern keys to apply."""

    raw = _env(env).get("LOG_REDACTION_PATTERNS")
    values = raw if raw is not None else _DEFAULT_LOG_REDACTION_PATTERNS
    return [segment.strip().lower() for segment in values.split(",") if segment.strip()]


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Return the maximum size in bytes before rotating log files."""

    raw = _env(env).get("LOG_MAX_BYTES")
    if raw is None:
        return _DEFAULT_LOG_MAX_BYTES
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_LOG_MAX_BYTES
    return max(value, 0)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    """Return the number of rotated log files to retain."""

    raw = _env(env).get("LOG_BACKUP_COUNT")
    if raw is None:
        return _DEFAULT_LOG_BACKUP_COUNT
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_LOG_BACKUP_COUNT
    return max(value, 0)


def get_log_level(env: Dict[str, str] | None = None) -> str:
    return (_env(env).get("LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()


# ---------------------------------------------------------------------------
# HTTP host
# ---------------------------------------------------------------------------
def get_web_ui_host(env: Dict[str, str] | None = None) -> str:
    return _env(env).get("WEB_UI_HOST", _DEFAULT_WEB_UI_HOST)


def get_web_ui_port(env: Dict[str, str] | None = None) -> int:
    raw = _env(env).get("WEB_UI_PORT")
    if raw is None:
        return _DEFAULT_WEB_UI_PORT
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_WEB_UI_PORT
    return value if 0 < value <= 65535 else _DEFAULT_WEB_UI_PORT
