from pathlib import Path

import pytest

from app import config as app_config
from core.assistant_config import AssistantConfig, load_assistant_config


def write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "assistant.yml"
    path.write_text(body, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(tmp_path):
    config = load_assistant_config(tmp_path / "absent.yml")
    assert config == AssistantConfig()
    with pytest.raises(FileNotFoundError):
        load_assistant_config(tmp_path / "absent.yml", missing_ok=False)


def test_yaml_sections_are_read(tmp_path):
    path = write_config(
        tmp_path,
        "calendar:\n"
        "  name: Work\n"
        "  business_hours:\n"
        "    start: 8\n"
        "    end: 18\n"
        "browser:\n"
        "  search_url_template: \"https://duckduckgo.com/?q={query}\"\n",
    )
    config = load_assistant_config(path)
    assert config.calendar_name == "Work"
    assert (config.business_hours_start, config.business_hours_end) == (8, 18)
    assert config.search_url_template == "https://duckduckgo.com/?q={query}"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"business_hours_start": 18, "business_hours_end": 9},
        {"business_hours_end": 25},
        {"search_url_template": "https://example.com/search"},
        {"calendar_name": "  "},
    ],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        AssistantConfig(**kwargs)


def test_malformed_yaml_section_is_rejected(tmp_path):
    path = write_config(tmp_path, "calendar: [not, a, mapping]\n")
    with pytest.raises(ValueError):
        load_assistant_config(path)


def test_environment_overrides_file(tmp_path):
    path = write_config(tmp_path, "calendar:\n  name: Work\n")
    env = {"ASSISTANT_CONFIG_PATH": str(path), "CALENDAR_NAME": "Family", "BUSINESS_HOURS_END": "20"}
    config = app_config.get_assistant_config(env)
    assert config.calendar_name == "Family"
    assert config.business_hours_end == 20
    assert config.business_hours_start == 9


def test_bad_integer_in_environment_fails_fast(tmp_path):
    env = {"ASSISTANT_CONFIG_PATH": str(tmp_path / "absent.yml"), "BUSINESS_HOURS_START": "nine"}
    with pytest.raises(ValueError):
        app_config.get_assistant_config(env)


def test_runtime_settings_defaults():
    env: dict[str, str] = {}
    assert app_config.get_script_backend_kind(env) == "osascript"
    assert app_config.get_script_timeout(env) == 30.0
    assert app_config.get_turn_log_path(env) == Path("logs") / "turns.jsonl"
    assert app_config.get_log_redaction_patterns(env) == ["email", "phone", "credit_card", "gov_id", "url"]
    assert app_config.get_web_ui_port(env) == 9000


def test_runtime_settings_from_environment():
    env = {
        "SCRIPT_BACKEND": " HTTP ",
        "SCRIPT_TIMEOUT_SECONDS": "-4",
        "LOGGING_ENABLED": "off",
        "LOG_REDACTION_PATTERNS": "Email, url",
        "LOG_MAX_BYTES": "oops",
        "WEB_UI_PORT": "8080",
    }
    assert app_config.get_script_backend_kind(env) == "http"
    assert app_config.get_script_timeout(env) == 30.0
    assert app_config.is_logging_enabled(env) is False
    assert app_config.get_log_redaction_patterns(env) == ["email", "url"]
    assert app_config.get_log_max_bytes(env) == 1_000_000
    assert app_config.get_web_ui_port(env) == 8080
