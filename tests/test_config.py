"""Settings loading from the environment."""

import pytest

from pdf_rule_checker.config import DEFAULT_CORS_ORIGINS, Settings, load_settings
from pdf_rule_checker.errors import ConfigurationError

ENV_VARS = [
    "OPENROUTER_API_KEY", "LLM_MODEL", "LLM_TEMPERATURE", "LLM_MAX_TOKENS",
    "LLM_JSON_MODE", "PACING_INTERVAL_SECONDS", "MAX_UPLOAD_BYTES",
    "RATE_LIMIT_PER_MINUTE", "CORS_ORIGINS", "PORT", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so teardown also undoes anything load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep a developer's real .env out of the tests.
    empty_env = tmp_path / ".env"
    empty_env.write_text("")
    return str(empty_env)


def test_defaults(clean_env):
    settings = load_settings(clean_env)
    assert settings.api_key == ""
    assert settings.model == "openai/gpt-4o"
    assert settings.temperature == 0.2
    assert settings.max_tokens == 1000
    assert settings.pacing_interval == 0.5
    assert settings.max_upload_bytes == 10 * 1024 * 1024
    assert settings.port == 5000
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", " sk-or-test ")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LLM_JSON_MODE", "false")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    settings = load_settings(clean_env)
    assert settings.api_key == "sk-or-test"
    assert settings.port == 8080
    assert settings.json_mode is False
    assert settings.cors_origins == ("http://a.example", "http://b.example")


def test_invalid_number_falls_back_to_default(clean_env, monkeypatch):
    monkeypatch.setenv("PACING_INTERVAL_SECONDS", "soon")
    monkeypatch.setenv("LLM_MAX_TOKENS", "lots")
    settings = load_settings(clean_env)
    assert settings.pacing_interval == 0.5
    assert settings.max_tokens == 1000


def test_dotenv_file_loaded(clean_env, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("OPENROUTER_API_KEY=from-dotenv\n")
    settings = load_settings(str(env_file))
    assert settings.api_key == "from-dotenv"


def test_require_api_key():
    with pytest.raises(ConfigurationError):
        Settings().require_api_key()
    assert Settings(api_key="k").require_api_key() == "k"
