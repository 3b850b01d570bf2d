"""Config tests: env loading, defaults, validation."""
import pytest

from snapsolve.config import Config
from snapsolve.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.setattr("snapsolve.config.load_dotenv", lambda **_: None)
    list(map(
        lambda name: monkeypatch.delenv(name, raising=False),
        (
            "API_BASE_URL",
            "ACCESS_CODE",
            "PRIMARY_MODEL",
            "FALLBACK_MODEL",
            "THINKING_BUDGET",
            "TEMPERATURE",
            "REQUEST_TIMEOUT",
            "DEFAULT_LANGUAGE",
            "LOG_LEVEL",
        ),
    ))
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "bot123:ABC")
    monkeypatch.setenv("API_KEY", "AIza-test")


def test_config_from_env_success():
    """Happy-path: all required env vars present."""
    config = Config.from_env()

    assert config.telegram_bot_token == "bot123:ABC"
    assert config.api_key == "AIza-test"
    assert config.api_base_url is None


def test_config_missing_token_fails(monkeypatch):
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)

    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        Config.from_env()


def test_config_missing_api_key_raises_config_error(monkeypatch):
    """Missing API_KEY is fatal before any call is attempted."""
    monkeypatch.delenv("API_KEY", raising=False)

    with pytest.raises(ConfigError, match="API_KEY"):
        Config.from_env()


def test_config_error_is_a_value_error(monkeypatch):
    monkeypatch.setenv("API_KEY", "")

    with pytest.raises(ValueError):
        Config.from_env()


def test_config_immutable():
    """Frozen dataclass: attribute assignment must fail."""
    config = Config(telegram_bot_token="token", api_key="key")

    with pytest.raises(Exception):
        config.api_key = "other"


def test_config_defaults():
    config = Config.from_env()

    assert config.primary_model == "gemini-3-pro-preview"
    assert config.fallback_model == "gemini-2.5-flash"
    assert config.thinking_budget == 2048
    assert config.temperature == 0.2
    assert config.request_timeout == 120
    assert config.default_language == "en"
    assert config.access_code is None
    assert config.log_level == "INFO"


def test_config_base_url_trailing_slash_is_stripped(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://proxy.example.com/v1/")

    config = Config.from_env()

    assert config.api_base_url == "https://proxy.example.com/v1"
    assert config.uses_openai_compat


def test_config_blank_base_url_selects_native(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "")

    config = Config.from_env()

    assert config.api_base_url is None
    assert not config.uses_openai_compat


def test_config_zero_thinking_budget_disables_it(monkeypatch):
    monkeypatch.setenv("THINKING_BUDGET", "0")

    assert Config.from_env().thinking_budget is None


def test_config_model_overrides(monkeypatch):
    monkeypatch.setenv("PRIMARY_MODEL", "gpt-4o")
    monkeypatch.setenv("FALLBACK_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("TEMPERATURE", "0.5")
    monkeypatch.setenv("REQUEST_TIMEOUT", "30")

    config = Config.from_env()

    assert config.primary_model == "gpt-4o"
    assert config.fallback_model == "gpt-4o-mini"
    assert config.temperature == 0.5
    assert config.request_timeout == 30


def test_config_access_code_from_env(monkeypatch):
    monkeypatch.setenv("ACCESS_CODE", "letmein")

    assert Config.from_env().access_code == "letmein"


def test_config_default_language_zh(monkeypatch):
    monkeypatch.setenv("DEFAULT_LANGUAGE", "ZH")

    assert Config.from_env().default_language == "zh"


def test_config_rejects_unknown_language(monkeypatch):
    monkeypatch.setenv("DEFAULT_LANGUAGE", "fr")

    with pytest.raises(ValueError, match="DEFAULT_LANGUAGE"):
        Config.from_env()
