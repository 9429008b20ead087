"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from health_pulse.adapters.driven.config.settings import Settings, load_settings

__all__ = []

ENV_VARS = (
    "PULSE_INTERVAL_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "ENDPOINTS_FILE_PATH",
    "ALERT_CHANNEL",
    "ALERT_TIMEZONE",
    "SLACK_API_URL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every settings variable (a local .env may have set them)."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env) -> None:
    """Without env vars, settings should fall back to hourly defaults."""
    settings = load_settings()

    assert settings.interval_sec == 3600
    assert settings.request_timeout_sec == 30.0
    assert settings.endpoints_file_path == "endpoints.yaml"
    assert settings.alert_channel == "#webserver-alerts"
    assert settings.alert_timezone == "America/New_York"
    assert settings.slack_api_url == "https://slack.com/api/chat.postMessage"


def test_settings_load_settings_from_env(clean_env) -> None:
    """Load Settings should pick values from the environment."""
    clean_env.setenv("PULSE_INTERVAL_SECONDS", "60")
    clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("ENDPOINTS_FILE_PATH", "/etc/pulse/endpoints.yaml")
    clean_env.setenv("ALERT_CHANNEL", "#ops")
    clean_env.setenv("ALERT_TIMEZONE", "Europe/Rome")

    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.interval_sec == 60
    assert settings.request_timeout_sec == 2.5
    assert settings.endpoints_file_path == "/etc/pulse/endpoints.yaml"
    assert settings.alert_channel == "#ops"
    assert settings.alert_timezone == "Europe/Rome"


@pytest.mark.parametrize("raw", ["-5", "0", "hourly"])
def test_settings_rejects_invalid_interval(clean_env, raw: str) -> None:
    """Interval must be a positive integer."""
    clean_env.setenv("PULSE_INTERVAL_SECONDS", raw)

    with pytest.raises(RuntimeError, match="PULSE_INTERVAL_SECONDS must be a positive number"):
        load_settings()


def test_settings_rejects_invalid_timeout(clean_env) -> None:
    """Timeout must be a positive number."""
    clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "-1")

    with pytest.raises(RuntimeError, match="REQUEST_TIMEOUT_SECONDS"):
        load_settings()


def test_settings_rejects_unknown_timezone() -> None:
    """Unknown IANA names should fail validation."""
    with pytest.raises(ValueError, match="Unknown timezone"):
        Settings(alert_timezone="Mars/Olympus_Mons")


def test_settings_rejects_invalid_slack_url() -> None:
    """Slack API URL must be an http(s) URL."""
    with pytest.raises(ValueError, match="Invalid Slack API URL"):
        Settings(slack_api_url="not a url")


def test_env_example_documents_every_variable() -> None:
    """The sample .env should mention every supported variable."""
    env_example = Path(__file__).parents[3] / ".env.example"
    content = env_example.read_text(encoding="utf-8")

    for name in (*ENV_VARS, "LOG_LEVEL", "SLACK_OAUTH_TOKEN"):
        assert f"{name}=" in content, name
