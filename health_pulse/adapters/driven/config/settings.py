"""Configuration loading from environment variables."""

import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

DEFAULT_INTERVAL_SECONDS = 3600
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_ENDPOINTS_FILE_PATH = "endpoints.yaml"
DEFAULT_ALERT_CHANNEL = "#webserver-alerts"
DEFAULT_ALERT_TIMEZONE = "America/New_York"
DEFAULT_SLACK_API_URL = "https://slack.com/api/chat.postMessage"


class Settings(BaseModel):
    """Runtime configuration for the health pulse service.

    Attributes:
        interval_sec: Seconds between pulse ticks (must be positive).
        request_timeout_sec: Total timeout for one probe request.
        endpoints_file_path: Path of the YAML endpoints file.
        alert_channel: Slack channel receiving failure alerts.
        alert_timezone: IANA timezone used in alert timestamps.
        slack_api_url: Slack ``chat.postMessage`` URL.
    """

    interval_sec: int = Field(
        default=DEFAULT_INTERVAL_SECONDS, gt=0, description="Seconds between pulse ticks."
    )
    request_timeout_sec: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Total timeout for one probe request.",
    )
    endpoints_file_path: str = Field(
        default=DEFAULT_ENDPOINTS_FILE_PATH,
        min_length=1,
        description="Path to the YAML file listing monitored endpoints.",
    )
    alert_channel: str = Field(
        default=DEFAULT_ALERT_CHANNEL, min_length=1, description="Channel receiving alerts."
    )
    alert_timezone: str = Field(
        default=DEFAULT_ALERT_TIMEZONE, description="IANA timezone for alert timestamps."
    )
    slack_api_url: str = Field(
        default=DEFAULT_SLACK_API_URL, description="Slack chat.postMessage endpoint."
    )

    @field_validator("alert_timezone")
    @classmethod
    def validate_alert_timezone(cls, v: str) -> str:
        """Validate that the timezone name resolves.

        Raises:
            ValueError: If the name is not a known IANA timezone.
        """
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("slack_api_url")
    @classmethod
    def validate_slack_api_url(cls, v: str) -> str:
        """Validate that the Slack API URL is a valid HTTP(S) URL.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http(s):// endpoints allowed")
        except Exception as e:
            raise ValueError(f"Invalid Slack API URL: {e}") from e
        return v


def _read_number(name: str, default: float, cast: type[int] | type[float]) -> int | float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
        if value <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(f"{name} must be a positive number (got: {raw})") from e
    return value


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    All variables are optional:
    - PULSE_INTERVAL_SECONDS: Positive integer, default 3600.
    - REQUEST_TIMEOUT_SECONDS: Positive number, default 30.
    - ENDPOINTS_FILE_PATH: Default ``endpoints.yaml``.
    - ALERT_CHANNEL: Default ``#webserver-alerts``.
    - ALERT_TIMEZONE: Default ``America/New_York``.
    - SLACK_API_URL: Default Slack chat.postMessage URL.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If a numeric variable is not a positive number.
        ValueError: If configuration is invalid.
    """
    settings = Settings(
        interval_sec=_read_number("PULSE_INTERVAL_SECONDS", DEFAULT_INTERVAL_SECONDS, int),
        request_timeout_sec=_read_number(
            "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS, float
        ),
        endpoints_file_path=os.getenv("ENDPOINTS_FILE_PATH", DEFAULT_ENDPOINTS_FILE_PATH),
        alert_channel=os.getenv("ALERT_CHANNEL", DEFAULT_ALERT_CHANNEL),
        alert_timezone=os.getenv("ALERT_TIMEZONE", DEFAULT_ALERT_TIMEZONE),
        slack_api_url=os.getenv("SLACK_API_URL", DEFAULT_SLACK_API_URL),
    )

    logger.info(
        f"Health pulse configured: interval={settings.interval_sec}s, "
        f"timeout={settings.request_timeout_sec}s, "
        f"endpoints_file={settings.endpoints_file_path}, "
        f"channel={settings.alert_channel}, "
        f"timezone={settings.alert_timezone}"
    )

    return settings
