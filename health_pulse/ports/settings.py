"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for the core loop.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        interval_sec: Seconds between pulse ticks.
        endpoints_file_path: Path of the endpoints file, re-read every tick.
        alert_channel: Channel receiving failure alerts.
        alert_timezone: IANA timezone used for alert timestamps.
        request_timeout_sec: Total timeout for one probe request.
    """

    interval_sec: float
    endpoints_file_path: str
    alert_channel: str = "#webserver-alerts"
    alert_timezone: str = "America/New_York"
    request_timeout_sec: float = 30.0
