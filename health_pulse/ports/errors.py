"""Error taxonomy shared by core and adapters."""

__all__ = [
    "PulseError",
    "ConfigError",
    "ConfigReadError",
    "ConfigParseError",
    "RequestTransportError",
    "NotifyError",
    "MissingCredential",
    "NotifyTransportError",
    "NotifyApiError",
]


class PulseError(Exception):
    """Base class for every error raised by the monitor."""


class ConfigError(PulseError):
    """Endpoints file could not be turned into an endpoint set."""


class ConfigReadError(ConfigError):
    """Endpoints file is missing or unreadable."""


class ConfigParseError(ConfigError):
    """Endpoints file content is malformed."""


class RequestTransportError(PulseError):
    """Probe request could not complete (network, DNS, timeout)."""


class NotifyError(PulseError):
    """Alert could not be delivered."""


class MissingCredential(NotifyError):
    """Bot token environment variable is not set."""


class NotifyTransportError(NotifyError):
    """Chat API could not be reached or answered with a bad HTTP status."""


class NotifyApiError(NotifyError):
    """Chat API rejected the message (``ok: false`` envelope).

    Attributes:
        api_error: Error code reported by the API.
    """

    def __init__(self, api_error: str) -> None:
        super().__init__(f"Slack API error: {api_error}")
        self.api_error = api_error
