"""HTTP port definition (DTOs)."""

from dataclasses import dataclass
from typing import Any

__all__ = ["ProbeRequest", "HttpReply"]


@dataclass
class ProbeRequest:
    """HTTP POST to be sent to a monitored endpoint.

    Decouples the pulse cycle from HTTP implementation details.

    Attributes:
        url: Target HTTP endpoint URL.
        payload: JSON-serializable dictionary to send as request body.
        auth_token: Optional bearer token for the Authorization header.
    """

    url: str
    payload: dict[str, Any]
    auth_token: str | None = None


@dataclass(slots=True, frozen=True)
class HttpReply:
    """Completed HTTP exchange: status code and raw body text."""

    status: int
    body: str
