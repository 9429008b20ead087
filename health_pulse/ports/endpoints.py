"""Endpoint port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["EndpointSpec"]


@dataclass(slots=True, frozen=True)
class EndpointSpec:
    """One monitored endpoint, as declared in the endpoints file.

    Attributes:
        name: Human-readable endpoint name used in alerts.
        url: Target URL receiving the POST.
        body_template: Query string wrapped as ``{"query": ...}``.
        auth_key_name: Name of the env var holding a bearer token, if any.
    """

    name: str
    url: str
    body_template: str
    auth_key_name: str | None = None
