"""Endpoint set loading from the YAML endpoints file."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from health_pulse.ports.endpoints import EndpointSpec
from health_pulse.ports.errors import ConfigParseError, ConfigReadError

__all__ = ["EndpointModel", "EndpointsFile", "load_endpoints", "parse_endpoints"]

logger = logging.getLogger(__name__)


class EndpointModel(BaseModel):
    """One ``endpoints`` entry as written in the file.

    Attributes:
        name: Endpoint name shown in alerts.
        url: URL receiving the POST.
        body: Query string, sent as ``{"query": body}``.
        auth_key: Optional env variable name holding a bearer token.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    auth_key: str | None = Field(default=None, min_length=1)

    def to_spec(self) -> EndpointSpec:
        return EndpointSpec(
            name=self.name,
            url=self.url,
            body_template=self.body,
            auth_key_name=self.auth_key,
        )


class EndpointsFile(BaseModel):
    """Top-level document of the endpoints file."""

    model_config = ConfigDict(extra="forbid")

    endpoints: list[EndpointModel] = Field(default_factory=list)


def parse_endpoints(content: str, source: str = "<string>") -> list[EndpointSpec]:
    """Parse endpoints file content into an ordered endpoint set.

    Args:
        content: YAML document text.
        source: Name used in error messages.

    Returns:
        Endpoint specs in file order.

    Raises:
        ConfigParseError: If the YAML is invalid or does not match the schema.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Endpoints file contains invalid YAML: {source}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"Endpoints file must be a mapping with an 'endpoints' list: {source}")

    try:
        document = EndpointsFile.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Endpoints file is malformed: {source}: {e}") from e

    return [entry.to_spec() for entry in document.endpoints]


def load_endpoints(path: str | Path) -> list[EndpointSpec]:
    """Read and parse the endpoints file.

    Called on every tick; nothing is cached so edits apply on the next tick.

    Args:
        path: Path to the YAML endpoints file.

    Returns:
        Endpoint specs in file order.

    Raises:
        ConfigReadError: If the file is missing or unreadable.
        ConfigParseError: If the content is malformed.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Failed to read endpoints file {path}: {e}") from e

    endpoints = parse_endpoints(content, source=str(path))
    logger.debug(f"Loaded {len(endpoints)} endpoints from {path}")
    return endpoints
