"""Probe outcome variants."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Success", "ApplicationError", "TransportError", "ProbeOutcome"]


@dataclass(slots=True, frozen=True)
class Success:
    """Endpoint answered and the payload carries no ``errors`` field."""

    response_body: str


@dataclass(slots=True, frozen=True)
class ApplicationError:
    """HTTP succeeded but the payload signals an error."""

    response_body: str

    @property
    def detail(self) -> str:
        return self.response_body


@dataclass(slots=True, frozen=True)
class TransportError:
    """The request could not complete."""

    error_detail: str

    @property
    def detail(self) -> str:
        return self.error_detail


ProbeOutcome = Success | ApplicationError | TransportError
