"""Pure helpers of the pulse cycle: payload, classification, alert text."""

import json
from datetime import datetime, tzinfo
from typing import Any

from health_pulse.ports.endpoints import EndpointSpec
from health_pulse.ports.probe import ApplicationError, ProbeOutcome, Success

__all__ = [
    "ALERT_TIMESTAMP_FORMAT",
    "build_query_payload",
    "classify_response",
    "format_failure_message",
]

ALERT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


def build_query_payload(body_template: str) -> dict[str, Any]:
    """Wrap a query template in a GraphQL-shaped envelope.

    The envelope is used for every target, GraphQL or not.
    """
    return {"query": body_template}


def classify_response(body: str) -> ProbeOutcome:
    """Classify a completed HTTP response by its payload.

    A JSON object with a top-level ``errors`` key is an application error
    whatever the status code. Non-JSON bodies and JSON without ``errors``
    count as success.

    Args:
        body: Raw response text.

    Returns:
        ``ApplicationError`` or ``Success`` carrying the body.
    """
    try:
        decoded = json.loads(body)
    except ValueError:
        return Success(response_body=body)

    if isinstance(decoded, dict) and "errors" in decoded:
        return ApplicationError(response_body=body)
    return Success(response_body=body)


def format_failure_message(
    endpoint: EndpointSpec,
    detail: str,
    now: datetime,
    tz: tzinfo,
) -> str:
    """Render the alert text for a failed probe.

    Args:
        endpoint: Endpoint that failed.
        detail: Response body or transport error description.
        now: Aware timestamp of the failure.
        tz: Timezone the timestamp is displayed in.

    Returns:
        Multi-line alert message.
    """
    timestamp = now.astimezone(tz).strftime(ALERT_TIMESTAMP_FORMAT)
    return (
        "⚠️ GraphQL Endpoint Failed!\n"
        f"Timestamp: {timestamp}\n"
        f"Endpoint: {endpoint.name} {endpoint.url}\n"
        f"Error: {detail}"
    )
