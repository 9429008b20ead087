"""Tests for payload building, response classification and alert text."""

import json
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from health_pulse.core.classify import (
    build_query_payload,
    classify_response,
    format_failure_message,
)
from health_pulse.ports.endpoints import EndpointSpec
from health_pulse.ports.probe import ApplicationError, Success

__all__ = []


def test_build_query_payload_wraps_template() -> None:
    """Template should be wrapped under a single 'query' key."""
    assert build_query_payload("{ ping }") == {"query": "{ ping }"}


@pytest.mark.parametrize(
    "payload",
    [
        {"errors": [{"message": "boom"}]},
        {"data": None, "errors": []},
        {"errors": None},
    ],
)
def test_classify_errors_field_is_application_error(payload: dict) -> None:
    """Any top-level 'errors' key should be classified as failure."""
    body = json.dumps(payload)

    outcome = classify_response(body)

    assert isinstance(outcome, ApplicationError)
    assert outcome.response_body == body


def test_classify_data_only_is_success() -> None:
    """JSON without 'errors' should be a success."""
    body = '{"data": {"ping": "pong"}}'

    outcome = classify_response(body)

    assert outcome == Success(response_body=body)


def test_classify_nested_errors_is_success() -> None:
    """Only a top-level 'errors' field signals failure."""
    assert isinstance(classify_response('{"data": {"errors": 1}}'), Success)


@pytest.mark.parametrize("body", ["", "<html>502</html>", "not json", '["errors"]'])
def test_classify_non_object_bodies_are_success(body: str) -> None:
    """Unparseable or non-object bodies carry no error field."""
    assert isinstance(classify_response(body), Success)


def test_format_failure_message_contains_details() -> None:
    """Alert text should carry timestamp, name, url and detail."""
    endpoint = EndpointSpec(name="A", url="https://x/1", body_template="{ping}")
    now = datetime(2024, 1, 15, 17, 30, 0, tzinfo=timezone.utc)

    message = format_failure_message(
        endpoint=endpoint,
        detail='{"errors":[{"message":"boom"}]}',
        now=now,
        tz=ZoneInfo("America/New_York"),
    )

    assert message.startswith("⚠️ GraphQL Endpoint Failed!")
    assert "Timestamp: 2024-01-15 12:30:00 EST" in message
    assert "Endpoint: A https://x/1" in message
    assert "boom" in message
