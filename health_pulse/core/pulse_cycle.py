"""One pulse tick: pick an endpoint, probe it, alert on failure, rotate."""

import logging
import os
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from health_pulse.core.classify import (
    build_query_payload,
    classify_response,
    format_failure_message,
)
from health_pulse.core.monitor_state import MonitorState
from health_pulse.ports.endpoints import EndpointSpec
from health_pulse.ports.errors import ConfigError, NotifyError, RequestTransportError
from health_pulse.ports.http import HttpReply, ProbeRequest
from health_pulse.ports.notifier import NotifierPort
from health_pulse.ports.probe import ProbeOutcome, Success, TransportError
from health_pulse.ports.settings import SettingsPort

__all__ = ["run_pulse_cycle", "resolve_auth_token", "utc_now"]

logger = logging.getLogger(__name__)

FIRST_FAILING_HTTP_CODE = 400


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def resolve_auth_token(endpoint: EndpointSpec, environ: Mapping[str, str]) -> str | None:
    """Look up the bearer token an endpoint refers to.

    Args:
        endpoint: Endpoint whose ``auth_key_name`` names an env variable.
        environ: Environment mapping to read from.

    Returns:
        The token, or None when the endpoint has no key or the variable is
        unset (the probe then goes out unauthenticated).
    """
    key = endpoint.auth_key_name
    if not key:
        return None

    token = environ.get(key)
    if not token:
        logger.warning(
            f"auth_key '{key}' specified for {endpoint.name} but environment "
            "variable is not set; sending unauthenticated request"
        )
        return None

    logger.debug(f"Using authentication for {endpoint.name} with key: {key}")
    return token


async def _probe(
    endpoint: EndpointSpec,
    request_fn: Callable[[ProbeRequest], Awaitable[HttpReply]],
    environ: Mapping[str, str],
) -> ProbeOutcome:
    """Send the query to one endpoint and classify what came back."""
    request = ProbeRequest(
        url=endpoint.url,
        payload=build_query_payload(endpoint.body_template),
        auth_token=resolve_auth_token(endpoint, environ),
    )
    logger.debug(f"Query body for {endpoint.name}: {request.payload}")

    try:
        reply = await request_fn(request)
    except RequestTransportError as e:
        return TransportError(error_detail=str(e))

    if reply.status >= FIRST_FAILING_HTTP_CODE:
        logger.warning(f"{endpoint.url} answered HTTP {reply.status}")
    return classify_response(reply.body)


async def _send_alert(notifier: NotifierPort | None, channel: str, message: str) -> None:
    """Dispatch an alert; delivery problems are logged, never raised."""
    if notifier is None:
        logger.warning("No notifier configured, alert not sent")
        return

    logger.info(f"Sending alert to {channel}")
    try:
        await notifier.notify(channel, message)
    except NotifyError as e:
        logger.error(f"Failed to send alert: {e}")
        return
    logger.info("Alert sent successfully")


async def run_pulse_cycle(
    settings: SettingsPort,
    state: MonitorState,
    load_endpoints_fn: Callable[[], list[EndpointSpec]],
    request_fn: Callable[[ProbeRequest], Awaitable[HttpReply]],
    notifier: NotifierPort | None = None,
    environ: Mapping[str, str] | None = None,
    now_fn: Callable[[], datetime] = utc_now,
) -> ProbeOutcome | None:
    """Run one tick of the monitor.

    Steps:
    1. Reload the endpoint set; abort the tick (state untouched) on error.
    2. Probe the endpoint at the current rotation index, if it exists.
    3. Alert through the notifier when the probe fails.
    4. Advance the rotation index, whatever the outcome.

    Args:
        settings: Runtime settings (alert channel and timezone).
        state: Rotation index shared across ticks.
        load_endpoints_fn: Returns the current endpoint set.
        request_fn: Sends one probe and returns the reply.
        notifier: Alert sink; None disables alerting.
        environ: Environment for auth tokens (defaults to ``os.environ``).
        now_fn: Clock used for alert timestamps.

    Returns:
        The probe outcome, or None if the tick was abandoned or skipped.
    """
    try:
        endpoints = load_endpoints_fn()
    except ConfigError as e:
        logger.error(f"Skipping tick, endpoints could not be loaded: {e}")
        return None

    environ = os.environ if environ is None else environ
    total = len(endpoints)
    index = state.current_index()
    outcome: ProbeOutcome | None = None

    # Rotation moves on even when the probe or the alert raises
    try:
        if index < total:
            endpoint = endpoints[index]
            logger.info(f"Querying endpoint {index}: {endpoint.name} {endpoint.url}")
            outcome = await _probe(endpoint, request_fn, environ)

            if isinstance(outcome, Success):
                logger.info(f"✓ Successfully queried endpoint: {endpoint.url}")
                logger.debug(f"Response: {outcome.response_body}")
            else:
                logger.error(f"✗ Probe failed for endpoint {endpoint.url}: {outcome.detail}")
                message = format_failure_message(
                    endpoint=endpoint,
                    detail=outcome.detail,
                    now=now_fn(),
                    tz=ZoneInfo(settings.alert_timezone),
                )
                await _send_alert(notifier, settings.alert_channel, message)
        else:
            logger.warning(f"No endpoint at index {index} (set has {total}), skipping probe")
    finally:
        new_index = state.advance(total)
        logger.debug(f"Next endpoint index: {new_index}")

    return outcome
