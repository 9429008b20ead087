"""Application entrypoint."""

import asyncio
import logging
from functools import partial

from health_pulse.adapters.driven.config.endpoints import load_endpoints
from health_pulse.adapters.driven.config.settings import load_settings
from health_pulse.adapters.driven.http.client import HttpClient
from health_pulse.adapters.driven.logging.logging_config import configure_logs
from health_pulse.adapters.driven.notify.slack import SlackNotifier
from health_pulse.adapters.driving.signals import make_stop_on_sigterm
from health_pulse.core.monitor_state import MonitorState
from health_pulse.core.pulse_cycle import run_pulse_cycle
from health_pulse.core.scheduler import start_main_loop
from health_pulse.ports.settings import SettingsPort

__all__ = ["main"]

logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the health pulse service.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Open the probe and Slack HTTP sessions.
    4. Run the pulse loop until SIGTERM/SIGINT.
    """
    configure_logs()
    logger.info("Starting health pulse service...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check PULSE_INTERVAL_SECONDS, REQUEST_TIMEOUT_SECONDS, "
            "ALERT_TIMEZONE and SLACK_API_URL.",
            exc,
        )
        return

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = SettingsPort(
        interval_sec=config.interval_sec,
        endpoints_file_path=config.endpoints_file_path,
        alert_channel=config.alert_channel,
        alert_timezone=config.alert_timezone,
        request_timeout_sec=config.request_timeout_sec,
    )

    # Restarting the process resets rotation to the first endpoint
    state = MonitorState()

    async with (
        HttpClient(timeout_sec=settings_port.request_timeout_sec) as http,
        SlackNotifier(api_url=config.slack_api_url) as notifier,
    ):
        tick = partial(
            run_pulse_cycle,
            settings=settings_port,
            state=state,
            load_endpoints_fn=partial(load_endpoints, settings_port.endpoints_file_path),
            request_fn=http.post_query,
            notifier=notifier,
        )

        try:
            await start_main_loop(
                settings=settings_port,
                stop_fn=make_stop_on_sigterm(),
                tick_fn=tick,
            )
        except Exception as e:
            logger.error(f"Unhandled exception in main loop: {e}", exc_info=True)

        logger.info("Health pulse stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutdown requested by user (Ctrl+C).")
