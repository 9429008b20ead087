"""Healthcheck validator for container orchestration."""

import logging

from health_pulse.adapters.driven.config.endpoints import load_endpoints
from health_pulse.adapters.driven.config.settings import load_settings
from health_pulse.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Run health check for container orchestration.

    Validates:
    - Environment variables produce valid settings.
    - The endpoints file exists and parses.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
        endpoints = load_endpoints(settings.endpoints_file_path)
    except Exception as exc:
        logger.error(f"Health pulse healthcheck FAILED: {exc}")
        return 1

    logger.info(f"Health pulse healthcheck OK ({len(endpoints)} endpoints)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
