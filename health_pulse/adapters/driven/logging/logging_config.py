"""Console logging setup for the health pulse service."""

import logging
import os

__all__ = ["configure_logs", "LOG_FORMAT", "DATE_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"

_HANDLER_NAME = "health_pulse.console"


def configure_logs(level: str | None = None) -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level with a single console handler.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (health_pulse) at ``level``, falling back to the
      LOG_LEVEL env variable, then DEBUG.

    Calling it again only updates levels; the handler is installed once.

    Args:
        level: Level name for the application loggers.

    Raises:
        ValueError: If the level name is unknown.
    """
    app_level_name = (level or os.getenv("LOG_LEVEL") or "DEBUG").upper()
    app_level = logging.getLevelName(app_level_name)
    if not isinstance(app_level, int):
        raise ValueError(f"Unknown log level: {app_level_name}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    # Probe bodies are logged by the app; keep client internals quiet
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("health_pulse").setLevel(app_level)
