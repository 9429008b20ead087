"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal
from collections.abc import Callable

__all__ = ["make_stop_on_sigterm", "STOP_SIGNALS"]

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def make_stop_on_sigterm() -> Callable[[], bool]:
    """Create a stop flag raised by SIGTERM or SIGINT.

    The scheduler polls the returned callable between ticks and while
    waiting, so a tick already in flight completes before the loop exits.

    Returns:
        Callable that returns True once a termination signal was received.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal(sig: signal.Signals) -> None:
        if stop.is_set():
            logger.warning(f"{sig.name} received again, shutdown already in progress")
            return
        logger.info(f"{sig.name} received, stopping after the current tick...")
        stop.set()

    for sig in STOP_SIGNALS:
        loop.add_signal_handler(sig, handle_signal, sig)

    return stop.is_set
