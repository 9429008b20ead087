"""Fixed-interval loop that drives the pulse cycle."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from health_pulse.ports.settings import SettingsPort

__all__ = ["start_main_loop", "get_now_time", "next_deadline"]

logger = logging.getLogger(__name__)

STOP_POLL_SEC = 1.0


def get_now_time() -> float:
    """Get current monotonic time in seconds.

    Uses event loop's monotonic clock for accurate scheduling
    without wall-clock drift.

    Returns:
        Current time in seconds (monotonic).
    """
    return asyncio.get_running_loop().time()


def next_deadline(previous: float, period: float, now: float) -> float:
    """Return the first tick time after ``previous`` that is not in the past.

    Ticks missed while a slow cycle was running are dropped, not replayed.
    """
    deadline = previous + period
    if deadline > now or period <= 0:
        return deadline
    missed = int((now - deadline) // period) + 1
    return deadline + missed * period


async def start_main_loop(
    settings: SettingsPort,
    stop_fn: Callable[[], bool],
    tick_fn: Callable[[], Awaitable[object]],
) -> None:
    """Run the scheduling loop.

    Periodically:
    1. Await one pulse tick to completion (ticks never overlap).
    2. Sleep until the next deadline on the monotonic clock.
    3. Repeat until stop_fn() returns True.

    Args:
        settings: Runtime configuration (interval).
        stop_fn: Callable that returns True when loop should exit.
        tick_fn: Async function running one pulse cycle.

    Notes:
        - The first tick fires immediately.
        - An exception escaping a tick is logged; the next tick still runs.
        - stop_fn() is polled at least every STOP_POLL_SEC while waiting, so a
          long interval does not delay shutdown.
    """
    next_tick: float = get_now_time()

    while not stop_fn():
        try:
            await tick_fn()
        except asyncio.CancelledError:
            logger.info("Shutdown requested (tick cancelled).")
            raise
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error in pulse tick: {e}", exc_info=True)

        next_tick = next_deadline(next_tick, settings.interval_sec, get_now_time())

        while not stop_fn():
            remaining = next_tick - get_now_time()
            if remaining <= 0:
                break
            await asyncio.sleep(min(remaining, STOP_POLL_SEC))

    logger.info("Scheduler stopped.")
