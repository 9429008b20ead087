"""Tests for the rotation index."""

import threading

import pytest

from health_pulse.core.monitor_state import MonitorState, next_index

__all__ = []


def test_monitor_state_starts_at_zero() -> None:
    """A fresh state should point at the first endpoint."""
    assert MonitorState().current_index() == 0


def test_monitor_state_rejects_negative_start() -> None:
    """Negative start indexes are invalid."""
    with pytest.raises(ValueError):
        MonitorState(start_index=-1)


@pytest.mark.parametrize("total", [1, 2, 3, 7])
def test_advance_wraps_from_last_index(total: int) -> None:
    """Advancing from N-1 should wrap to 0."""
    state = MonitorState(start_index=total - 1)

    assert state.advance(total) == 0
    assert state.current_index() == 0


@pytest.mark.parametrize("total", [1, 2, 5])
def test_n_advances_return_to_start(total: int) -> None:
    """N advances over N endpoints should visit each index once and come back."""
    state = MonitorState()
    visited = []

    for _ in range(total):
        visited.append(state.current_index())
        state.advance(total)

    assert sorted(visited) == list(range(total))
    assert state.current_index() == 0


def test_advance_with_empty_set_resets_to_zero() -> None:
    """An empty endpoint set keeps the index at 0."""
    state = MonitorState(start_index=3)

    assert state.advance(0) == 0


def test_advance_after_set_shrank_resets_to_zero() -> None:
    """An index beyond a shrunken set should come back to 0."""
    state = MonitorState(start_index=5)

    assert state.advance(2) == 0


def test_next_index_increments_inside_range() -> None:
    """next_index should simply increment before the last index."""
    assert next_index(0, 3) == 1
    assert next_index(1, 3) == 2
    assert next_index(2, 3) == 0


def test_advance_is_atomic_across_threads() -> None:
    """Concurrent advances should never lose an increment."""
    total = 1_000_003
    state = MonitorState()
    per_thread = 500

    def worker() -> None:
        for _ in range(per_thread):
            state.advance(total)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert state.current_index() == 8 * per_thread
