"""Helper functions for tests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from yaschema.scheduler import CooperativeScheduler


def _always_yield_scheduler() -> CooperativeScheduler:
    """Create a scheduler that asks to yield before every chunk.

    Returns:
        Scheduler whose ``yield_count`` reports how many times it suspended.
    """
    return CooperativeScheduler(yield_interval=0.0)


def _recording_suspend(calls: list[Any]) -> Callable[[], Awaitable[None]]:
    """Create a suspend coroutine function appending to ``calls`` when awaited."""

    async def suspend() -> None:
        calls.append(None)

    return suspend


def _count_deprecations(output: str) -> int:
    """Count deprecation warnings written to a log stream."""
    return output.count("[DEPRECATION]")
