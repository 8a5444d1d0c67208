"""Cooperative scheduling for asynchronous validation.

Validation is single-threaded. "Asynchronous" only means that a validation
may hand control back to the event loop between chunks of work so that a
long validation does not starve other tasks. Suspension only ever happens
between chunks of a collection's item loop, never inside leaf validators.

There is no cancellation primitive: a validation runs to completion once
started. Callers that want to abandon one cancel the awaiting task.
"""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .options import InternalValidationOptions
    from .result import InternalValidationResult
    from .schema import Schema

# Maximum time, in seconds, a validation runs before should_yield() asks it
# to suspend.
DEFAULT_YIELD_INTERVAL = 0.033


async def _sleep_zero() -> None:
    await asyncio.sleep(0)


class CooperativeScheduler:
    """Decides when an asynchronous validation should hand back control.

    A fresh scheduler is created for every top-level asynchronous call. It
    asks to yield once ``yield_interval`` seconds have elapsed since it was
    created or last yielded.

    Args:
        yield_interval: Seconds of uninterrupted work after which
            :meth:`should_yield` returns True.
        clock: Monotonic clock returning seconds.
        suspend: Coroutine function used to suspend the current task. The
            default re-schedules the task on the running event loop.
    """

    def __init__(
        self,
        yield_interval: float = DEFAULT_YIELD_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        suspend: Callable[[], Awaitable[None]] = _sleep_zero,
    ) -> None:
        self._yield_interval = yield_interval
        self._clock = clock
        self._suspend = suspend
        self._last_yield = clock()
        self.yield_count = 0

    def should_yield(self) -> bool:
        return self._clock() - self._last_yield >= self._yield_interval

    async def yield_(self) -> None:
        await self._suspend()
        self.yield_count += 1
        self._last_yield = self._clock()


class NeverYieldScheduler(CooperativeScheduler):
    """Scheduler used by synchronous entry points; it never asks to yield."""

    def __init__(self) -> None:
        super().__init__(yield_interval=math.inf)

    def should_yield(self) -> bool:
        return False


def compute_chunk_size(threshold: float, item_cost: float) -> int:
    """Return how many items may be validated between two yield points.

    The size is chosen so that one chunk stays within ``threshold`` in
    estimated cost, but always covers at least one item.
    """
    return max(1, math.floor(threshold / item_cost))


def should_run_async(schema: Schema, threshold: float) -> bool:
    """Return True if ``schema`` is too expensive to validate inline."""
    return schema.estimated_validation_time_complexity > threshold


async def validate_child_async(
    schema: Schema,
    value: object,
    options: InternalValidationOptions,
    path: str,
    threshold: float,
) -> InternalValidationResult:
    """Validate a child value, inline if cheap or asynchronously otherwise."""
    if should_run_async(schema, threshold):
        return await schema._internal_validate_async(value, options, path)
    return schema._internal_validate(value, options, path)
