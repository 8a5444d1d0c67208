"""Per-call options threaded through every validator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .scheduler import CooperativeScheduler, NeverYieldScheduler

# "hard": stop at the first error.
# "soft": report the first error but keep walking so that transformations
#     still complete.
# "none": skip checks, only perform transformations.
ValidationMode = Literal["hard", "soft", "none"]

Transformation = Literal["none", "serialize", "deserialize"]

_VALIDATION_MODES: frozenset[str] = frozenset({"hard", "soft", "none"})


@dataclass(frozen=True)
class InternalValidationOptions:
    """Options for a single top-level validation call.

    This class is part of the internal implementation and is not considered
    a public API. A new instance is created for every top-level call and is
    never modified during the walk.

    Attributes:
        validation: How strictly to check values.
        transformation: Whether values are only checked, or also serialized
            or deserialized.
        scheduler: Scheduling context deciding when to suspend.
    """

    validation: ValidationMode = "hard"
    transformation: Transformation = "none"
    scheduler: CooperativeScheduler = field(default_factory=NeverYieldScheduler)

    def should_yield(self) -> bool:
        return self.scheduler.should_yield()

    async def yield_(self) -> None:
        await self.scheduler.yield_()


def _check_validation_mode(validation: str) -> None:
    """Raise ValueError for an unknown validation mode."""
    if validation not in _VALIDATION_MODES:
        raise ValueError(
            f"Unknown validation mode {validation!r}, "
            f"expected one of {sorted(_VALIDATION_MODES)}"
        )
