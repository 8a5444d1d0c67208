"""Result types shared by the synchronous and asynchronous validators.

Every validator returns an :class:`InternalValidationResult`. Successful
plain validations return the shared :data:`NO_ERROR` instance so that the
common path does not allocate. Failed validations carry a zero-argument
``error`` callable: the message is only built when a caller reads it.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Final

from .errors import ErrorKind


class _Unchanged:
    """Type of the :data:`_UNCHANGED` marker."""

    def __repr__(self) -> str:
        return "<unchanged>"


# Marks a result whose value was not transformed by the validator.
_UNCHANGED: Final = _Unchanged()


@dataclass(frozen=True)
class InternalValidationResult:
    """Outcome of one validator call.

    This class is part of the internal implementation and is not considered
    a public API.

    Attributes:
        error: ``None`` when the value is valid, otherwise a thunk returning
            the path-qualified error message.
        error_kind: Classification of the failure, ``None`` when valid.
        error_path: Location of the failure, ``None`` when valid.
        transformed: The serialized or deserialized value when the validator
            transformed its input, otherwise ``_UNCHANGED``.
    """

    error: Callable[[], str] | None = None
    error_kind: ErrorKind | None = None
    error_path: str | None = None
    transformed: Any = field(default=_UNCHANGED, compare=False)

    def with_transformed(self, value: Any) -> InternalValidationResult:
        """Return a copy of this result carrying ``value`` as transformed value."""
        return replace(self, transformed=value)


NO_ERROR: Final = InternalValidationResult()


def make_error(
    kind: ErrorKind,
    path: str,
    message: Callable[[], str],
) -> InternalValidationResult:
    """Create an error result from a lazily evaluated ``message``."""
    return InternalValidationResult(error=message, error_kind=kind, error_path=path)


def make_transformed(value: Any) -> InternalValidationResult:
    """Create a successful result carrying a transformed ``value``."""
    return InternalValidationResult(transformed=value)


def transformed_value(result: InternalValidationResult, original: Any) -> Any:
    """Return the value produced by ``result``, or ``original`` if untransformed."""
    if result.transformed is _UNCHANGED:
        return original
    return result.transformed


@dataclass(frozen=True)
class ValidationResult:
    """Public outcome of a top-level validation call.

    At most one error is ever surfaced per call. The message is computed on
    first access of :attr:`error` and cached afterwards.

    Example:
        >>> result = string().validate(42)
        >>> result.ok
        False
        >>> result.error
        'Expected string, found number'
    """

    error_kind: ErrorKind | None = None
    error_path: str | None = None
    _error_thunk: Callable[[], str] | None = field(
        default=None, repr=False, compare=False
    )

    @functools.cached_property
    def error(self) -> str | None:
        """The error message, or ``None`` when the value is valid."""
        if self._error_thunk is None:
            return None
        return self._error_thunk()

    @property
    def ok(self) -> bool:
        """True if the value is valid."""
        return self._error_thunk is None

    @classmethod
    def _from_internal(cls, result: InternalValidationResult) -> ValidationResult:
        return cls(
            error_kind=result.error_kind,
            error_path=result.error_path,
            _error_thunk=result.error,
        )


@dataclass(frozen=True)
class SerDesResult(ValidationResult):
    """Public outcome of a serialization or deserialization call.

    Attributes:
        value: The transformed value. In ``"soft"`` and ``"none"`` validation
            modes it is produced even when an error was found, with the parts
            that could not be transformed left as they were.
    """

    value: Any = None

    @classmethod
    def _from_internal_with_value(
        cls, result: InternalValidationResult, original: Any
    ) -> SerDesResult:
        return cls(
            error_kind=result.error_kind,
            error_path=result.error_path,
            _error_thunk=result.error,
            value=transformed_value(result, original),
        )
