"""Top-level entry points of the validation engine.

Each entry point builds a fresh :class:`InternalValidationOptions` for the
call and walks the schema graph from the root. The asynchronous variants
validate the root inline when it is cheap enough and otherwise run its
asynchronous validator, which may suspend between chunks of work.

Validation modes:

- ``"hard"``: stop at the first error.
- ``"soft"``: report the first error but keep walking so that
  serialization or deserialization still completes.
- ``"none"``: skip checks and only perform transformations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .config import get_async_time_complexity_threshold
from .options import (
    InternalValidationOptions,
    Transformation,
    ValidationMode,
    _check_validation_mode,
)
from .result import InternalValidationResult, SerDesResult, ValidationResult
from .scheduler import CooperativeScheduler, validate_child_async

if TYPE_CHECKING:
    from .schema import Schema


def _run(
    schema: Schema,
    value: Any,
    validation: ValidationMode,
    transformation: Transformation,
) -> InternalValidationResult:
    _check_validation_mode(validation)
    options = InternalValidationOptions(
        validation=validation, transformation=transformation
    )
    return schema._internal_validate(value, options, "")


async def _run_async(
    schema: Schema,
    value: Any,
    validation: ValidationMode,
    transformation: Transformation,
    scheduler: CooperativeScheduler | None,
) -> InternalValidationResult:
    _check_validation_mode(validation)
    options = InternalValidationOptions(
        validation=validation,
        transformation=transformation,
        scheduler=scheduler if scheduler is not None else CooperativeScheduler(),
    )
    return await validate_child_async(
        schema, value, options, "", get_async_time_complexity_threshold()
    )


def validate(
    schema: Schema,
    value: Any,
    *,
    validation: ValidationMode = "hard",
) -> ValidationResult:
    """Check ``value`` against ``schema`` without ever suspending.

    Args:
        schema: Root schema.
        value: Untrusted value, in its deserialized form.
        validation: Validation mode.

    Returns:
        A :class:`ValidationResult` describing at most one error.

    Raises:
        ValueError: If ``validation`` is not a known mode.
    """
    return ValidationResult._from_internal(_run(schema, value, validation, "none"))


async def validate_async(
    schema: Schema,
    value: Any,
    *,
    validation: ValidationMode = "hard",
    scheduler: CooperativeScheduler | None = None,
) -> ValidationResult:
    """Check ``value`` against ``schema``, yielding to the event loop as needed.

    Reports the same outcome as :func:`validate` for every schema and value.

    Args:
        schema: Root schema.
        value: Untrusted value, in its deserialized form.
        validation: Validation mode.
        scheduler: Scheduling context for this call. A new
            :class:`CooperativeScheduler` is used when omitted.

    Returns:
        A :class:`ValidationResult` describing at most one error.
    """
    result = await _run_async(schema, value, validation, "none", scheduler)
    return ValidationResult._from_internal(result)


def serialize(
    schema: Schema,
    value: Any,
    *,
    validation: ValidationMode = "hard",
) -> SerDesResult:
    """Validate ``value`` and convert it into its serialized form."""
    result = _run(schema, value, validation, "serialize")
    return SerDesResult._from_internal_with_value(result, value)


def deserialize(
    schema: Schema,
    value: Any,
    *,
    validation: ValidationMode = "hard",
) -> SerDesResult:
    """Validate a serialized ``value`` and convert it into its deserialized form."""
    result = _run(schema, value, validation, "deserialize")
    return SerDesResult._from_internal_with_value(result, value)


async def serialize_async(
    schema: Schema,
    value: Any,
    *,
    validation: ValidationMode = "hard",
    scheduler: CooperativeScheduler | None = None,
) -> SerDesResult:
    """Asynchronous counterpart of :func:`serialize`."""
    result = await _run_async(schema, value, validation, "serialize", scheduler)
    return SerDesResult._from_internal_with_value(result, value)


async def deserialize_async(
    schema: Schema,
    value: Any,
    *,
    validation: ValidationMode = "hard",
    scheduler: CooperativeScheduler | None = None,
) -> SerDesResult:
    """Asynchronous counterpart of :func:`deserialize`."""
    result = await _run_async(schema, value, validation, "deserialize", scheduler)
    return SerDesResult._from_internal_with_value(result, value)
