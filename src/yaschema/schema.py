"""Base schema type shared by every schema kind.

A schema is an immutable descriptor created by a factory function
(:func:`~yaschema.array.array`, :func:`~yaschema.leaves.string`, ...). Each
schema carries its own pair of validators as data: a synchronous one that
never suspends and an asynchronous one that may yield to the event loop
between chunks of work. The engine reaches them through
:meth:`Schema._internal_validate` and :meth:`Schema._internal_validate_async`,
which also apply the options common to every kind (``allow_null`` and
``optional``).

Schemas hold no per-validation state, so a single instance may be used by
any number of concurrent validations.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any, Literal, TypeVar

from . import validation as _operations
from .options import InternalValidationOptions, ValidationMode
from .result import NO_ERROR, InternalValidationResult, SerDesResult, ValidationResult
from .scheduler import CooperativeScheduler
from .type_utils import UNDEFINED

SchemaType = Literal["array", "upgraded", "string", "number", "date"]

Validator = Callable[..., InternalValidationResult]
AsyncValidator = Callable[..., Awaitable[InternalValidationResult]]

_SchemaT = TypeVar("_SchemaT", bound="Schema")


@dataclass(frozen=True, kw_only=True, eq=False)
class Schema:
    """Immutable description of the values a validator accepts.

    Attributes:
        schema_type: Tag identifying the schema kind.
        estimated_validation_time_complexity: Relative cost of validating
            one value. Composite schemas derive it from their children.
        uses_custom_ser_des: True if this schema or any descendant
            transforms values when serializing or deserializing.
        allows_null: True if ``None`` is accepted.
        is_optional: True if :data:`~yaschema.UNDEFINED` is accepted.
        validator: Synchronous validator, called as
            ``validator(schema, value, options, path)``.
        async_validator: Asynchronous counterpart of ``validator``.
    """

    schema_type: SchemaType
    estimated_validation_time_complexity: float
    uses_custom_ser_des: bool
    allows_null: bool = False
    is_optional: bool = False
    validator: Validator = field(repr=False)
    async_validator: AsyncValidator = field(repr=False)

    def allow_null(self: _SchemaT) -> _SchemaT:
        """Return a copy of this schema that also accepts ``None``."""
        return replace(self, allows_null=True)

    def optional(self: _SchemaT) -> _SchemaT:
        """Return a copy of this schema that also accepts ``UNDEFINED``."""
        return replace(self, is_optional=True)

    def _accepts_as_is(self, value: Any) -> bool:
        return (value is None and self.allows_null) or (
            value is UNDEFINED and self.is_optional
        )

    def _internal_validate(
        self,
        value: Any,
        options: InternalValidationOptions,
        path: str,
    ) -> InternalValidationResult:
        if self._accepts_as_is(value):
            return NO_ERROR
        return self.validator(self, value, options, path)

    async def _internal_validate_async(
        self,
        value: Any,
        options: InternalValidationOptions,
        path: str,
    ) -> InternalValidationResult:
        if self._accepts_as_is(value):
            return NO_ERROR
        return await self.async_validator(self, value, options, path)

    def validate(
        self, value: Any, *, validation: ValidationMode = "hard"
    ) -> ValidationResult:
        """Check ``value`` against this schema. See :func:`yaschema.validate`."""
        return _operations.validate(self, value, validation=validation)

    async def validate_async(
        self,
        value: Any,
        *,
        validation: ValidationMode = "hard",
        scheduler: CooperativeScheduler | None = None,
    ) -> ValidationResult:
        """Asynchronously check ``value``. See :func:`yaschema.validate_async`."""
        return await _operations.validate_async(
            self, value, validation=validation, scheduler=scheduler
        )

    def serialize(
        self, value: Any, *, validation: ValidationMode = "hard"
    ) -> SerDesResult:
        """Serialize ``value``. See :func:`yaschema.serialize`."""
        return _operations.serialize(self, value, validation=validation)

    def deserialize(
        self, value: Any, *, validation: ValidationMode = "hard"
    ) -> SerDesResult:
        """Deserialize ``value``. See :func:`yaschema.deserialize`."""
        return _operations.deserialize(self, value, validation=validation)

    async def serialize_async(
        self,
        value: Any,
        *,
        validation: ValidationMode = "hard",
        scheduler: CooperativeScheduler | None = None,
    ) -> SerDesResult:
        return await _operations.serialize_async(
            self, value, validation=validation, scheduler=scheduler
        )

    async def deserialize_async(
        self,
        value: Any,
        *,
        validation: ValidationMode = "hard",
        scheduler: CooperativeScheduler | None = None,
    ) -> SerDesResult:
        return await _operations.deserialize_async(
            self, value, validation=validation, scheduler=scheduler
        )


def _as_async(validator: Validator) -> AsyncValidator:
    """Wrap a synchronous validator for kinds that never need to suspend."""

    async def async_validator(
        schema: Schema,
        value: Any,
        options: InternalValidationOptions,
        path: str,
    ) -> InternalValidationResult:
        return validator(schema, value, options, path)

    return async_validator
