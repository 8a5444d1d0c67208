"""Upgraded schema: accepts either a legacy or a new version of a value.

The new schema is tried first. If it rejects the value, the old schema is
tried; when the old schema accepts it a deprecation warning is logged, once
per ``unique_name`` per process. When neither accepts the value, the old
schema's error is reported since the old schema is the fallback of record.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from .config import get_async_time_complexity_threshold, get_logger
from .errors import ErrorKind, _raise_if_problems, _SchemaProblem
from .options import InternalValidationOptions
from .result import InternalValidationResult
from .scheduler import validate_child_async
from .schema import Schema
from .type_utils import UNDEFINED


class DeprecationWarningRegistry:
    """Set of ``unique_name`` values that were already warned about.

    The registry only grows for the life of the process. :meth:`reset` exists
    for tests.
    """

    def __init__(self) -> None:
        self._warned: set[str] = set()
        self._lock = threading.RLock()

    def mark_warned(self, unique_name: str) -> bool:
        """Record ``unique_name``. Returns True if it was not recorded before."""
        with self._lock:
            if unique_name in self._warned:
                return False
            self._warned.add(unique_name)
            return True

    def has_warned(self, unique_name: str) -> bool:
        with self._lock:
            return unique_name in self._warned

    def reset(self) -> None:
        with self._lock:
            self._warned.clear()


_deprecation_warnings = DeprecationWarningRegistry()


def get_deprecation_warning_registry() -> DeprecationWarningRegistry:
    """Return the process-wide deprecation warning registry."""
    return _deprecation_warnings


@dataclass(frozen=True, kw_only=True, eq=False)
class UpgradedSchema(Schema):
    """Requires that either the old or the new schema be satisfied.

    Attributes:
        unique_name: Identifier used in, and to rate-limit, deprecation warnings.
        old_schema: Legacy schema, still accepted with a warning.
        new_schema: Current schema.
        deadline: Optional description of when legacy support ends.
    """

    unique_name: str
    old_schema: Schema
    new_schema: Schema
    deadline: str | None = None


def upgraded(
    unique_name: str,
    *,
    old: Schema,
    new: Schema,
    deadline: str | None = None,
    allow_null: bool = False,
    optional: bool = False,
) -> UpgradedSchema:
    """Create a schema accepting either ``old`` or ``new``.

    A warning is logged if ``new`` isn't satisfied but ``old`` is, once per
    ``unique_name`` per process.

    Args:
        unique_name: Identifier of this upgrade, included in the warning.
        old: Legacy schema.
        new: Current schema.
        deadline: When legacy support will be removed, for example "2026-12-31".
        allow_null: Also accept ``None``.
        optional: Also accept ``UNDEFINED``.

    Raises:
        SchemaDefinitionError: If ``unique_name`` is empty or a variant is not
            a schema.

    See Also:
        :func:`yaschema.config.set_logger`
    """
    problems: list[_SchemaProblem] = []
    if not isinstance(unique_name, str) or unique_name.strip() == "":
        problems.append(
            _SchemaProblem(
                f"unique_name must be a non-empty string, found {unique_name!r}"
            )
        )
    for name, variant in (("old", old), ("new", new)):
        if not isinstance(variant, Schema):
            problems.append(
                _SchemaProblem(
                    f"{name} must be a schema, found {type(variant).__name__}"
                )
            )
    _raise_if_problems(problems)

    return UpgradedSchema(
        schema_type="upgraded",
        estimated_validation_time_complexity=(
            old.estimated_validation_time_complexity
            + new.estimated_validation_time_complexity
        ),
        uses_custom_ser_des=old.uses_custom_ser_des or new.uses_custom_ser_des,
        allows_null=allow_null,
        is_optional=optional,
        validator=_validate_upgraded,
        async_validator=_validate_upgraded_async,
        unique_name=unique_name,
        old_schema=old,
        new_schema=new,
        deadline=deadline,
    )


# Helpers


def _warn_deprecated_once(schema: UpgradedSchema, value: Any) -> None:
    if value is UNDEFINED:
        return
    if not _deprecation_warnings.mark_warned(schema.unique_name):
        return

    logger = get_logger()
    if logger is None:
        return
    removal = f"after {schema.deadline}" if schema.deadline else "soon"
    logger.warning(
        "[DEPRECATION] The schema for %s has been upgraded and legacy support "
        "will be removed %s.",
        schema.unique_name,
        removal,
    )


def _resolve_old_result(
    schema: UpgradedSchema,
    value: Any,
    old_result: InternalValidationResult,
) -> InternalValidationResult:
    if old_result.error is None:
        _warn_deprecated_once(schema, value)
        return old_result

    return InternalValidationResult(
        error=old_result.error,
        error_kind=ErrorKind.ALL_VARIANTS_FAILED,
        error_path=old_result.error_path,
        transformed=old_result.transformed,
    )


def _validate_upgraded(
    schema: UpgradedSchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    new_result = schema.new_schema._internal_validate(value, options, path)
    if new_result.error is None:
        return new_result

    old_result = schema.old_schema._internal_validate(value, options, path)
    return _resolve_old_result(schema, value, old_result)


async def _validate_upgraded_async(
    schema: UpgradedSchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    threshold = get_async_time_complexity_threshold()

    # old is only evaluated if new fails, so the two never run concurrently
    new_result = await validate_child_async(
        schema.new_schema, value, options, path, threshold
    )
    if new_result.error is None:
        return new_result

    old_result = await validate_child_async(
        schema.old_schema, value, options, path, threshold
    )
    return _resolve_old_result(schema, value, old_result)
