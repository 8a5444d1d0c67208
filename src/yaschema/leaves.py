"""Leaf schemas: strings, numbers and dates.

Leaf validators never suspend, so their asynchronous validator simply wraps
the synchronous one. In ``"none"`` validation mode, ``string`` and ``number``
accept anything; ``date`` still performs its transformation when it can.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from .errors import ErrorKind, _raise_if_problems, _SchemaProblem
from .options import InternalValidationOptions
from .path_utils import at_path
from .result import NO_ERROR, InternalValidationResult, make_error, make_transformed
from .schema import Schema, _as_async
from .type_utils import get_meaningful_typeof

# Relative cost of validating a single leaf value.
LEAF_TIME_COMPLEXITY = 1


def _type_mismatch(expected: str, value: Any, path: str) -> InternalValidationResult:
    return make_error(
        ErrorKind.TYPE_MISMATCH,
        path,
        lambda: f"Expected {expected}, found {get_meaningful_typeof(value)}{at_path(path)}",
    )


def _check_allowed_values(
    allowed_values: tuple[Any, ...],
    expected_type: type | tuple[type, ...],
    type_name: str,
) -> None:
    problems = [
        _SchemaProblem(
            f"allowed values must be of type {type_name}, found {value!r}"
        )
        for value in allowed_values
        if isinstance(value, bool) or not isinstance(value, expected_type)
    ]
    _raise_if_problems(problems)


# string


@dataclass(frozen=True, kw_only=True, eq=False)
class StringSchema(Schema):
    """Requires a string.

    Attributes:
        allowed_values: If not empty, the only accepted values.
        allows_empty_string: True if ``""`` is accepted when no allowed
            values are declared.
    """

    allowed_values: tuple[str, ...] = ()
    allows_empty_string: bool = False

    def allow_empty_string(self) -> StringSchema:
        """Return a copy of this schema that also accepts ``""``."""
        return replace(self, allows_empty_string=True)


def string(
    *allowed_values: str,
    allow_null: bool = False,
    optional: bool = False,
) -> StringSchema:
    """Create a schema requiring a non-empty string, or one of ``allowed_values``."""
    _check_allowed_values(allowed_values, str, "str")
    return StringSchema(
        schema_type="string",
        estimated_validation_time_complexity=LEAF_TIME_COMPLEXITY,
        uses_custom_ser_des=False,
        allows_null=allow_null,
        is_optional=optional,
        validator=_validate_string,
        async_validator=_as_async(_validate_string),
        allowed_values=allowed_values,
    )


def _validate_string(
    schema: StringSchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    if options.validation == "none":
        return NO_ERROR

    if not isinstance(value, str):
        return _type_mismatch("string", value, path)

    if schema.allowed_values:
        if value in schema.allowed_values:
            return NO_ERROR
        allowed = schema.allowed_values
        return make_error(
            ErrorKind.VALUE_MISMATCH,
            path,
            lambda: f"Expected {' or '.join(repr(v) for v in allowed)}, "
            f"found {value!r}{at_path(path)}",
        )

    if value == "" and not schema.allows_empty_string:
        return make_error(
            ErrorKind.VALUE_MISMATCH,
            path,
            lambda: f"Expected non-empty string, found ''{at_path(path)}",
        )

    return NO_ERROR


# number


@dataclass(frozen=True, kw_only=True, eq=False)
class NumberSchema(Schema):
    """Requires a finite ``int`` or ``float`` (``bool`` is rejected).

    Attributes:
        allowed_values: If not empty, the only accepted values.
    """

    allowed_values: tuple[int | float, ...] = ()


def number(
    *allowed_values: int | float,
    allow_null: bool = False,
    optional: bool = False,
) -> NumberSchema:
    """Create a schema requiring a finite number, or one of ``allowed_values``."""
    _check_allowed_values(allowed_values, (int, float), "number")
    return NumberSchema(
        schema_type="number",
        estimated_validation_time_complexity=LEAF_TIME_COMPLEXITY,
        uses_custom_ser_des=False,
        allows_null=allow_null,
        is_optional=optional,
        validator=_validate_number,
        async_validator=_as_async(_validate_number),
        allowed_values=allowed_values,
    )


def _validate_number(
    schema: NumberSchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    if options.validation == "none":
        return NO_ERROR

    # bool is a subclass of int but is not a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _type_mismatch("number", value, path)

    # ints are always finite and may be too large to convert to float
    if isinstance(value, float) and not math.isfinite(value):
        return make_error(
            ErrorKind.VALUE_MISMATCH,
            path,
            lambda: f"Expected finite number, found {value}{at_path(path)}",
        )

    if schema.allowed_values and value not in schema.allowed_values:
        allowed = schema.allowed_values
        return make_error(
            ErrorKind.VALUE_MISMATCH,
            path,
            lambda: f"Expected {' or '.join(str(v) for v in allowed)}, "
            f"found {value}{at_path(path)}",
        )

    return NO_ERROR


# date


@dataclass(frozen=True, kw_only=True, eq=False)
class DateSchema(Schema):
    """Requires a ``datetime``, serialized as an ISO-8601 string."""


def date(*, allow_null: bool = False, optional: bool = False) -> DateSchema:
    """Create a schema requiring a ``datetime``.

    Serializing produces an ISO-8601 string and deserializing parses one, so
    any composite containing a date schema needs deep serialization.
    """
    return DateSchema(
        schema_type="date",
        estimated_validation_time_complexity=LEAF_TIME_COMPLEXITY,
        uses_custom_ser_des=True,
        allows_null=allow_null,
        is_optional=optional,
        validator=_validate_date,
        async_validator=_as_async(_validate_date),
    )


def _validate_date(
    schema: DateSchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    skip_checks = options.validation == "none"

    if options.transformation == "deserialize":
        if not isinstance(value, str):
            return NO_ERROR if skip_checks else _type_mismatch("ISO date string", value, path)
        try:
            return make_transformed(_parse_iso_datetime(value))
        except ValueError:
            if skip_checks:
                return NO_ERROR
            return make_error(
                ErrorKind.VALUE_MISMATCH,
                path,
                lambda: f"Expected ISO date string, found {value!r}{at_path(path)}",
            )

    if not isinstance(value, datetime):
        return NO_ERROR if skip_checks else _type_mismatch("Date", value, path)

    if options.transformation == "serialize":
        return make_transformed(value.isoformat())

    return NO_ERROR


def _parse_iso_datetime(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
