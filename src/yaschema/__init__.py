"""Top-level package for yaschema.

This package provides composable, immutable schemas used to validate
untrusted values and to serialize or deserialize them. Every schema has a
synchronous validator and an asynchronous one that periodically yields to
the event loop so that validating large values does not block other tasks.
"""

from __future__ import annotations

from .array import ArraySchema, array
from .config import (
    get_async_time_complexity_threshold,
    get_logger,
    set_async_time_complexity_threshold,
    set_logger,
)
from .errors import ErrorKind, SchemaDefinitionError
from .leaves import DateSchema, NumberSchema, StringSchema, date, number, string
from .result import SerDesResult, ValidationResult
from .scheduler import CooperativeScheduler
from .schema import Schema
from .type_utils import UNDEFINED
from .upgraded import UpgradedSchema, upgraded
from .validation import (
    deserialize,
    deserialize_async,
    serialize,
    serialize_async,
    validate,
    validate_async,
)

__all__ = [
    "UNDEFINED",
    "ArraySchema",
    "CooperativeScheduler",
    "DateSchema",
    "ErrorKind",
    "NumberSchema",
    "Schema",
    "SchemaDefinitionError",
    "SerDesResult",
    "StringSchema",
    "UpgradedSchema",
    "ValidationResult",
    "array",
    "date",
    "deserialize",
    "deserialize_async",
    "get_async_time_complexity_threshold",
    "get_logger",
    "number",
    "serialize",
    "serialize_async",
    "set_async_time_complexity_threshold",
    "set_logger",
    "string",
    "upgraded",
    "validate",
    "validate_async",
]
