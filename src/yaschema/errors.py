"""Error types used by yaschema.

Validation failures are never raised: they are returned as data (see
:mod:`yaschema.result`) and classified by :class:`ErrorKind`. The only
exception raised by the package is :class:`SchemaDefinitionError`, which
signals a programming error in how a schema was declared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a failed validation.

    Attributes:
        TYPE_MISMATCH: The value's run-time type does not match the schema kind.
        VALUE_MISMATCH: The value has the right type but is not an accepted
            value (for example a string outside of the allowed values).
        LENGTH_VIOLATION: A sequence is shorter than ``min_length`` or longer
            than ``max_length``.
        ELEMENT_VALIDATION_FAILURE: A contained value failed its own schema.
            The message is the element's message, already path-qualified.
        ALL_VARIANTS_FAILED: Neither variant of an upgraded schema accepted
            the value. The message is the legacy variant's message.
    """

    TYPE_MISMATCH = "type-mismatch"
    VALUE_MISMATCH = "value-mismatch"
    LENGTH_VIOLATION = "length-violation"
    ELEMENT_VALIDATION_FAILURE = "element-validation-failure"
    ALL_VARIANTS_FAILED = "all-variants-failed"


@dataclass
class _SchemaProblem:
    """Describes a single problem found in a schema declaration.

    This class is part of the internal implementation and is not considered
    a public API.

    Schema problems are collected by the schema factories and raised together
    as a :class:`SchemaDefinitionError`. Examples:
        - "min_length must be a non-negative integer, found -1"
        - "max_length (2) must not be less than min_length (3)"
        - "items must be a schema, found str"

    Attributes:
        message: Human-readable description of the problem.
    """

    message: str


class SchemaDefinitionError(ValueError):
    """Raised when a schema (or the engine configuration) is declared incorrectly.

    This is a caller bug rather than a validation failure, so it is raised
    eagerly from factories and configuration setters instead of being
    reported at validation time.

    Attributes:
        problems: Every problem detected in the declaration.
    """

    def __init__(self, problems: list[_SchemaProblem]) -> None:
        self.problems = problems
        super().__init__(
            f"Schema has problems: {'; '.join(p.message for p in problems)}"
        )


def _raise_if_problems(problems: list[_SchemaProblem]) -> None:
    """Raise :class:`SchemaDefinitionError` when ``problems`` is not empty."""
    if problems:
        raise SchemaDefinitionError(problems)
