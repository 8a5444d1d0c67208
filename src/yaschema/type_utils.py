"""Type descriptions used when formatting error messages."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Final


class _Undefined:
    """Type of the :data:`UNDEFINED` sentinel."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


# Marks an absent value, for example a missing field. Only schemas declared
# with ``optional()`` accept it.
UNDEFINED: Final = _Undefined()


def get_meaningful_typeof(value: Any) -> str:
    """Return a short, user-facing description of the run-time type of ``value``.

    ``None``, :data:`UNDEFINED`, sequences and mappings get the names used
    in error messages ("null", "undefined", "array", "object") instead of the
    bare Python class name.

    Example:
        >>> get_meaningful_typeof([1, 2])
        'array'
        >>> get_meaningful_typeof(True)
        'boolean'
    """
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    # bool must be checked before int since bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, datetime):
        return "Date"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
