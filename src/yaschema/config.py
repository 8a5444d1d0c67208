"""Process-wide configuration for yaschema.

Two values are configurable:

- the async time-complexity threshold, which decides when a child schema
  is validated asynchronously and how large the chunks of a collection's
  asynchronous item loop are;
- the logger that receives deprecation warnings.

Both are stored at module level and guarded by a lock so that they can be
changed from any thread.
"""

from __future__ import annotations

import logging
import threading

from .errors import _raise_if_problems, _SchemaProblem

DEFAULT_ASYNC_TIME_COMPLEXITY_THRESHOLD = 500.0

_LIBRARY_LOGGER_NAME = "yaschema"

# Library loggers should not emit anything unless the application configures
# handlers.
logging.getLogger(_LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())

_async_time_complexity_threshold: float = DEFAULT_ASYNC_TIME_COMPLEXITY_THRESHOLD
_logger: logging.Logger | None = logging.getLogger(_LIBRARY_LOGGER_NAME)
_config_lock = threading.RLock()


def get_async_time_complexity_threshold() -> float:
    """Return the current async time-complexity threshold."""
    with _config_lock:
        return _async_time_complexity_threshold


def set_async_time_complexity_threshold(threshold: float) -> None:
    """Set the async time-complexity threshold.

    Args:
        threshold: Positive relative cost. Children whose estimated cost
            exceeds it are validated asynchronously.

    Raises:
        SchemaDefinitionError: If ``threshold`` is not a positive number.
    """
    global _async_time_complexity_threshold

    problems: list[_SchemaProblem] = []
    if (
        isinstance(threshold, bool)
        or not isinstance(threshold, (int, float))
        or not threshold > 0
    ):
        problems.append(
            _SchemaProblem(
                f"async time-complexity threshold must be a positive number, "
                f"found {threshold!r}"
            )
        )
    _raise_if_problems(problems)

    with _config_lock:
        _async_time_complexity_threshold = float(threshold)
    logging.getLogger(_LIBRARY_LOGGER_NAME).debug(
        "async time-complexity threshold set to %s", threshold
    )


def reset_async_time_complexity_threshold() -> None:
    """Restore the default async time-complexity threshold."""
    global _async_time_complexity_threshold

    with _config_lock:
        _async_time_complexity_threshold = DEFAULT_ASYNC_TIME_COMPLEXITY_THRESHOLD


def get_logger() -> logging.Logger | None:
    """Return the logger receiving warnings, or ``None`` if warnings are dropped."""
    with _config_lock:
        return _logger


def set_logger(logger: logging.Logger | None) -> None:
    """Set the logger receiving warnings.

    Args:
        logger: Logger to use, or ``None`` to drop warnings silently.
    """
    global _logger

    with _config_lock:
        _logger = logger


def reset_logger() -> None:
    """Restore the default ``yaschema`` library logger."""
    set_logger(logging.getLogger(_LIBRARY_LOGGER_NAME))
