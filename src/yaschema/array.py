"""Array schema: requires a list (or tuple), optionally with typed items.

Validation goes through the same steps on both the synchronous and the
asynchronous path:

1. the value must be a list or a tuple;
2. its length must be within ``min_length`` and ``max_length``;
3. each item is validated against ``items`` at path ``<path>[index]``.

Only one error is ever reported. Validation stops at the first error unless
the mode is ``"soft"`` and the items need serialization or deserialization,
in which case the walk continues so that every item is transformed, and the
first error detected (bounds before items, then items in order) is kept.

Because validating very long arrays can be expensive, ``max_entries_to_validate``
limits item validation to the first entries. It is ignored when the items
need serialization or deserialization, since every item must be transformed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .config import get_async_time_complexity_threshold
from .errors import ErrorKind, _raise_if_problems, _SchemaProblem
from .options import InternalValidationOptions
from .path_utils import append_path_index, at_path
from .result import (
    NO_ERROR,
    InternalValidationResult,
    make_error,
    transformed_value,
)
from .scheduler import compute_chunk_size, should_run_async
from .schema import Schema
from .type_utils import get_meaningful_typeof

# Assumed number of items when no bound is declared, for cost estimation.
ESTIMATED_AVG_ARRAY_LENGTH = 100


@dataclass(frozen=True, kw_only=True, eq=False)
class ArraySchema(Schema):
    """Requires an array.

    Attributes:
        items: Schema every item must satisfy, or ``None`` to accept any items.
        min_length: Minimum number of items, ``None`` meaning 0.
        max_length: Maximum number of items, ``None`` meaning unbounded.
        max_entries_to_validate: If set, only the first entries are validated.
    """

    items: Schema | None = None
    min_length: int | None = None
    max_length: int | None = None
    max_entries_to_validate: int | None = None


def _check_bound(name: str, bound: Any, problems: list[_SchemaProblem]) -> None:
    if bound is None:
        return
    if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
        problems.append(
            _SchemaProblem(f"{name} must be a non-negative integer, found {bound!r}")
        )


def array(
    *,
    items: Schema | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    max_entries_to_validate: int | None = None,
    allow_null: bool = False,
    optional: bool = False,
) -> ArraySchema:
    """Create a schema requiring an array.

    Args:
        items: Schema every item must satisfy. Items are not checked if omitted.
        min_length: Minimum number of items.
        max_length: Maximum number of items.
        max_entries_to_validate: Only validate the first entries. Ignored when
            ``items`` needs serialization or deserialization.
        allow_null: Also accept ``None``.
        optional: Also accept ``UNDEFINED``.

    Raises:
        SchemaDefinitionError: If the options are inconsistent.

    Example:
        >>> schema = array(items=string(), min_length=2, max_length=4)
        >>> schema.validate(["a", "b", "c"]).ok
        True
    """
    problems: list[_SchemaProblem] = []
    if items is not None and not isinstance(items, Schema):
        problems.append(
            _SchemaProblem(
                f"items must be a schema, found {type(items).__name__}"
            )
        )
    _check_bound("min_length", min_length, problems)
    _check_bound("max_length", max_length, problems)
    _check_bound("max_entries_to_validate", max_entries_to_validate, problems)
    if (
        not problems
        and min_length is not None
        and max_length is not None
        and max_length < min_length
    ):
        problems.append(
            _SchemaProblem(
                f"max_length ({max_length}) must not be less than "
                f"min_length ({min_length})"
            )
        )
    _raise_if_problems(problems)

    needs_deep_ser_des = items.uses_custom_ser_des if items is not None else False
    item_cost = items.estimated_validation_time_complexity if items is not None else 1
    representative_length = max_length if needs_deep_ser_des else max_entries_to_validate
    if representative_length is None:
        representative_length = ESTIMATED_AVG_ARRAY_LENGTH

    return ArraySchema(
        schema_type="array",
        estimated_validation_time_complexity=item_cost * representative_length,
        uses_custom_ser_des=needs_deep_ser_des,
        allows_null=allow_null,
        is_optional=optional,
        validator=_validate_array,
        async_validator=_validate_array_async,
        items=items,
        min_length=min_length,
        max_length=max_length,
        max_entries_to_validate=max_entries_to_validate,
    )


# Helpers


class _ArrayWalk:
    """Per-call state of an array validation: the first error and transformed items."""

    def __init__(
        self,
        schema: ArraySchema,
        value: Sequence[Any],
        options: InternalValidationOptions,
        path: str,
    ) -> None:
        self.schema = schema
        self.value = value
        self.path = path
        self.needs_deep_ser_des = schema.uses_custom_ser_des
        self.should_stop_on_first_error = (
            options.validation == "hard" or not self.needs_deep_ser_des
        )
        self.error_result: InternalValidationResult | None = None
        self.transformed_items: list[Any] | None = (
            []
            if self.needs_deep_ser_des and options.transformation != "none"
            else None
        )
        self.check_bounds = options.validation != "none"

    @property
    def num_items_to_validate(self) -> int:
        """Number of leading items to validate; the rest are accepted as is."""
        limit = self.schema.max_entries_to_validate
        if self.needs_deep_ser_des or limit is None:
            return len(self.value)
        return min(len(self.value), limit)

    def record_bounds(self) -> bool:
        """Check the length bounds. Returns True if the walk should stop."""
        if not self.check_bounds:
            return False

        length = len(self.value)
        path = self.path
        min_length = self.schema.min_length or 0
        max_length = self.schema.max_length

        if length < min_length:
            self.error_result = make_error(
                ErrorKind.LENGTH_VIOLATION,
                path,
                lambda: f"Expected an array with at least {min_length} element(s), "
                f"found an array with {length} element(s){at_path(path)}",
            )
        elif max_length is not None and length > max_length:
            self.error_result = make_error(
                ErrorKind.LENGTH_VIOLATION,
                path,
                lambda: f"Expected an array with at most {max_length} element(s), "
                f"found an array with {length} element(s){at_path(path)}",
            )

        return self.error_result is not None and self.should_stop_on_first_error

    def record_item(self, item: Any, result: InternalValidationResult) -> bool:
        """Record the result for one item. Returns True if the walk should stop."""
        if self.transformed_items is not None:
            self.transformed_items.append(transformed_value(result, item))

        if self.error_result is None and result.error is not None:
            self.error_result = InternalValidationResult(
                error=result.error,
                error_kind=ErrorKind.ELEMENT_VALIDATION_FAILURE,
                error_path=result.error_path,
            )
            return self.should_stop_on_first_error

        return False

    def first_error(self) -> InternalValidationResult:
        """Return the recorded error when the walk stops early, without transformed items."""
        if self.error_result is None:
            raise RuntimeError("array walk stopped without an error")
        return self.error_result

    def finish(self) -> InternalValidationResult:
        result = self.error_result if self.error_result is not None else NO_ERROR
        if self.transformed_items is not None:
            return result.with_transformed(self.transformed_items)
        return result


def _check_type(value: Any, path: str) -> InternalValidationResult | None:
    if isinstance(value, (list, tuple)):
        return None
    return make_error(
        ErrorKind.TYPE_MISMATCH,
        path,
        lambda: f"Expected array, found {get_meaningful_typeof(value)}{at_path(path)}",
    )


def _validate_array(
    schema: ArraySchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    type_error = _check_type(value, path)
    if type_error is not None:
        return type_error

    if not schema.uses_custom_ser_des and options.validation == "none":
        return NO_ERROR

    walk = _ArrayWalk(schema, value, options, path)
    if walk.record_bounds():
        return walk.first_error()

    items = schema.items
    if items is None:
        return walk.finish()

    for index in range(walk.num_items_to_validate):
        item = value[index]
        result = items._internal_validate(item, options, append_path_index(path, index))
        if walk.record_item(item, result):
            return walk.first_error()

    return walk.finish()


async def _validate_array_async(
    schema: ArraySchema,
    value: Any,
    options: InternalValidationOptions,
    path: str,
) -> InternalValidationResult:
    type_error = _check_type(value, path)
    if type_error is not None:
        return type_error

    if not schema.uses_custom_ser_des and options.validation == "none":
        return NO_ERROR

    walk = _ArrayWalk(schema, value, options, path)
    if walk.record_bounds():
        return walk.first_error()

    items = schema.items
    if items is None:
        return walk.finish()

    threshold = get_async_time_complexity_threshold()
    chunk_size = compute_chunk_size(
        threshold, items.estimated_validation_time_complexity
    )
    run_items_async = should_run_async(items, threshold)
    num_items = walk.num_items_to_validate

    for chunk_start in range(0, num_items, chunk_size):
        if options.should_yield():
            await options.yield_()

        for index in range(chunk_start, min(chunk_start + chunk_size, num_items)):
            item = value[index]
            item_path = append_path_index(path, index)
            if run_items_async:
                result = await items._internal_validate_async(item, options, item_path)
            else:
                result = items._internal_validate(item, options, item_path)
            if walk.record_item(item, result):
                return walk.first_error()

    return walk.finish()
