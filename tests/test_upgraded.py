"""Tests for the upgraded (deprecation bridge) schema."""

from __future__ import annotations

from datetime import datetime
from io import StringIO

import pytest

from tests.helpers import _always_yield_scheduler, _count_deprecations
from yaschema import (
    UNDEFINED,
    ErrorKind,
    SchemaDefinitionError,
    array,
    config,
    date,
    number,
    string,
    upgraded,
)
from yaschema.upgraded import get_deprecation_warning_registry


def test_legacy_value_is_accepted_with_one_warning(warning_stream: StringIO) -> None:
    """A value only matching the old schema is accepted and warned about once."""
    schema = upgraded("userId", old=number(), new=string())

    first = schema.validate(42)
    second = schema.validate(42)

    assert first.ok
    assert second.ok
    output = warning_stream.getvalue()
    assert _count_deprecations(output) == 1
    assert "userId" in output
    assert output.startswith("WARNING: ")


def test_warning_is_logged_once_per_unique_name_across_values(
    warning_stream: StringIO,
) -> None:
    """Repeated legacy validations of different values log a single warning."""
    schema = upgraded("userId", old=number(), new=string())

    for value in range(20):
        assert schema.validate(value).ok

    assert _count_deprecations(warning_stream.getvalue()) == 1


def test_warning_is_shared_by_schemas_with_same_unique_name(
    warning_stream: StringIO,
) -> None:
    """The warning set is keyed by unique_name, not by schema instance."""
    upgraded("userId", old=number(), new=string()).validate(1)
    upgraded("userId", old=number(), new=string()).validate(2)
    upgraded("accountId", old=number(), new=string()).validate(3)

    assert _count_deprecations(warning_stream.getvalue()) == 2


def test_new_value_never_warns(warning_stream: StringIO) -> None:
    """Values accepted by the new schema should not trigger a warning."""
    schema = upgraded("userId", old=number(), new=string())

    assert schema.validate("abc").ok
    assert warning_stream.getvalue() == ""
    assert not get_deprecation_warning_registry().has_warned("userId")


def test_warning_mentions_deadline(warning_stream: StringIO) -> None:
    """The deadline should appear in the warning when provided."""
    schema = upgraded("userId", old=number(), new=string(), deadline="2026-12-31")

    schema.validate(42)

    assert (
        "[DEPRECATION] The schema for userId has been upgraded and legacy "
        "support will be removed after 2026-12-31."
    ) in warning_stream.getvalue()


def test_warning_without_deadline_says_soon(warning_stream: StringIO) -> None:
    """Without a deadline the warning says legacy support ends soon."""
    upgraded("userId", old=number(), new=string()).validate(42)

    assert "will be removed soon." in warning_stream.getvalue()


def test_undefined_value_does_not_warn(warning_stream: StringIO) -> None:
    """Absent values accepted by the old schema are not warned about."""
    schema = upgraded("userId", old=number().optional(), new=string())

    assert schema.validate(UNDEFINED).ok
    assert warning_stream.getvalue() == ""


def test_warnings_are_dropped_without_logger() -> None:
    """With no logger configured, warnings are silently dropped."""
    config.set_logger(None)
    schema = upgraded("userId", old=number(), new=string())

    assert schema.validate(42).ok
    assert get_deprecation_warning_registry().has_warned("userId")


def test_both_variants_failing_reports_old_error() -> None:
    """When neither schema accepts the value, the old schema's error is reported."""
    schema = upgraded("userId", old=number(), new=string())

    result = schema.validate(True)

    assert result.error_kind is ErrorKind.ALL_VARIANTS_FAILED
    assert result.error == "Expected number, found boolean"


def test_upgraded_inside_array_reports_item_path() -> None:
    """Errors of the old schema keep the path of the enclosing array."""
    schema = array(items=upgraded("tag", old=number(), new=string()))

    result = schema.validate(["a", 1, None])

    assert result.error_path == "[2]"
    assert result.error == "Expected number, found null @ [2]"


def test_upgraded_time_complexity_is_sum_of_variants() -> None:
    """Both variants may be checked, so their costs add up."""
    schema = upgraded("ids", old=array(items=number()), new=string())

    assert schema.estimated_validation_time_complexity == 101


def test_upgraded_uses_custom_ser_des_if_any_variant_does() -> None:
    """Custom ser/des propagates from either variant."""
    assert upgraded("when", old=number(), new=date()).uses_custom_ser_des
    assert not upgraded("name", old=number(), new=string()).uses_custom_ser_des


def test_upgraded_serializes_with_accepting_variant() -> None:
    """Transformations come from whichever variant accepted the value."""
    schema = upgraded("when", old=number(), new=date())
    moment = datetime(2024, 5, 6)

    assert schema.serialize(moment).value == moment.isoformat()
    assert schema.serialize(1700000000).value == 1700000000


@pytest.mark.parametrize(
    ("unique_name", "old", "new"),
    [
        ("", number(), string()),
        ("   ", number(), string()),
        ("userId", "number", string()),
        ("userId", number(), None),
    ],
)
def test_upgraded_invalid_definition_raises(
    unique_name: str, old: object, new: object
) -> None:
    """Malformed upgraded declarations raise SchemaDefinitionError."""
    with pytest.raises(SchemaDefinitionError):
        upgraded(unique_name, old=old, new=new)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_async_legacy_value_is_accepted_with_one_warning(
    warning_stream: StringIO,
) -> None:
    """The async path mirrors the sync path, including the single warning."""
    schema = upgraded("userId", old=number(), new=string())

    first = await schema.validate_async(42)
    second = await schema.validate_async(43)

    assert first.ok
    assert second.ok
    assert _count_deprecations(warning_stream.getvalue()) == 1


@pytest.mark.asyncio
async def test_async_upgraded_runs_expensive_variant_asynchronously(
    warning_stream: StringIO,
) -> None:
    """Each variant is run async only if its own cost exceeds the threshold."""
    config.set_async_time_complexity_threshold(10)
    schema = upgraded("ids", old=array(items=number()), new=string())
    scheduler = _always_yield_scheduler()

    result = await schema.validate_async([1, 2, 3], scheduler=scheduler)

    assert result.ok
    # only the old array variant (cost 100) suspends, once for its single chunk
    assert scheduler.yield_count == 1
    assert _count_deprecations(warning_stream.getvalue()) == 1


@pytest.mark.asyncio
async def test_async_both_variants_failing_reports_old_error() -> None:
    """The async path reports the old schema's error as well."""
    config.set_async_time_complexity_threshold(10)
    schema = upgraded("ids", old=array(items=number()), new=string())

    result = await schema.validate_async([1, "x"])

    assert result.error_kind is ErrorKind.ALL_VARIANTS_FAILED
    assert result.error == "Expected number, found string @ [1]"
