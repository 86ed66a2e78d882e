"""Tests for TypedConverter."""

import enum
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from webquark.conversion import ConversionResult, ConversionStatus, TypedConverter
from webquark.kernel.exceptions import ConversionException


class Color(enum.Enum):
    RED = 1
    GREEN = 2


@pytest.fixture
def converter() -> TypedConverter:
    return TypedConverter()


class TestConvertTo:
    def test_string_passthrough(self, converter):
        assert converter.convert_to("  hello ", str) == "  hello "

    def test_int(self, converter):
        assert converter.convert_to("42", int) == 42
        assert converter.convert_to("-7", int) == -7

    def test_int_rejects_float_text(self, converter):
        assert converter.convert_to("4.2", int, 0) == 0

    def test_bool_is_case_insensitive(self, converter):
        assert converter.convert_to("TRUE", bool) is True
        assert converter.convert_to("false", bool) is False

    def test_bool_rejects_numbers(self, converter):
        assert converter.convert_to("1", bool, False) is False

    def test_enum_by_name_ignores_case(self, converter):
        assert converter.convert_to("green", Color) is Color.GREEN

    def test_enum_by_numeric_value(self, converter):
        assert converter.convert_to("1", Color) is Color.RED

    def test_enum_unknown_returns_default(self, converter):
        assert converter.convert_to("purple", Color, Color.RED) is Color.RED
        assert converter.convert_to("9", Color) is None

    def test_uuid(self, converter):
        value = uuid.uuid4()
        assert converter.convert_to(str(value), uuid.UUID) == value

    def test_datetime_accepts_zulu_suffix(self, converter):
        result = converter.convert_to("2024-03-01T10:30:00Z", datetime)
        assert result == datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)

    def test_date_uses_iso_parser(self, converter):
        assert converter.convert_to("2024-03-01", date) == date(2024, 3, 1)

    def test_fallback_constructor(self, converter):
        assert converter.convert_to("3.5", float) == 3.5
        assert converter.convert_to("1.10", Decimal) == Decimal("1.10")

    def test_invalid_decimal_returns_default(self, converter):
        assert converter.convert_to("abc", Decimal, Decimal(0)) == Decimal(0)

    def test_optional_target_is_unwrapped(self, converter):
        assert converter.convert_to("5", Optional[int]) == 5
        assert converter.convert_to("5", int | None) == 5

    def test_blank_input_returns_default(self, converter):
        assert converter.convert_to("", int, 3) == 3
        assert converter.convert_to("   ", int, 3) == 3
        assert converter.convert_to(None, int, 3) == 3


class TestTryConvert:
    def test_success(self, converter):
        assert converter.try_convert("12", int) == (12, True)

    def test_failure(self, converter):
        assert converter.try_convert("twelve", int) == (None, False)

    @pytest.mark.parametrize("target", [list, tuple, set, dict, bytes, list[int]])
    def test_container_targets_fail(self, converter, target):
        assert converter.try_convert("abc", target) == (None, False)
        assert converter.convert("abc", target).status is ConversionStatus.INVALID

    @pytest.mark.parametrize("target", [str, int, bool, float, uuid.UUID, datetime, date, Color])
    def test_empty_input_fails_for_every_type(self, converter, target):
        assert converter.try_convert("", target) == (None, False)


class TestConvert:
    def test_present(self, converter):
        result = converter.convert("12", int)
        assert result.status is ConversionStatus.PRESENT
        assert result.ok
        assert result.value == 12

    def test_absent_is_distinct_from_invalid(self, converter):
        assert converter.convert("", int).status is ConversionStatus.ABSENT
        assert converter.convert("x", int).status is ConversionStatus.INVALID

    def test_invalid_carries_error(self, converter):
        result = converter.convert("x", int)
        assert isinstance(result.error, ConversionException)
        assert result.error.code == "CONVERSION_FAILED"
        assert result.error.context["input"] == "x"

    def test_value_or(self):
        assert ConversionResult.present(3).value_or(0) == 3
        assert ConversionResult.absent().value_or(0) == 0


class TestConvertFrom:
    def test_none_is_empty(self, converter):
        assert converter.convert_from(None) == ""

    def test_datetime_is_iso(self, converter):
        value = datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)
        assert converter.convert_from(value) == "2024-03-01T10:30:00+00:00"
        assert converter.convert_to(converter.convert_from(value), datetime) == value

    def test_enum_uses_name(self, converter):
        assert converter.convert_from(Color.GREEN) == "GREEN"

    def test_plain_values(self, converter):
        assert converter.convert_from(7) == "7"
        assert converter.convert_from(True) == "True"
