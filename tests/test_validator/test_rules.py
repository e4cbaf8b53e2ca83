"""Tests for shared validation primitives."""

from __future__ import annotations

import math

import pytest

from workbench.validator.models import ValidationSeverity
from workbench.validator.rules import (
    JSON_ERRORS,
    as_text,
    check_config_wildvalue,
    check_datapoint_name,
    check_instance_id,
    check_instance_name,
    check_wildvalue,
    find_duplicates,
    is_missing,
    json_type_name,
    load_json,
    parse_float,
    strip_text,
    truncate,
)


class TestParseFloat:
    def test_integer(self) -> None:
        assert parse_float("42") == 42.0

    def test_leading_whitespace_and_sign(self) -> None:
        assert parse_float("  -3.5") == -3.5

    def test_numeric_prefix_wins(self) -> None:
        assert parse_float("42ms") == 42.0

    def test_exponent_and_bare_fraction(self) -> None:
        assert parse_float("1e3") == 1000.0
        assert parse_float(".5") == 0.5

    def test_infinity(self) -> None:
        assert parse_float("Infinity") == math.inf
        assert parse_float("-Infinity") == -math.inf

    def test_not_a_number(self) -> None:
        assert parse_float("abc") is None
        assert parse_float("") is None
        assert parse_float("NaN") is None


class TestInstanceId:
    def test_valid(self) -> None:
        assert check_instance_id("abc-123", 1) == []

    def test_required(self) -> None:
        issues = check_instance_id("  ", 3)
        assert len(issues) == 1
        assert issues[0].message == "Instance ID is required"
        assert issues[0].line_number == 3

    def test_length_boundary(self) -> None:
        assert check_instance_id("a" * 1024, 1) == []
        issues = check_instance_id("a" * 1025, 1)
        assert len(issues) == 1
        assert issues[0].severity == ValidationSeverity.error
        assert issues[0].field == "id"

    def test_invalid_characters(self) -> None:
        for bad in ("a b", "a=b", "a:b", "a\\b", "a#b", "a\tb"):
            issues = check_instance_id(bad, 1)
            assert [i.field for i in issues] == ["id"], bad


class TestWildvalues:
    def test_strict_wildvalue_rejects_equals(self) -> None:
        issues = check_wildvalue("a=b", 1)
        assert len(issues) == 1
        assert issues[0].field == "wildvalue"

    def test_config_wildvalue_allows_equals(self) -> None:
        assert check_config_wildvalue("a=b", 1) == []

    def test_config_wildvalue_rejects_colon(self) -> None:
        issues = check_config_wildvalue("host:1", 1)
        assert len(issues) == 1
        assert issues[0].severity == ValidationSeverity.error

    def test_wildvalue_too_long(self) -> None:
        issues = check_wildvalue("w" * 1025, 1)
        assert len(issues) == 1
        assert "maximum length" in issues[0].message


class TestNames:
    def test_long_instance_name_is_warning(self) -> None:
        assert check_instance_name("n" * 255, 1) == []
        issues = check_instance_name("n" * 256, 1)
        assert issues[0].severity == ValidationSeverity.warning

    def test_datapoint_name(self) -> None:
        assert check_datapoint_name("cpu.user-time_1", 1) == []
        issues = check_datapoint_name("cpu time", 1)
        assert issues[0].severity == ValidationSeverity.warning
        assert issues[0].field == "name"

    def test_datapoint_name_trailing_newline_rejected(self) -> None:
        assert len(check_datapoint_name("cpu\n", 1)) == 1


class TestHelpers:
    def test_find_duplicates(self) -> None:
        assert find_duplicates(["a", "b", "a", "a"]) == {2, 3}

    def test_json_type_name(self) -> None:
        assert json_type_name(None) == "null"
        assert json_type_name(True) == "boolean"
        assert json_type_name(1.5) == "number"
        assert json_type_name([]) == "array"
        assert json_type_name({}) == "object"

    def test_as_text(self) -> None:
        assert as_text(None) is None
        assert as_text("x") == "x"
        assert as_text(5) == "5"
        assert as_text({"a": 1}) == '{"a":1}'

    def test_truncate(self) -> None:
        assert truncate("x" * 150) == "x" * 100
        assert truncate("x" * 150, ellipsis=True) == "x" * 100 + "..."
        assert truncate("short", ellipsis=True) == "short"


class TestJsonLoading:
    def test_plain_document(self) -> None:
        assert load_json(' {"a": [1, 2.5, null]} ') == {"a": [1, 2.5, None]}

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_rejected(self, literal: str) -> None:
        with pytest.raises(ValueError):
            load_json(f'{{"cpu": {literal}}}')

    def test_huge_integer_literal_rejected(self) -> None:
        with pytest.raises(JSON_ERRORS):
            load_json("[" + "1" * 5000 + "]")

    def test_deep_nesting_rejected(self) -> None:
        with pytest.raises(JSON_ERRORS):
            load_json("[" * 100000 + "]" * 100000)

    def test_byte_order_mark_ignored(self) -> None:
        assert load_json("\ufeff[1]") == [1]

    def test_strip_text(self) -> None:
        assert strip_text("\ufeff  a b \n") == "a b"
        assert strip_text(" \ufeff") == ""

    def test_is_missing(self) -> None:
        assert is_missing(None)
        assert is_missing("")
        assert is_missing(0)
        assert is_missing(False)
        assert not is_missing([])
        assert not is_missing({})
        assert not is_missing("x")
