"""Unit tests for JSON literal rendering."""

from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from keen_query._internal.literals import (
    format_group,
    format_number,
    json_array,
    quote,
    to_filter_value,
)


class TestToFilterValue:
    """Tests for to_filter_value."""

    def test_int_unquoted(self) -> None:
        assert to_filter_value(458888) == "458888"

    def test_negative_int(self) -> None:
        assert to_filter_value(-3) == "-3"

    def test_float(self) -> None:
        assert to_filter_value(2.5) == "2.5"

    def test_integral_float(self) -> None:
        assert to_filter_value(3.0) == "3"

    def test_string_quoted(self) -> None:
        assert to_filter_value("458888") == '"458888"'

    def test_bool_before_int(self) -> None:
        assert to_filter_value(True) == "true"
        assert to_filter_value(False) == "false"

    def test_datetime(self) -> None:
        assert to_filter_value(datetime(2023, 1, 1, tzinfo=UTC)) == (
            '"2023-01-01T00:00:00+00:00"'
        )

    def test_list(self) -> None:
        assert to_filter_value([1, "a", True]) == '[1,"a",true]'

    def test_empty_list(self) -> None:
        assert to_filter_value([]) == "[]"

    def test_nested(self) -> None:
        assert to_filter_value([[1, 2], (3,)]) == "[[1,2],[3]]"

    def test_none_rejected(self) -> None:
        with pytest.raises(TypeError):
            to_filter_value(None)  # type: ignore[arg-type]

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            to_filter_value(math.inf)


class TestHelpers:
    def test_quote_plain(self) -> None:
        assert quote("group1") == '"group1"'

    def test_quote_escapes(self) -> None:
        assert quote('a"b\\c') == '"a\\"b\\\\c"'

    def test_quote_keeps_unicode(self) -> None:
        assert quote("café") == '"café"'

    def test_format_number_nan(self) -> None:
        with pytest.raises(ValueError):
            format_number(math.nan)

    def test_json_array(self) -> None:
        assert json_array(["1", '"a"']) == '[1,"a"]'

    def test_format_group(self) -> None:
        assert format_group(["g1", "g2"]) == '["g1","g2"]'

    def test_format_group_empty(self) -> None:
        assert format_group([]) == "[]"
