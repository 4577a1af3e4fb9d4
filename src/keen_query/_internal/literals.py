"""JSON literal rendering for query string parameters.

Keen takes ``group_by``, ``filters`` and absolute ``timeframe`` as JSON
embedded directly in the query string. Numbers must stay unquoted so the
API compares them numerically, strings are double-quoted.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from datetime import datetime

from keen_query._internal.date_utils import to_rfc3339

FilterValue = (
    bool | int | float | str | datetime | list["FilterValue"] | tuple["FilterValue", ...]
)


def quote(text: str) -> str:
    """Render a string as a JSON string literal.

    Quotes and backslashes are escaped; non-ASCII characters pass through.

    Examples:
        >>> quote("group1")
        '"group1"'
        >>> quote('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    return json.dumps(text, ensure_ascii=False)


def format_number(value: int | float) -> str:
    """Render a number as a JSON number literal.

    Integral floats drop the fractional part (``90.0`` -> ``90``).

    Raises:
        ValueError: If value is NaN or infinite.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot render non-finite number: {value!r}")
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def json_array(items: Iterable[str]) -> str:
    """Join already-rendered literals into a JSON array."""
    return "[" + ",".join(items) + "]"


def to_filter_value(value: FilterValue) -> str:
    """Render a filter value as a JSON literal.

    Args:
        value: bool, int, float, str, datetime, or a list/tuple of those.

    Returns:
        Literal text: numbers unquoted, strings and datetimes quoted,
        booleans as ``true``/``false``, sequences as arrays.

    Raises:
        TypeError: If value has an unsupported type.
        ValueError: If value is a non-finite float.

    Examples:
        >>> to_filter_value(458888)
        '458888'
        >>> to_filter_value("458888")
        '"458888"'
        >>> to_filter_value([1, "a"])
        '[1,"a"]'
    """
    # bool is a subclass of int and must be matched first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return format_number(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, datetime):
        return quote(to_rfc3339(value))
    if isinstance(value, list | tuple):
        return json_array(to_filter_value(item) for item in value)
    raise TypeError(
        f"Unsupported filter value type: {type(value).__name__}. "
        "Expected bool, int, float, str, datetime, or a list of those."
    )


def format_group(names: Iterable[str]) -> str:
    """Render group-by property names as a JSON array of strings.

    Examples:
        >>> format_group(["g1", "g2"])
        '["g1","g2"]'
        >>> format_group([])
        '[]'
    """
    return json_array(quote(name) for name in names)
