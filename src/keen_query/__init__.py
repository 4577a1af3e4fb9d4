"""
keen_query - Python client for the Keen IO analytics query API.

Build a query with a metric, event collection and timeframe, add group-by
properties, filters and an interval, then render it with ``url()`` or run
it with ``data()``.
"""

from keen_query._literal_types import AnalysisType, RelativeRange, RelativeUnit
from keen_query.client import KeenClient
from keen_query.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    ConfigError,
    KeenQueryError,
    KeenTransportError,
)
from keen_query.query import KeenQuery
from keen_query.types import (
    AbsoluteTimeFrame,
    Filter,
    Interval,
    Metric,
    Operator,
    RelativeTimeFrame,
    TimeFrame,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "KeenClient",
    "KeenQuery",
    # Query parameters
    "Metric",
    "Filter",
    "Operator",
    "Interval",
    "TimeFrame",
    "RelativeTimeFrame",
    "AbsoluteTimeFrame",
    # Type aliases
    "AnalysisType",
    "RelativeRange",
    "RelativeUnit",
    # Exceptions
    "KeenQueryError",
    "KeenTransportError",
    "ConfigError",
    "AccountNotFoundError",
    "AccountExistsError",
]
