"""Query parameter types for keen_query.

All parameter types are immutable frozen dataclasses or string enums, so a
query built from them always renders to the same URL. Each type knows how
to render its own piece of the query string:

- Metric: the endpoint segment plus its required parameters
- RelativeTimeFrame / AbsoluteTimeFrame: the ``timeframe`` value
- Filter: one object of the ``filters`` array
- Interval / Operator: their lowercase names
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from keen_query._internal.date_utils import ensure_utc, to_rfc3339, window_ending_at
from keen_query._internal.literals import (
    FilterValue,
    format_number,
    quote,
    to_filter_value,
)
from keen_query._literal_types import AnalysisType, RelativeRange, RelativeUnit

# =============================================================================
# Enumerations
# =============================================================================


class Interval(StrEnum):
    """Bucketing granularity for time-series results."""

    MINUTELY = "minutely"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Operator(StrEnum):
    """Filter comparison and containment operators."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LTE = "lte"
    GTE = "gte"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    EXISTS = "exists"
    IN = "in"


# =============================================================================
# Metric
# =============================================================================

# Analyses that take no target_property
_NO_TARGET: frozenset[str] = frozenset({"count", "extraction"})


@dataclass(frozen=True)
class Metric:
    """The aggregation to run and the property it targets.

    Build instances with the classmethods rather than the constructor.
    A ``percentile`` metric without a finite percentile_value raises
    ValueError on construction.

    Example:
        ```python
        Metric.count()
        Metric.count_unique("user.id")
        Metric.percentile("latency", 99)
        ```
    """

    analysis: AnalysisType
    """Endpoint name under ``/queries/``."""

    target_property: str | None = None
    """Event property the analysis aggregates over."""

    percentile_value: float | None = None
    """Percentile to compute, only for ``percentile``."""

    def __post_init__(self) -> None:
        if self.analysis == "percentile":
            if self.percentile_value is None:
                raise ValueError("percentile analysis requires a percentile_value")
            format_number(self.percentile_value)

    @classmethod
    def sum(cls, target_property: str) -> Metric:
        return cls("sum", target_property)

    @classmethod
    def count(cls) -> Metric:
        return cls("count")

    @classmethod
    def count_unique(cls, target_property: str) -> Metric:
        return cls("count_unique", target_property)

    @classmethod
    def minimum(cls, target_property: str) -> Metric:
        return cls("minimum", target_property)

    @classmethod
    def maximum(cls, target_property: str) -> Metric:
        return cls("maximum", target_property)

    @classmethod
    def average(cls, target_property: str) -> Metric:
        return cls("average", target_property)

    @classmethod
    def select_unique(cls, target_property: str) -> Metric:
        return cls("select_unique", target_property)

    @classmethod
    def extraction(cls) -> Metric:
        return cls("extraction")

    @classmethod
    def percentile(cls, target_property: str, percentile: float) -> Metric:
        return cls("percentile", target_property, percentile)

    @classmethod
    def median(cls, target_property: str) -> Metric:
        return cls("median", target_property)

    @property
    def params(self) -> list[tuple[str, str]]:
        """Required query parameters for this analysis, in URL order."""
        params: list[tuple[str, str]] = []
        if self.analysis not in _NO_TARGET:
            params.append(("target_property", self.target_property or ""))
        if self.analysis == "percentile" and self.percentile_value is not None:
            params.append(("percentile", format_number(self.percentile_value)))
        return params

    def segment(self) -> str:
        """Render the endpoint segment of the URL.

        Every parameter is terminated with ``&`` so that the next parameter
        attaches directly.

        Returns:
            Segment like ``count?`` or ``count_unique?target_property=x&``.
        """
        return f"{self.analysis}?" + "".join(f"{k}={v}&" for k, v in self.params)


# =============================================================================
# Timeframes
# =============================================================================


@dataclass(frozen=True)
class RelativeTimeFrame:
    """A timeframe relative to now, such as ``this_2_days``.

    The descriptor is sent verbatim; it is not quoted or checked.
    """

    descriptor: str

    @classmethod
    def of(
        cls, period: RelativeRange, count: int, unit: RelativeUnit
    ) -> RelativeTimeFrame:
        """Build a ``{period}_{count}_{unit}`` descriptor.

        Args:
            period: "this" (includes the current unit) or "previous".
            count: Number of units. Must be positive.
            unit: Plural unit name, e.g. "days".

        Raises:
            ValueError: If count is not positive.

        Example:
            ```python
            RelativeTimeFrame.of("previous", 7, "days").descriptor
            # 'previous_7_days'
            ```
        """
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        return cls(f"{period}_{count}_{unit}")

    def render(self) -> str:
        return self.descriptor


@dataclass(frozen=True)
class AbsoluteTimeFrame:
    """A fixed window between two instants.

    Both bounds are normalized to UTC on construction; naive datetimes are
    taken to be UTC already.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", ensure_utc(self.start))
        object.__setattr__(self, "end", ensure_utc(self.end))

    @classmethod
    def last(
        cls, duration: timedelta, end: datetime | None = None
    ) -> AbsoluteTimeFrame:
        """Window of ``duration`` ending at ``end`` (default: now)."""
        start, stop = window_ending_at(duration, end)
        return cls(start, stop)

    def render(self) -> str:
        """Render as ``{"start":"<RFC3339>","end":"<RFC3339>"}``."""
        return (
            f'{{"start":{quote(to_rfc3339(self.start))},'
            f'"end":{quote(to_rfc3339(self.end))}}}'
        )


TimeFrame = RelativeTimeFrame | AbsoluteTimeFrame


def coerce_timeframe(timeframe: TimeFrame | str) -> TimeFrame:
    """Accept a bare string as a relative timeframe."""
    if isinstance(timeframe, str):
        return RelativeTimeFrame(timeframe)
    return timeframe


# =============================================================================
# Filter
# =============================================================================


def _freeze(value: FilterValue) -> FilterValue:
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class Filter:
    """A predicate restricting which events are aggregated.

    The value keeps its Python type so that it renders as the matching JSON
    literal: ``Filter.gt("id", 458888)`` sends ``458888`` while
    ``Filter.gt("id", "458888")`` sends ``"458888"``. Lists are stored as
    tuples.

    Raises:
        TypeError: If property_value cannot be rendered as a literal.
        ValueError: If operator is not a known operator name.
    """

    property_name: str
    operator: Operator
    property_value: FilterValue

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", Operator(self.operator))
        object.__setattr__(self, "property_value", _freeze(self.property_value))
        # Fail at construction rather than at url() time
        to_filter_value(self.property_value)

    @classmethod
    def eq(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.EQ, value)

    @classmethod
    def ne(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.NE, value)

    @classmethod
    def lt(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.LT, value)

    @classmethod
    def gt(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.GT, value)

    @classmethod
    def lte(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.LTE, value)

    @classmethod
    def gte(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.GTE, value)

    @classmethod
    def contains(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.CONTAINS, value)

    @classmethod
    def not_contains(cls, name: str, value: FilterValue) -> Filter:
        return cls(name, Operator.NOT_CONTAINS, value)

    @classmethod
    def exists(cls, name: str, value: FilterValue = True) -> Filter:
        return cls(name, Operator.EXISTS, value)

    @classmethod
    def isin(cls, name: str, value: FilterValue) -> Filter:
        """Match when the property equals any element of ``value``."""
        return cls(name, Operator.IN, value)

    def render(self) -> str:
        """Render as one JSON object of the ``filters`` array."""
        return (
            f'{{"property_name":{quote(self.property_name)},'
            f'"property_value":{to_filter_value(self.property_value)},'
            f'"operator":{quote(self.operator.value)}}}'
        )
