"""KeenQuery: fluent query builder, URL renderer, and executor.

A query is created by KeenClient.query(), configured with chained calls,
then rendered with url() or executed with data().

Example:
    ```python
    query = (
        client.query(Metric.count_unique("user.id"), "purchases", "this_14_days")
        .group_by("platform")
        .filter(Filter.gte("price", 10))
        .interval(Interval.DAILY)
    )
    query.url()
    # 'https://api.keen.io/3.0/projects/PROJ/queries/count_unique?'
    # 'target_property=user.id&api_key=KEY&event_collection=purchases&...'
    ```
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING

from keen_query._internal.literals import format_group, json_array
from keen_query.types import Filter, Interval, Metric, TimeFrame

if TYPE_CHECKING:
    import httpx

    from keen_query.client import KeenClient


class KeenQuery:
    """One Keen analysis request.

    Group-by names, filters and extra parameters keep their insertion order,
    which is the order they appear in the URL. Duplicates are kept.
    Interval and max_age hold a single value; setting them again replaces
    the previous one.

    No field is validated against the API's rules. Unsupported combinations
    come back as an error response from data().
    """

    def __init__(
        self,
        client: KeenClient,
        metric: Metric,
        collection: str,
        timeframe: TimeFrame,
    ) -> None:
        self._client = client
        self._metric = metric
        self._collection = collection
        self._timeframe = timeframe
        self._group_by: list[str] = []
        self._filters: list[Filter] = []
        self._interval: Interval | None = None
        self._max_age: int | None = None
        self._extra_params: list[tuple[str, str]] = []

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def client(self) -> KeenClient:
        return self._client

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def timeframe(self) -> TimeFrame:
        return self._timeframe

    @property
    def groups(self) -> tuple[str, ...]:
        """Group-by property names in insertion order."""
        return tuple(self._group_by)

    @property
    def filters(self) -> tuple[Filter, ...]:
        """Filters in insertion order."""
        return tuple(self._filters)

    @property
    def extra_params(self) -> tuple[tuple[str, str], ...]:
        """Extra (key, value) parameters in insertion order."""
        return tuple(self._extra_params)

    # =========================================================================
    # Configuration
    # =========================================================================

    def group_by(self, name: str) -> KeenQuery:
        """Add a group-by property."""
        self._group_by.append(name)
        return self

    def filter(self, f: Filter) -> KeenQuery:
        """Add a filter."""
        self._filters.append(f)
        return self

    def interval(self, interval: Interval | str) -> KeenQuery:
        """Bucket results by ``interval``, replacing any earlier interval.

        Raises:
            ValueError: If a string is not an interval name.
        """
        self._interval = Interval(interval)
        return self

    def max_age(self, seconds: int) -> KeenQuery:
        """Accept cached results up to ``seconds`` old.

        Raises:
            TypeError: If seconds is not an integer.
        """
        self._max_age = operator.index(seconds)
        return self

    def other(self, key: str, value: str) -> KeenQuery:
        """Append a raw query parameter the builder doesn't model.

        Key and value are sent verbatim, without escaping.
        """
        self._extra_params.append((key, value))
        return self

    # =========================================================================
    # Output
    # =========================================================================

    def url(self) -> str:
        """Render the full request URL.

        Parameter order is fixed: metric parameters, api_key,
        event_collection, group_by, timezone, timeframe, filters, then
        interval, max_age, and extra parameters when present. Values are
        not percent-encoded.

        Returns:
            The URL. Calling this repeatedly on an unchanged query returns
            identical strings.
        """
        api_key = self._client.credentials.api_key.get_secret_value()
        url = (
            f"{self._client.queries_url}{self._metric.segment()}"
            f"api_key={api_key}"
            f"&event_collection={self._collection}"
            f"&group_by={format_group(self._group_by)}"
            "&timezone=UTC"
            f"&timeframe={self._timeframe.render()}"
            f"&filters={json_array(f.render() for f in self._filters)}"
        )
        if self._interval is not None:
            url += f"&interval={self._interval.value}"
        if self._max_age is not None:
            url += f"&max_age={self._max_age}"
        for key, value in self._extra_params:
            url += f"&{key}={value}"
        return url

    def data(self) -> httpx.Response:
        """Execute the query with a GET request.

        Uses the client's timeout at the time of the call. The response is
        returned whatever its status code, with the body unread; the caller
        must read or close it.

        Returns:
            The streamed httpx.Response.

        Raises:
            KeenTransportError: DNS, connection, or timeout failure.
        """
        return self._client._get(self.url())

    def __repr__(self) -> str:
        return (
            f"KeenQuery(metric={self._metric!r}, collection={self._collection!r}, "
            f"timeframe={self._timeframe!r}, group_by={self._group_by!r}, "
            f"filters={len(self._filters)}, interval={self._interval!r})"
        )
