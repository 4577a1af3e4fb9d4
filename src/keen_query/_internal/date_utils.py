"""Date utilities for absolute timeframes.

Keen expects absolute timeframe bounds as RFC3339 timestamps. Everything
here normalizes to UTC first so the rendered offset is always ``+00:00``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as a timezone-aware UTC datetime.

    Naive datetimes are assumed to already be in UTC. Aware datetimes in
    another zone are converted.

    Args:
        value: Datetime to normalize.

    Returns:
        Aware datetime with ``tzinfo=UTC``.

    Example:
        ```python
        ensure_utc(datetime(2023, 1, 1))
        # datetime(2023, 1, 1, tzinfo=UTC)
        ```
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_rfc3339(value: datetime) -> str:
    """Render a datetime as an RFC3339 UTC timestamp.

    Args:
        value: Naive (assumed UTC) or aware datetime.

    Returns:
        Timestamp like ``2023-01-01T00:00:00+00:00``. Microseconds are
        included only when non-zero.
    """
    return ensure_utc(value).isoformat()


def window_ending_at(
    duration: timedelta,
    end: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Compute a (start, end) window of ``duration`` ending at ``end``.

    Args:
        duration: Length of the window. Must be positive.
        end: Window end. Defaults to the current UTC time.

    Returns:
        Tuple of UTC datetimes ``(end - duration, end)``.

    Raises:
        ValueError: If duration is zero or negative.
    """
    if duration <= timedelta(0):
        raise ValueError("duration must be positive")
    stop = ensure_utc(end) if end is not None else datetime.now(UTC)
    return stop - duration, stop
