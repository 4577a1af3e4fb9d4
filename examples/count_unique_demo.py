"""Demonstration of building and running a Keen query.

Reads credentials from KEEN_PROJECT_ID / KEEN_READ_KEY or
~/.keen/config.toml, prints the query URL, then fetches the result.
"""

from datetime import timedelta

from keen_query import AbsoluteTimeFrame, Filter, Interval, KeenClient, Metric

with KeenClient.from_config(timeout=30) as client:
    query = client.query(
        Metric.count_unique("metric1"),
        "collection_name",
        AbsoluteTimeFrame.last(timedelta(days=2)),
    )
    query.group_by("group1").group_by("group2")
    query.filter(Filter.gt("id", 458888)).filter(Filter.lte("id", 460000))
    query.interval(Interval.MONTHLY)

    print(f"url is: {query.url()}")

    response = query.data()
    try:
        print(f"status is: {response.status_code}")
        print(f"data is: {response.read().decode()}")
    finally:
        response.close()
