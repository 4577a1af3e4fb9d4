"""Shared Literal type aliases for parameter validation.

These types are exported from the public API and can be used by
library consumers for their own type hints.

Example:
    from keen_query import RelativeTimeFrame, RelativeUnit

    def recent(unit: RelativeUnit) -> RelativeTimeFrame:
        return RelativeTimeFrame.of("this", 7, unit)
"""

from __future__ import annotations

from typing import Literal

# Query endpoints under /3.0/projects/{project}/queries/
AnalysisType = Literal[
    "sum",
    "count",
    "count_unique",
    "minimum",
    "maximum",
    "average",
    "select_unique",
    "extraction",
    "percentile",
    "median",
]

# "this" includes the current unit, "previous" only completed ones
RelativeRange = Literal["this", "previous"]

RelativeUnit = Literal["minutes", "hours", "days", "weeks", "months", "years"]

__all__ = ["AnalysisType", "RelativeRange", "RelativeUnit"]
