"""
Result aggregation for modelComparator.
"""

from typing import Iterable

from .base import FinalMetrics, ResultTable
from .exceptions import DuplicateFamilyError


def aggregate(final_metrics: Iterable[FinalMetrics]) -> ResultTable:
    """Merge per-family test metrics into one table, keeping input order."""
    entries = []
    seen = set()
    for entry in final_metrics:
        if entry.family in seen:
            raise DuplicateFamilyError(f"Family '{entry.family}' appears more than once in the results")
        seen.add(entry.family)
        entries.append(entry)
    return ResultTable(tuple(entries))
