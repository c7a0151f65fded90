"""
Evaluation modules for modelComparator.

This module contains evaluation metrics and reporting utilities.
"""

from .metrics import METRICS, MetricSet, canonical_metric_name
from .reporter import ResultsReporter

__all__ = [
    "METRICS",
    "MetricSet",
    "ResultsReporter",
    "canonical_metric_name",
]
