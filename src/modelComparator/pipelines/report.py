"""
Report pipeline for modelComparator.

Re-reads an exported comparison and prints it.
"""

import argparse
import json
from pathlib import Path

from ..evaluation.metrics import MetricSet, canonical_metric_name
from ..evaluation.reporter import RESULTS_JSON, ResultsReporter
from ..utils.logger import get_logger


def handle_report(args: argparse.Namespace) -> int:
    """Handle the report command."""
    logger = get_logger("ReportPipeline")
    reporter = ResultsReporter()

    table = reporter.load_results(args.results)
    logger.info(f"Loaded {table['family'].nunique()} families from {args.results}")

    metric = getattr(args, 'metric', None)
    if metric:
        metric = canonical_metric_name(metric)
        if metric not in set(table['metric']):
            raise ValueError(f"Metric '{metric}' not in results; available: {sorted(set(table['metric']))}")
        scores = table[table['metric'] == metric].set_index('family')['value']
        order = scores.sort_values(ascending=not MetricSet.greater_is_better(metric)).index.tolist()
        order += [f for f in dict.fromkeys(table['family']) if f not in order]
        table = table.set_index('family').loc[order].reset_index()

    # Failures are recorded in the JSON summary written next to the CSV
    results_path = Path(args.results)
    summary_path = (results_path if results_path.is_dir() else results_path.parent) / RESULTS_JSON
    failures = {}
    if summary_path.exists():
        with open(summary_path, 'r', encoding='utf-8') as f:
            failures = json.load(f).get('failures', {})

    print(reporter.format_report(table, failures))
    return 0
