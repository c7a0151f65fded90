"""
Argument parser for modelComparator.

Supports the ``run`` and ``report`` sub-commands. Options left unset on the
command line fall back to the configuration file, then to the defaults.
"""

import argparse
from typing import List, Optional, Sequence

from ..config.model_configs import MODEL_CONFIGS
from ..core.search_space import SEARCH_METHODS
from ..evaluation.metrics import METRICS


def str2bool(v):
    """Convert a string to a boolean."""
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')


def comma_separated_items(value: str) -> List[str]:
    """Parse a comma-separated string into a list."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def family_budgets(value: str) -> dict:
    """Parse 'XGBoost=30,LASSO=10' into a name -> budget mapping."""
    budgets = {}
    for item in comma_separated_items(value):
        name, sep, budget = item.partition('=')
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected NAME=BUDGET, got '{item}'")
        try:
            budgets[name.strip()] = int(budget)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Budget for '{name}' must be an integer, got '{budget}'")
    return budgets


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the CLI parser with run and report sub-commands."""
    parser = argparse.ArgumentParser(
        prog="model-compare",
        description="modelComparator - tune and compare classifier families on a binary outcome",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    run_p = subparsers.add_parser('run', help="Tune, select and evaluate every model family",
                                  formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    # Data
    run_p.add_argument('--data', dest='data_path', type=str, required=False, default=None,
                       help="CSV file with one row per record and a binary label column")
    run_p.add_argument('--label_column', type=str, required=False, default=None,
                       help="Name of the label column (after name cleaning)")
    run_p.add_argument('--positive_label', type=str, required=False, default=None,
                       help="Label value treated as the positive class")
    run_p.add_argument('--standardize_names', type=str2bool, required=False, default=None,
                       help="Convert column names to snake_case")
    run_p.add_argument('--missing_zero_columns', type=comma_separated_items, required=False, default=None,
                       help="Columns where 0 means not measured (comma separated)")

    # Resampling
    run_p.add_argument('--k', type=int, required=False, default=None,
                       help="Number of cross-validation folds")
    run_p.add_argument('--train_fraction', type=float, required=False, default=None,
                       help="Share of records in the training partition")
    run_p.add_argument('--seed', type=int, required=False, default=None,
                       help="Seed for folds, split, search and estimators")

    # Tuning
    run_p.add_argument('--models', type=comma_separated_items, required=False, default=None,
                       help=f"Families to compare (comma separated, from {', '.join(MODEL_CONFIGS)})")
    run_p.add_argument('--search_budget', type=int, required=False, default=None,
                       help="Candidates per family")
    run_p.add_argument('--family_budgets', type=family_budgets, required=False, default=None,
                       help="Per-family budgets, e.g. XGBoost=30,LASSO=10")
    run_p.add_argument('--search_method', type=str, required=False, default=None,
                       choices=list(SEARCH_METHODS),
                       help="Candidate sampling method")
    run_p.add_argument('--grid_levels', type=int, required=False, default=None,
                       help="Points per dimension for grid search")
    run_p.add_argument('--target_metric', type=str, required=False, default=None,
                       help=f"Metric used to select candidates ({', '.join(METRICS)})")
    run_p.add_argument('--metrics', type=comma_separated_items, required=False, default=None,
                       help="Metrics to report (comma separated)")
    run_p.add_argument('--threshold', type=float, required=False, default=None,
                       help="Probability cut-off for class predictions")

    # Execution and output
    run_p.add_argument('--n_workers', type=int, required=False, default=None,
                       help="Families tuned in parallel")
    run_p.add_argument('--candidate_n_jobs', type=int, required=False, default=None,
                       help="Candidates evaluated in parallel inside one family")
    run_p.add_argument('--output', dest='output_dir', type=str, required=False, default=None,
                       help="Result output directory")
    run_p.add_argument('--save_models', type=str2bool, required=False, default=None,
                       help="Dump fitted final models with joblib")
    run_p.add_argument('--log_level', type=str, required=False, default=None,
                       help="Logging level")
    run_p.add_argument('--config', type=str, required=False, default=None,
                       help="YAML or JSON configuration file")
    run_p.add_argument('--allow_partial', action='store_true',
                       help="Exit with status 0 even if some families failed")

    report_p = subparsers.add_parser('report', help="Print an exported comparison table",
                                     formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    report_p.add_argument('--results', type=str, required=True,
                          help="Exported results CSV, or the run output directory")
    report_p.add_argument('--metric', type=str, required=False, default=None,
                          help="Sort families by this metric")

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = create_argument_parser()
    return parser.parse_args(argv)
