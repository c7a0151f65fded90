"""
Default configuration for modelComparator.

This module contains the default configuration settings.
"""

DEFAULT_METRICS = ["roc_auc", "accuracy", "sensitivity", "specificity"]

DEFAULT_CONFIG = {
    # Data configuration
    "data": {
        "label_column": "diabetes",
        "positive_label": "pos",
        "standardize_names": True,
        "missing_zero_columns": [],
    },

    # Resampling configuration
    "resampling": {
        "k": 5,
        "train_fraction": 0.8,
        "seed": 123,
    },

    # Tuning configuration
    "tuning": {
        "search_budget": 20,
        "search_method": "random",
        "grid_levels": 3,
        "target_metric": "roc_auc",
        "metrics": DEFAULT_METRICS,
        "threshold": 0.5,
    },

    # Parallelism
    "execution": {
        "n_workers": 4,
        "candidate_n_jobs": 1,
    },

    # Output configuration
    "output": {
        "directory": "./results",
        "save_models": False,
    },

    # Logging configuration
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s",
        "file": "run.log",
    },
}
