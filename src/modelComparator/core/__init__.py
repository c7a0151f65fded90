"""
Core functionality for modelComparator.

This module contains the resampling, tuning, selection and evaluation loop
together with the data types it passes between stages.
"""

from .base import (
    BaseModel,
    BasePreprocessor,
    CandidateResult,
    EstimatorKind,
    FinalMetrics,
    ModelFamily,
    ResultTable,
    TuningResult,
)
from .exceptions import (
    AllCandidatesFailedError,
    DataValidationError,
    DuplicateFamilyError,
    EstimatorFitError,
    InsufficientDataError,
    ModelComparatorError,
    NoViableCandidateError,
    RegistryFrozenError,
    TuningCancelledError,
    UnknownMetricError,
)
from .search_space import Choice, FeatureCount, IntRange, LogUniform, Uniform, sample_candidates
from .splitter import FoldAssignment, TrainTestSplit, make_folds, make_train_test_split
from .registry import ModelRegistry, build_default_registry
from .fitting import FittedCandidate, fit_on_rows, score_rows
from .hyperparameter_tuner import HyperparameterTuner
from .selector import select_best, select_best_params
from .final_evaluator import FinalEvaluator, evaluate_final
from .aggregator import aggregate
from .worker_pool import WorkerPool
from .comparison_runner import ComparisonResult, ModelComparisonRunner, run_comparison

__all__ = [
    "AllCandidatesFailedError",
    "BaseModel",
    "BasePreprocessor",
    "CandidateResult",
    "Choice",
    "ComparisonResult",
    "DataValidationError",
    "DuplicateFamilyError",
    "EstimatorFitError",
    "EstimatorKind",
    "FeatureCount",
    "FinalEvaluator",
    "FinalMetrics",
    "FittedCandidate",
    "FoldAssignment",
    "HyperparameterTuner",
    "InsufficientDataError",
    "IntRange",
    "LogUniform",
    "ModelComparatorError",
    "ModelComparisonRunner",
    "ModelFamily",
    "ModelRegistry",
    "NoViableCandidateError",
    "RegistryFrozenError",
    "ResultTable",
    "TrainTestSplit",
    "TuningCancelledError",
    "TuningResult",
    "Uniform",
    "UnknownMetricError",
    "aggregate",
    "build_default_registry",
    "evaluate_final",
    "fit_on_rows",
    "make_folds",
    "make_train_test_split",
    "run_comparison",
    "sample_candidates",
    "score_rows",
    "select_best",
    "select_best_params",
]
