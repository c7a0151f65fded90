"""
modelComparator v1.0

Compare binary classifier families on one tabular dataset with shared,
stratified resampling, per-family hyperparameter tuning and a held-out test
evaluation.
"""

__version__ = "1.0.0"

# Core imports
from .core.base import EstimatorKind, FinalMetrics, ModelFamily, ResultTable, TuningResult
from .core.exceptions import ModelComparatorError
from .core.splitter import make_folds, make_train_test_split
from .core.registry import ModelRegistry, build_default_registry
from .core.hyperparameter_tuner import HyperparameterTuner
from .core.selector import select_best
from .core.final_evaluator import FinalEvaluator, evaluate_final
from .core.aggregator import aggregate
from .core.worker_pool import WorkerPool
from .core.comparison_runner import ComparisonResult, ModelComparisonRunner, run_comparison

# Data handling
from .data.dataset import Dataset
from .data.loader import DataLoader
from .data.validator import DataValidator

# Preprocessing
from .preprocessing.normalizer import PreprocessingSpec

# Evaluation
from .evaluation.metrics import MetricSet
from .evaluation.reporter import ResultsReporter

# Configuration
from .utils.config import ConfigManager, PipelineConfig

__all__ = [
    # Core
    "EstimatorKind",
    "FinalMetrics",
    "ModelFamily",
    "ResultTable",
    "TuningResult",
    "ModelComparatorError",
    "make_folds",
    "make_train_test_split",
    "ModelRegistry",
    "build_default_registry",
    "HyperparameterTuner",
    "select_best",
    "FinalEvaluator",
    "evaluate_final",
    "aggregate",
    "WorkerPool",
    "ComparisonResult",
    "ModelComparisonRunner",
    "run_comparison",

    # Data
    "Dataset",
    "DataLoader",
    "DataValidator",

    # Preprocessing
    "PreprocessingSpec",

    # Evaluation
    "MetricSet",
    "ResultsReporter",

    # Configuration
    "ConfigManager",
    "PipelineConfig",
]
