"""
Comparison runner for modelComparator.

Drives the whole comparison: resampling is computed once, every model family is
tuned, selected and finally evaluated as one task on the worker pool, and the
per-family results are merged into a ResultTable in registry order.
"""

import threading
import time
from concurrent.futures import CancelledError
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .aggregator import aggregate
from .base import CandidateResult, FinalMetrics, ModelFamily, ResultTable, TuningResult
from .exceptions import TuningCancelledError
from .final_evaluator import FinalEvaluator
from .fitting import FittedCandidate
from .hyperparameter_tuner import HyperparameterTuner, check_cancelled
from .registry import ModelRegistry
from .selector import select_best
from .splitter import FoldAssignment, TrainTestSplit, make_folds, make_train_test_split
from .worker_pool import WorkerPool
from ..evaluation.metrics import MetricSet, canonical_metric_name
from ..preprocessing.normalizer import PreprocessingSpec
from ..utils.helpers import format_time
from ..utils.logger import get_logger


@dataclass
class FamilyOutcome:
    """Everything one family task produces."""
    tuning: TuningResult
    best: CandidateResult
    final: FinalMetrics
    predictions: np.ndarray
    fitted: FittedCandidate


@dataclass
class ComparisonResult:
    """Outcome of one comparison run."""
    table: ResultTable
    tuning_results: Dict[str, TuningResult] = field(default_factory=dict)
    best_candidates: Dict[str, CandidateResult] = field(default_factory=dict)
    predictions: Optional[pd.DataFrame] = None
    fitted_models: Dict[str, FittedCandidate] = field(default_factory=dict)
    failures: Dict[str, BaseException] = field(default_factory=dict)
    target_metric: str = "roc_auc"

    @property
    def is_complete(self) -> bool:
        return not self.failures

    def failure_messages(self) -> Dict[str, str]:
        return {name: f"{type(error).__name__}: {error}" for name, error in self.failures.items()}


class ModelComparisonRunner:
    """Tune, select and evaluate every registered model family."""

    def __init__(
        self,
        config,
        registry: ModelRegistry,
        pool: Optional[WorkerPool] = None,
        preprocessing: Optional[PreprocessingSpec] = None
    ):
        """
        Args:
            config: PipelineConfig
            registry: Families to compare; frozen when the run starts
            pool: Worker pool to dispatch families on (task names are the
                family names, so one pool serves one run); by default one is
                created for the run and shut down at its end
            preprocessing: Shared recipe, default normalize + one-hot
        """
        self.config = config
        self.registry = registry
        self.preprocessing = preprocessing or PreprocessingSpec()
        self.logger = get_logger("ModelComparisonRunner")

        self.target_metric = canonical_metric_name(config.target_metric)
        names = list(config.metrics)
        if self.target_metric not in [canonical_metric_name(n) for n in names]:
            names.append(self.target_metric)
        self.metric_set = MetricSet(names, threshold=config.threshold)
        self.greater_is_better = MetricSet.greater_is_better(self.target_metric)

        self.tuner = HyperparameterTuner(
            seed=config.seed,
            search_method=config.search_method,
            grid_levels=config.grid_levels,
            n_jobs=config.candidate_n_jobs,
        )
        self.final_evaluator = FinalEvaluator(seed=config.seed)

        self._pool = pool
        self._pending_cancel = set()
        self._lock = threading.Lock()

    def cancel(self, name: str) -> bool:
        """
        Cancel one family without affecting its siblings.

        Returns:
            True if the family had not finished
        """
        if name not in self.registry:
            raise KeyError(f"Unknown model family '{name}'")
        with self._lock:
            pool = self._pool
            if pool is None or name not in pool.futures():
                self._pending_cancel.add(name)
                return True
        return pool.cancel(name)

    def run(self, dataset) -> ComparisonResult:
        """
        Run the comparison on a dataset.

        Raises:
            InsufficientDataError: If a label class is too small to stratify
        """
        start = time.time()
        self.registry.freeze()
        families = self.registry.list_families()
        self.logger.info(
            f"Comparing {len(families)} families on {len(dataset)} records | "
            f"k={self.config.k} | train_fraction={self.config.train_fraction} | seed={self.config.seed} | "
            f"target={self.target_metric}"
        )

        folds = make_folds(dataset, k=self.config.k, seed=self.config.seed)
        split = make_train_test_split(dataset, train_fraction=self.config.train_fraction, seed=self.config.seed)
        self.logger.info(f"Train/test split: {len(split.train)}/{len(split.test)} records")

        outcomes: Dict[str, FamilyOutcome] = {}
        failures: Dict[str, BaseException] = {}
        submitted = []

        owns_pool = self._pool is None
        with self._lock:
            if owns_pool:
                self._pool = WorkerPool(max_workers=self.config.n_workers)
            pool = self._pool
            for family in families:
                if family.name in self._pending_cancel:
                    failures[family.name] = TuningCancelledError(f"Tuning of '{family.name}' was cancelled")
                    self.logger.warning(f"{family.name} | cancelled before it started")
                    continue
                pool.submit(family.name, self._run_family, family, dataset, folds, split)
                submitted.append(family.name)
            self._pending_cancel = set()

        try:
            for name, future in pool.as_completed(submitted):
                try:
                    outcomes[name] = future.result()
                except CancelledError:
                    failures[name] = TuningCancelledError(f"Tuning of '{name}' was cancelled")
                    self.logger.warning(f"{name} | cancelled before it started")
                except Exception as exc:
                    failures[name] = exc
                    self.logger.error(f"{name} | failed: {type(exc).__name__}: {exc}")
        finally:
            if owns_pool:
                with self._lock:
                    self._pool = None
                pool.shutdown()

        result = self._assemble(families, outcomes, failures, dataset, split)
        self.logger.info(
            f"Comparison finished in {format_time(time.time() - start)} | "
            f"{len(result.table)} succeeded | {len(failures)} failed"
        )
        return result

    def _run_family(
        self,
        family: ModelFamily,
        dataset,
        folds: FoldAssignment,
        split: TrainTestSplit,
        cancel_event: Optional[threading.Event] = None
    ) -> FamilyOutcome:
        family_start = time.time()
        tuning = self.tuner.tune(
            family,
            dataset,
            folds,
            self.preprocessing,
            self.metric_set,
            self.config.budget_for(family.name),
            cancel_event=cancel_event,
        )
        best = select_best(tuning, self.target_metric, greater_is_better=self.greater_is_better)
        self.logger.info(
            f"{family.name} | selected candidate {best.index} {best.params} | "
            f"cv {self.target_metric}={best.metrics[self.target_metric]:.4f}"
        )

        check_cancelled(cancel_event, family.name)
        final, predictions, fitted = self.final_evaluator.evaluate_with_predictions(
            family, best.params, dataset, split, self.preprocessing, self.metric_set
        )
        self.logger.info(f"{family.name} | done in {format_time(time.time() - family_start)}")
        return FamilyOutcome(tuning=tuning, best=best, final=final, predictions=predictions, fitted=fitted)

    def _assemble(
        self,
        families: List[ModelFamily],
        outcomes: Dict[str, FamilyOutcome],
        failures: Dict[str, BaseException],
        dataset,
        split: TrainTestSplit
    ) -> ComparisonResult:
        # Registry order, independent of completion order
        ordered = [outcomes[f.name] for f in families if f.name in outcomes]
        table = aggregate(outcome.final for outcome in ordered)

        predictions = None
        if ordered:
            predictions = pd.DataFrame({
                "row": split.test,
                "truth": np.where(
                    dataset.labels_at(split.test) == 1, dataset.positive_label, dataset.negative_label
                ),
            })
            for outcome in ordered:
                predictions[f".pred_{outcome.final.family}"] = outcome.predictions

        return ComparisonResult(
            table=table,
            tuning_results={o.final.family: o.tuning for o in ordered},
            best_candidates={o.final.family: o.best for o in ordered},
            predictions=predictions,
            fitted_models={o.final.family: o.fitted for o in ordered},
            failures={f.name: failures[f.name] for f in families if f.name in failures},
            target_metric=self.target_metric,
        )


def run_comparison(dataset, config, registry: ModelRegistry) -> ComparisonResult:
    """Convenience wrapper creating a runner with its own worker pool."""
    return ModelComparisonRunner(config, registry).run(dataset)
