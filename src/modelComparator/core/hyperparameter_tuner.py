"""
Hyperparameter tuning for modelComparator.

The tuner estimates every candidate of a family's search space with the shared
cross-validation folds. Candidate failures are recorded on the candidate and
never abort the family; only a family where every candidate failed raises.
"""

import threading
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
from joblib import Parallel, delayed

from .base import CandidateResult, ModelFamily, TuningResult
from .exceptions import AllCandidatesFailedError, EstimatorFitError, TuningCancelledError
from .fitting import fit_on_rows, score_rows
from .search_space import SEARCH_METHODS, sample_candidates
from ..evaluation.metrics import MetricSet
from ..preprocessing.normalizer import PreprocessingSpec
from ..utils.logger import get_logger


def check_cancelled(cancel_event: Optional[threading.Event], family: str) -> None:
    """Raise TuningCancelledError once the family's cancel event is set."""
    if cancel_event is not None and cancel_event.is_set():
        raise TuningCancelledError(f"Tuning of '{family}' was cancelled")


class HyperparameterTuner:
    """Cross-validated search over one model family's candidates."""

    def __init__(
        self,
        seed: int = 123,
        search_method: str = "random",
        grid_levels: int = 3,
        n_jobs: int = 1
    ):
        if search_method not in SEARCH_METHODS:
            raise ValueError(f"Unknown hyperparameter tuning method: {search_method}")
        self.seed = seed
        self.search_method = search_method
        self.grid_levels = grid_levels
        self.n_jobs = n_jobs
        self.logger = get_logger("HyperparameterTuner")

    def candidates_for(self, family: ModelFamily, n_features: int, search_budget: int) -> List[Dict[str, Any]]:
        return sample_candidates(
            family.search_space,
            budget=search_budget,
            n_features=n_features,
            seed=self.seed,
            method=self.search_method,
            grid_levels=self.grid_levels,
        )

    def tune(
        self,
        family: ModelFamily,
        dataset,
        folds,
        preprocessing: PreprocessingSpec,
        metric_set: MetricSet,
        search_budget: int,
        cancel_event: Optional[threading.Event] = None
    ) -> TuningResult:
        """
        Estimate every candidate of a family with cross-validation.

        Args:
            family: Model family to tune
            dataset: Shared dataset
            folds: FoldAssignment shared by all families
            preprocessing: Recipe refitted on every fold's training rows
            metric_set: Metrics scored on every held-out fold
            search_budget: Maximum number of candidates
            cancel_event: Checked before each candidate and each fold

        Returns:
            TuningResult with one entry per candidate, in search order

        Raises:
            AllCandidatesFailedError: If no candidate could be estimated
            TuningCancelledError: If cancel_event was set
        """
        check_cancelled(cancel_event, family.name)
        candidates = self.candidates_for(family, dataset.n_features, search_budget)
        self.logger.info(
            f"{family.name} | {self.search_method} search | candidates={len(candidates)} | "
            f"folds={folds.k} | n_jobs={self.n_jobs}"
        )

        # Threads share the cancel event and the read-only dataset
        results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self._evaluate_candidate)(
                family, index, candidate, dataset, folds, preprocessing, metric_set, cancel_event
            )
            for index, candidate in enumerate(candidates)
        )

        tuning_result = TuningResult(family=family.name, candidates=tuple(results))
        if not tuning_result.viable():
            raise AllCandidatesFailedError(family.name, [c.error for c in tuning_result.candidates])
        if tuning_result.n_failed:
            self.logger.warning(
                f"{family.name} | {tuning_result.n_failed}/{len(candidates)} candidates failed"
            )
        return tuning_result

    def _evaluate_candidate(
        self,
        family: ModelFamily,
        index: int,
        candidate: Mapping[str, Any],
        dataset,
        folds,
        preprocessing: PreprocessingSpec,
        metric_set: MetricSet,
        cancel_event: Optional[threading.Event]
    ) -> CandidateResult:
        check_cancelled(cancel_event, family.name)
        fold_scores = []
        for fold, (train_indices, held_out) in enumerate(folds.splits()):
            check_cancelled(cancel_event, family.name)
            try:
                fitted = fit_on_rows(family, candidate, dataset, train_indices, preprocessing,
                                     random_state=self.seed)
                scores, _ = score_rows(fitted, dataset, held_out, metric_set)
            except Exception as exc:
                error = EstimatorFitError(family.name, index, f"Fold{fold + 1}", exc)
                self.logger.warning(f"Candidate failed: {error}")
                return self._failed(index, candidate, metric_set, fold_scores, str(error))
            fold_scores.append(scores)

        averaged = MetricSet.average(fold_scores, metric_set.names)
        undefined = [name for name, value in averaged.items() if not np.isfinite(value)]
        if undefined:
            message = f"family={family.name} candidate={index}: non-finite mean for {undefined}"
            self.logger.warning(f"Candidate failed: {message}")
            return self._failed(index, candidate, metric_set, fold_scores, message)

        self.logger.debug(f"{family.name} | candidate {index} {dict(candidate)} -> {averaged}")
        return CandidateResult(
            index=index,
            params=dict(candidate),
            metrics=averaged,
            fold_metrics=tuple(fold_scores),
        )

    @staticmethod
    def _failed(index, candidate, metric_set, fold_scores, error: str) -> CandidateResult:
        return CandidateResult(
            index=index,
            params=dict(candidate),
            metrics={name: float('nan') for name in metric_set.names},
            fold_metrics=tuple(fold_scores),
            error=error,
        )
