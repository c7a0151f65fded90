"""
Final test-set evaluation for modelComparator.

The selected candidate of each family is refit once on the training rows and
scored once on the test rows.
"""

from typing import Any, Mapping, Optional, Tuple

import numpy as np

from .base import FinalMetrics, ModelFamily
from .fitting import FittedCandidate, fit_on_rows, score_rows
from ..evaluation.metrics import MetricSet
from ..preprocessing.normalizer import PreprocessingSpec
from ..utils.logger import get_logger


class FinalEvaluator:
    """Refit on the train partition and score on the test partition."""

    def __init__(self, seed: int = 123):
        self.seed = seed
        self.logger = get_logger("FinalEvaluator")

    def evaluate_with_predictions(
        self,
        family: ModelFamily,
        candidate: Mapping[str, Any],
        dataset,
        split,
        preprocessing: PreprocessingSpec,
        metric_set: MetricSet
    ) -> Tuple[FinalMetrics, np.ndarray, FittedCandidate]:
        """
        Final fit and test-set scoring.

        Returns:
            (FinalMetrics, positive-class probabilities for split.test in
            order, fitted preprocessing and estimator)
        """
        fitted = fit_on_rows(family, candidate, dataset, split.train, preprocessing, random_state=self.seed)
        metrics, proba = score_rows(fitted, dataset, split.test, metric_set)
        self.logger.info(
            f"{family.name} | test n={len(split.test)} | "
            + ", ".join(f"{name}={value:.4f}" for name, value in metrics.items())
        )
        final = FinalMetrics(family=family.name, candidate=dict(candidate), metrics=metrics)
        return final, proba, fitted

    def evaluate(
        self,
        family: ModelFamily,
        candidate: Mapping[str, Any],
        dataset,
        split,
        preprocessing: PreprocessingSpec,
        metric_set: MetricSet
    ) -> FinalMetrics:
        final, _, _ = self.evaluate_with_predictions(family, candidate, dataset, split, preprocessing, metric_set)
        return final


def evaluate_final(
    family: ModelFamily,
    candidate: Mapping[str, Any],
    dataset,
    split,
    preprocessing: PreprocessingSpec,
    metric_set: MetricSet,
    seed: Optional[int] = 123
) -> FinalMetrics:
    """Functional form of FinalEvaluator.evaluate."""
    return FinalEvaluator(seed=seed).evaluate(family, candidate, dataset, split, preprocessing, metric_set)
