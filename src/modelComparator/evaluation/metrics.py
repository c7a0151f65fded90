"""
Evaluation metrics for modelComparator.

A MetricSet is a validated, ordered selection of named binary-classification
metrics. Every metric is computed from true labels (1 = positive class) and
positive-class probabilities; threshold metrics use a fixed cut-off.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

import numpy as np
from sklearn.metrics import accuracy_score, brier_score_loss, confusion_matrix, roc_auc_score

from ..core.exceptions import UnknownMetricError


def _confusion(y_true: np.ndarray, y_pred: np.ndarray):
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
    return tn, fp, fn, tp


def _roc_auc(y_true, y_proba, y_pred) -> float:
    if len(np.unique(y_true)) < 2:
        return float('nan')
    return float(roc_auc_score(y_true, y_proba))


def _accuracy(y_true, y_proba, y_pred) -> float:
    return float(accuracy_score(y_true, y_pred))


def _sensitivity(y_true, y_proba, y_pred) -> float:
    """True positive rate."""
    tn, fp, fn, tp = _confusion(y_true, y_pred)
    return float(tp / (tp + fn)) if (tp + fn) > 0 else float('nan')


def _specificity(y_true, y_proba, y_pred) -> float:
    """True negative rate."""
    tn, fp, fn, tp = _confusion(y_true, y_pred)
    return float(tn / (tn + fp)) if (tn + fp) > 0 else float('nan')


def _brier(y_true, y_proba, y_pred) -> float:
    return float(brier_score_loss(y_true, y_proba))


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    function: Callable[[np.ndarray, np.ndarray, np.ndarray], float]
    greater_is_better: bool = True


METRICS: Dict[str, MetricDefinition] = {
    "roc_auc": MetricDefinition("roc_auc", _roc_auc),
    "accuracy": MetricDefinition("accuracy", _accuracy),
    "sensitivity": MetricDefinition("sensitivity", _sensitivity),
    "specificity": MetricDefinition("specificity", _specificity),
    "brier_score": MetricDefinition("brier_score", _brier, greater_is_better=False),
}

ALIASES = {
    "auc": "roc_auc",
    "roc": "roc_auc",
    "acc": "accuracy",
    "recall": "sensitivity",
    "tpr": "sensitivity",
    "tnr": "specificity",
    "brier": "brier_score",
    "brier_class": "brier_score",
}


def canonical_metric_name(name: str) -> str:
    key = str(name).strip().lower()
    key = ALIASES.get(key, key)
    if key not in METRICS:
        raise UnknownMetricError(f"Unknown metric '{name}'. Supported: {sorted(METRICS)}")
    return key


class MetricSet:
    """Ordered set of metrics scored together."""

    def __init__(self, names: Iterable[str], threshold: float = 0.5):
        canonical: List[str] = []
        for name in names:
            key = canonical_metric_name(name)
            if key not in canonical:
                canonical.append(key)
        if not canonical:
            raise ValueError("A metric set needs at least one metric")
        if not 0.0 < threshold < 1.0:
            raise ValueError(f"threshold must be in (0, 1), got {threshold}")
        self.names = tuple(canonical)
        self.threshold = threshold

    def __contains__(self, name: str) -> bool:
        try:
            return canonical_metric_name(name) in self.names
        except UnknownMetricError:
            return False

    def __iter__(self):
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __repr__(self) -> str:
        return f"MetricSet({list(self.names)}, threshold={self.threshold})"

    @staticmethod
    def greater_is_better(name: str) -> bool:
        return METRICS[canonical_metric_name(name)].greater_is_better

    def score(self, y_true: np.ndarray, y_proba: np.ndarray) -> Dict[str, float]:
        """
        Compute every metric of the set.

        Args:
            y_true: True labels, 1 for the positive class
            y_proba: Predicted probability of the positive class

        Returns:
            Metric name -> value, in set order
        """
        y_true = np.asarray(y_true).astype(int)
        y_proba = np.asarray(y_proba, dtype=float)
        if y_true.shape != y_proba.shape:
            raise ValueError(f"Shape mismatch: labels {y_true.shape} vs probabilities {y_proba.shape}")
        y_pred = (y_proba >= self.threshold).astype(int)
        return {name: METRICS[name].function(y_true, y_proba, y_pred) for name in self.names}

    @staticmethod
    def average(fold_scores: List[Dict[str, float]], names: Optional[Iterable[str]] = None) -> Dict[str, float]:
        """Mean of each metric across folds; NaN if any fold is undefined."""
        if not fold_scores:
            return {}
        names = list(names) if names is not None else list(fold_scores[0])
        return {name: float(np.mean([scores[name] for scores in fold_scores])) for name in names}
