"""
Fit/score boundary shared by the tuner and the final evaluator.

``fit_on_rows`` is the only place where a preprocessing transform and an
estimator are fitted. It receives the training row indices explicitly and
never sees any other row of the dataset; scoring happens afterwards on a
disjoint set of rows through ``score_rows``.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .base import ModelFamily
from ..evaluation.metrics import MetricSet
from ..models import BaseModel, ModelFactory
from ..preprocessing.normalizer import Normalizer, PreprocessingSpec


@dataclass
class FittedCandidate:
    """Preprocessing transform and estimator fitted on one set of rows."""
    family: str
    params: Dict[str, Any]
    preprocessor: Normalizer
    model: BaseModel
    train_indices: np.ndarray

    def predict_proba(self, frame: pd.DataFrame) -> np.ndarray:
        """Positive-class probability for raw predictor rows."""
        return self.model.positive_proba(self.preprocessor.transform(frame))


def fit_on_rows(
    family: ModelFamily,
    candidate: Mapping[str, Any],
    dataset,
    train_indices: Sequence[int],
    preprocessing: PreprocessingSpec,
    random_state: Optional[int] = None
) -> FittedCandidate:
    """
    Fit the preprocessing recipe and the family's estimator on training rows.

    Args:
        family: Model family (estimator kind and fixed parameters)
        candidate: Tunable parameter values, merged over the fixed ones
        dataset: Dataset holding every row
        train_indices: Rows the transform and the estimator may see
        preprocessing: Recipe to instantiate for this fit
        random_state: Seed for the estimator

    Returns:
        FittedCandidate
    """
    train_indices = np.asarray(train_indices, dtype=int)
    X_train = dataset.rows(train_indices)
    y_train = dataset.labels_at(train_indices)

    preprocessor = preprocessing.build().fit(X_train)
    params = family.resolve_params(candidate)
    model = ModelFactory.create_model(family.kind, params, random_state=random_state)
    model.fit(preprocessor.transform(X_train), y_train)

    return FittedCandidate(
        family=family.name,
        params=params,
        preprocessor=preprocessor,
        model=model,
        train_indices=train_indices,
    )


def score_rows(
    fitted: FittedCandidate,
    dataset,
    rows: Sequence[int],
    metric_set: MetricSet
) -> Tuple[Dict[str, float], np.ndarray]:
    """Score a fitted candidate on rows it was not fitted on."""
    rows = np.asarray(rows, dtype=int)
    if np.intersect1d(rows, fitted.train_indices).size:
        raise ValueError("Scoring rows overlap the rows the candidate was fitted on")
    proba = fitted.predict_proba(dataset.rows(rows))
    return metric_set.score(dataset.labels_at(rows), proba), proba
