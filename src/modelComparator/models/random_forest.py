"""
Random Forest classifier implementation for modelComparator.

``trees`` is the ensemble size, ``mtry`` the number of predictors tried at
each split and ``min_n`` the minimum number of records in a node for it to
be split further.
"""

from typing import List, Optional, Union

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier as SklearnRandomForestClassifier

from .base_model import BaseModel


class RandomForestClassifier(BaseModel):
    """Random Forest classifier implementation."""

    param_names = ('trees', 'mtry', 'min_n', 'max_depth', 'n_jobs')

    def __init__(self, random_state: Optional[int] = None, **params):
        super().__init__("RandomForest", random_state=random_state, **params)
        self.trees = int(params.get('trees', 500))
        self.mtry = params.get('mtry')
        self.min_n = int(params.get('min_n', 2))
        self.max_depth = params.get('max_depth')
        self.n_jobs = int(params.get('n_jobs', 1))
        if self.min_n < 2:
            raise ValueError(f"min_n must be >= 2, got {self.min_n}")

        self.rf_ = None
        self.feature_importance_ = None

    def _max_features(self, n_features: int) -> Union[int, str]:
        if self.mtry is None:
            return 'sqrt'
        mtry = int(self.mtry)
        if mtry < 1:
            raise ValueError(f"mtry must be >= 1, got {mtry}")
        return min(mtry, n_features)

    def fit(self, X: pd.DataFrame, y: np.ndarray, **kwargs) -> 'RandomForestClassifier':
        """Fit the Random Forest classifier to the training data."""
        self._check_binary(X, y)

        self.rf_ = SklearnRandomForestClassifier(
            n_estimators=self.trees,
            max_features=self._max_features(X.shape[1]),
            min_samples_split=self.min_n,
            max_depth=self.max_depth,
            random_state=self.random_state,
            n_jobs=self.n_jobs
        )
        self.rf_.fit(X, y)

        self.feature_importance_ = self.rf_.feature_importances_
        self.is_fitted = True
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return self.rf_.predict(X)

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return self.rf_.predict_proba(X)

    def get_feature_importance(self) -> Optional[np.ndarray]:
        return self.feature_importance_

    def get_feature_names_by_importance(self, top_k: Optional[int] = None) -> List[str]:
        """Get feature names sorted by importance."""
        self._check_fitted()
        order = np.argsort(self.feature_importance_)[::-1]
        if top_k is not None:
            order = order[:top_k]
        names = self.feature_names_ or [f"x{i}" for i in range(len(self.feature_importance_))]
        return [names[i] for i in order]
