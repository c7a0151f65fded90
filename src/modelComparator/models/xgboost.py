"""
XGBoost classifier implementation for modelComparator.

Gradient-boosted trees; ``learn_rate`` is the shrinkage per boosting round,
``tree_depth`` the maximum depth of each tree and ``sample_size`` the row
subsample fraction.
"""

from typing import Optional

import numpy as np
import pandas as pd
from xgboost import XGBClassifier

from .base_model import BaseModel


class XGBoostClassifier(BaseModel):
    """XGBoost classifier wrapper."""

    param_names = ('trees', 'learn_rate', 'tree_depth', 'min_n', 'sample_size', 'n_jobs')

    def __init__(self, random_state: Optional[int] = None, **params):
        super().__init__("XGBoost", random_state=random_state, **params)
        self.trees = int(params.get('trees', 500))
        self.learn_rate = float(params.get('learn_rate', 0.3))
        self.tree_depth = int(params.get('tree_depth', 6))
        self.min_n = params.get('min_n')
        self.sample_size = float(params.get('sample_size', 1.0))
        self.n_jobs = int(params.get('n_jobs', 1))
        if self.learn_rate <= 0:
            raise ValueError(f"learn_rate must be > 0, got {self.learn_rate}")

        self.xgb_classifier_ = None

    def fit(self, X: pd.DataFrame, y: np.ndarray, **kwargs) -> 'XGBoostClassifier':
        """Fit the boosted ensemble to the training data."""
        self._check_binary(X, y)

        extra = {}
        if self.min_n is not None:
            extra['min_child_weight'] = int(self.min_n)

        self.xgb_classifier_ = XGBClassifier(
            n_estimators=self.trees,
            learning_rate=self.learn_rate,
            max_depth=self.tree_depth,
            subsample=self.sample_size,
            objective='binary:logistic',
            eval_metric='logloss',
            random_state=self.random_state,
            n_jobs=self.n_jobs,
            **extra
        )
        self.xgb_classifier_.fit(np.asarray(X, dtype=float), np.asarray(y, dtype=int))
        self.is_fitted = True
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return self.xgb_classifier_.predict(np.asarray(X, dtype=float))

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return self.xgb_classifier_.predict_proba(np.asarray(X, dtype=float))

    def get_feature_importance(self) -> np.ndarray:
        self._check_fitted()
        return self.xgb_classifier_.feature_importances_
