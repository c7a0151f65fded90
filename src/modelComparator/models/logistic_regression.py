"""
Penalized logistic regression classifiers for modelComparator.

``penalty`` follows the glmnet convention: the objective is the mean
log-loss plus ``penalty`` times the (mixed) norm of the coefficients. The
equivalent scikit-learn inverse strength is ``C = 1 / (n_samples * penalty)``.
"""

from typing import Optional, Union

import numpy as np
import pandas as pd
from sklearn.linear_model import LogisticRegression

from .base_model import BaseModel

MIN_PENALTY = 1e-12


class PenalizedLogisticClassifier(BaseModel):
    """Logistic regression with an L1/L2 mixture penalty."""

    param_names = ('penalty', 'mixture', 'max_iter', 'tol')
    default_mixture = 0.0

    def __init__(self, name: str = "PenalizedLogistic", random_state: Optional[int] = None, **params):
        super().__init__(name, random_state=random_state, **params)
        self.penalty = float(params.get('penalty', 1e-3))
        self.mixture = float(params.get('mixture', self.default_mixture))
        self.max_iter = int(params.get('max_iter', 5000))
        self.tol = float(params.get('tol', 1e-4))
        if self.penalty < 0:
            raise ValueError(f"penalty must be >= 0, got {self.penalty}")
        if not 0.0 <= self.mixture <= 1.0:
            raise ValueError(f"mixture must be in [0, 1], got {self.mixture}")

        self.model_: Optional[LogisticRegression] = None

    def inverse_strength(self, n_samples: int) -> float:
        """scikit-learn C for the configured penalty."""
        return 1.0 / (n_samples * max(self.penalty, MIN_PENALTY))

    def _build(self, n_samples: int) -> LogisticRegression:
        C = self.inverse_strength(n_samples)
        if self.mixture == 0.0:
            return LogisticRegression(
                penalty='l2', C=C, solver='lbfgs',
                max_iter=self.max_iter, tol=self.tol, random_state=self.random_state,
            )
        return LogisticRegression(
            penalty='elasticnet', l1_ratio=self.mixture, C=C, solver='saga',
            max_iter=self.max_iter, tol=self.tol, random_state=self.random_state,
        )

    def fit(self, X: Union[pd.DataFrame, np.ndarray], y: np.ndarray, **kwargs) -> 'PenalizedLogisticClassifier':
        """Fit the logistic model to the training data."""
        self._check_binary(X, y)
        self.model_ = self._build(len(y))
        self.model_.fit(X, y)
        self.is_fitted = True
        return self

    def predict(self, X: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        self._check_fitted()
        return self.model_.predict(X)

    def predict_proba(self, X: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        self._check_fitted()
        return self.model_.predict_proba(X)

    def get_feature_importance(self) -> np.ndarray:
        """Absolute coefficients."""
        self._check_fitted()
        return np.abs(self.model_.coef_.ravel())

    def get_coefficients(self) -> np.ndarray:
        self._check_fitted()
        return self.model_.coef_.ravel()


class RidgeClassifier(PenalizedLogisticClassifier):
    """L2-penalized logistic regression."""

    param_names = ('penalty', 'max_iter', 'tol')
    default_mixture = 0.0

    def __init__(self, random_state: Optional[int] = None, **params):
        super().__init__("Ridge", random_state=random_state, **params)
