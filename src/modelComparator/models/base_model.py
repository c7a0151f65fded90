"""
Base model implementation for modelComparator.

This module contains the base model class that all estimator wrappers inherit
from. Wrappers take the tidy parameter names used by the model registry and
translate them to the underlying library's arguments at fit time.
"""

from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
from sklearn.utils.multiclass import unique_labels

from ..core.base import BaseModel as ComparatorBaseModel


class BaseModel(ComparatorBaseModel):
    """Base class for binary classifier wrappers."""

    # Parameters accepted by the wrapper, in addition to random_state
    param_names: tuple = ()

    def __init__(self, name: str, random_state: Optional[int] = None, **params):
        unknown = set(params) - set(self.param_names)
        if unknown:
            raise ValueError(f"{name} does not accept parameters: {sorted(unknown)}")
        super().__init__(name, **params)
        self.random_state = random_state

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters for this estimator."""
        params = dict(self.config)
        params['random_state'] = self.random_state
        return params

    def _check_binary(self, X: Union[pd.DataFrame, np.ndarray], y: np.ndarray) -> None:
        self.feature_names_ = X.columns.tolist() if hasattr(X, 'columns') else None
        self.classes_ = unique_labels(y)
        if len(self.classes_) != 2:
            raise ValueError(f"{self.name} only supports binary classification, got classes {self.classes_}")

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise ValueError("Model must be fitted before making predictions")

    def positive_proba(self, X: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        """Probability of the positive class (label 1)."""
        proba = self.predict_proba(X)
        return proba[:, list(self.classes_).index(1)] if 1 in self.classes_ else proba[:, -1]
