"""
LASSO classifier implementation for modelComparator.

LogisticRegression with a pure L1 penalty; coefficients of uninformative
predictors are driven to exactly zero.
"""

from typing import List, Optional

from .logistic_regression import PenalizedLogisticClassifier


class LassoClassifier(PenalizedLogisticClassifier):
    """LASSO classifier using LogisticRegression with L1 penalty."""

    param_names = ('penalty', 'max_iter', 'tol')
    default_mixture = 1.0

    def __init__(self, random_state: Optional[int] = None, **params):
        super().__init__("Lasso", random_state=random_state, **params)

    def get_selected_features(self) -> List[str]:
        """Names of predictors with a non-zero coefficient."""
        coef = self.get_coefficients()
        names = self.feature_names_ or [f"x{i}" for i in range(len(coef))]
        return [name for name, value in zip(names, coef) if value != 0]
