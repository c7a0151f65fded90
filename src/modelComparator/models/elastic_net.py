"""
ElasticNet classifier implementation for modelComparator.

Logistic regression whose penalty mixes L1 and L2; ``mixture`` is the L1
share (0 is pure ridge, 1 is pure lasso).
"""

from typing import Optional

from .logistic_regression import PenalizedLogisticClassifier


class ElasticNetClassifier(PenalizedLogisticClassifier):
    """Mixed-penalty logistic regression."""

    param_names = ('penalty', 'mixture', 'max_iter', 'tol')
    default_mixture = 0.5

    def __init__(self, random_state: Optional[int] = None, **params):
        super().__init__("ElasticNet", random_state=random_state, **params)
