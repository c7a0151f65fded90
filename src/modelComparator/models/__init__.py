"""
Model implementations for modelComparator.

This module contains the estimator wrappers and the factory that maps an
EstimatorKind to its wrapper.
"""

from typing import Any, Dict, Mapping, Optional

from ..core.base import EstimatorKind
from .base_model import BaseModel
from .elastic_net import ElasticNetClassifier
from .lasso import LassoClassifier
from .logistic_regression import PenalizedLogisticClassifier, RidgeClassifier
from .random_forest import RandomForestClassifier
from .xgboost import XGBoostClassifier


class ModelFactory:
    """Factory for creating models."""

    MODEL_CLASSES = {
        EstimatorKind.LASSO: LassoClassifier,
        EstimatorKind.RIDGE: RidgeClassifier,
        EstimatorKind.ELASTIC_NET: ElasticNetClassifier,
        EstimatorKind.RANDOM_FOREST: RandomForestClassifier,
        EstimatorKind.XGBOOST: XGBoostClassifier,
    }

    @staticmethod
    def create_model(
        kind: EstimatorKind,
        params: Optional[Mapping[str, Any]] = None,
        random_state: Optional[int] = None
    ) -> BaseModel:
        """Create an unfitted model of the given kind."""
        kind = EstimatorKind.parse(kind)
        return ModelFactory.MODEL_CLASSES[kind](random_state=random_state, **dict(params or {}))


__all__ = [
    "BaseModel",
    "ElasticNetClassifier",
    "LassoClassifier",
    "ModelFactory",
    "PenalizedLogisticClassifier",
    "RandomForestClassifier",
    "RidgeClassifier",
    "XGBoostClassifier",
]
