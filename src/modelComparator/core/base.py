"""
Base classes and data model for modelComparator.

This module defines the estimator kinds, the model family description and
the result containers passed between tuner, selector, final evaluator and
aggregator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd


class EstimatorKind(Enum):
    """Closed set of supported estimator families."""
    LASSO = "lasso"                  # L1-penalized logistic regression
    RIDGE = "ridge"                  # L2-penalized logistic regression
    ELASTIC_NET = "elasticnet"       # mixed-penalty logistic regression
    RANDOM_FOREST = "randomforest"
    XGBOOST = "xgboost"

    @property
    def parameters(self) -> frozenset:
        """Parameter names this kind accepts (fixed or tunable)."""
        return KIND_PARAMETERS[self]

    @classmethod
    def parse(cls, value: Any) -> 'EstimatorKind':
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "").replace("-", "")
        for kind in cls:
            if kind.value == normalized or kind.name.replace("_", "").lower() == normalized:
                return kind
        raise ValueError(f"Unknown estimator kind: {value}")


_LOGISTIC_PARAMETERS = frozenset({"penalty", "max_iter", "tol"})

KIND_PARAMETERS = {
    EstimatorKind.LASSO: _LOGISTIC_PARAMETERS,
    EstimatorKind.RIDGE: _LOGISTIC_PARAMETERS,
    EstimatorKind.ELASTIC_NET: _LOGISTIC_PARAMETERS | {"mixture"},
    EstimatorKind.RANDOM_FOREST: frozenset({"trees", "mtry", "min_n", "max_depth", "n_jobs"}),
    EstimatorKind.XGBOOST: frozenset({"trees", "learn_rate", "tree_depth", "min_n", "sample_size", "n_jobs"}),
}


@dataclass(frozen=True)
class ModelFamily:
    """A named estimator kind with fixed parameters and a tunable search space."""
    name: str
    kind: EstimatorKind
    fixed_params: Mapping[str, Any] = field(default_factory=dict)
    search_space: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fixed_params", dict(self.fixed_params))
        object.__setattr__(self, "search_space", dict(self.search_space))

    @property
    def is_tunable(self) -> bool:
        return len(self.search_space) > 0

    def resolve_params(self, candidate: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge a candidate over the fixed parameters."""
        params = dict(self.fixed_params)
        params.update(candidate)
        return params


@dataclass(frozen=True)
class CandidateResult:
    """Cross-validated estimate for one hyperparameter candidate."""
    index: int
    params: Dict[str, Any]
    metrics: Dict[str, float]
    fold_metrics: Tuple[Dict[str, float], ...] = ()
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class TuningResult:
    """All searched candidates of one model family, in search order."""
    family: str
    candidates: Tuple[CandidateResult, ...]

    def viable(self) -> List[CandidateResult]:
        return [c for c in self.candidates if not c.failed]

    @property
    def n_failed(self) -> int:
        return sum(1 for c in self.candidates if c.failed)

    def to_frame(self) -> pd.DataFrame:
        """Search history with one row per candidate."""
        rows = []
        for candidate in self.candidates:
            row = {"family": self.family, "candidate": candidate.index}
            row.update({f"param_{k}": v for k, v in candidate.params.items()})
            row.update(candidate.metrics)
            row["error"] = candidate.error
            rows.append(row)
        return pd.DataFrame(rows)


@dataclass(frozen=True)
class FinalMetrics:
    """Test-set metrics of one family refit with its selected candidate."""
    family: str
    candidate: Dict[str, Any]
    metrics: Dict[str, float]


class ResultTable:
    """Read-only, name-keyed collection of FinalMetrics."""

    def __init__(self, entries: Tuple[FinalMetrics, ...]):
        self._entries = tuple(entries)
        self._by_name = MappingProxyType({entry.family: entry for entry in self._entries})

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FinalMetrics]:
        return iter(self._entries)

    def __contains__(self, family: str) -> bool:
        return family in self._by_name

    def __getitem__(self, family: str) -> FinalMetrics:
        return self._by_name[family]

    @property
    def families(self) -> List[str]:
        return [entry.family for entry in self._entries]

    def to_frame(self) -> pd.DataFrame:
        """Flat long table with columns family, metric, value."""
        rows = [
            {"family": entry.family, "metric": metric, "value": float(value)}
            for entry in self._entries
            for metric, value in entry.metrics.items()
        ]
        return pd.DataFrame(rows, columns=["family", "metric", "value"])

    def to_wide(self) -> pd.DataFrame:
        """One row per family, one column per metric, in table order."""
        long = self.to_frame()
        if long.empty:
            return pd.DataFrame()
        wide = long.pivot(index="family", columns="metric", values="value")
        metric_order = list(dict.fromkeys(long["metric"]))
        return wide.reindex(index=self.families, columns=metric_order)


class BaseModel(ABC):
    """Capability interface every estimator wrapper implements."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        self.config = kwargs
        self.is_fitted = False
        self.feature_names_ = None
        self.classes_ = None

    @abstractmethod
    def fit(self, X: pd.DataFrame, y: np.ndarray, **kwargs) -> 'BaseModel':
        """Fit the model to the training data."""
        pass

    @abstractmethod
    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Make predictions on new data."""
        pass

    @abstractmethod
    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """Predict class probabilities."""
        pass

    def get_feature_importance(self) -> Optional[np.ndarray]:
        return None


class BasePreprocessor(ABC):
    """Base class for all preprocessors in modelComparator."""

    def __init__(self, **kwargs):
        self.config = kwargs
        self.is_fitted = False

    @abstractmethod
    def fit(self, X: pd.DataFrame, y: Optional[np.ndarray] = None) -> 'BasePreprocessor':
        """Fit the preprocessor to the data."""
        pass

    @abstractmethod
    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Transform the data."""
        pass

    def fit_transform(self, X: pd.DataFrame, y: Optional[np.ndarray] = None) -> pd.DataFrame:
        """Fit and transform the data."""
        return self.fit(X, y).transform(X)
