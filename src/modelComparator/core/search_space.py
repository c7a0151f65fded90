"""
Hyperparameter search spaces for modelComparator.

A search space maps parameter names to dimensions. Dimensions are declarative
so a family can be described before the data is known; ``FeatureCount`` is
resolved against the number of predictors when candidates are drawn.

Sampling: ``random`` draws independent points with scikit-learn's
ParameterSampler over scipy.stats distributions (log-uniform for scale
parameters, uniform for fractions, discrete uniform for integers). ``grid``
builds a regular grid with ``levels`` points per dimension and keeps a seeded
subset of ``budget`` points.
"""

from dataclasses import dataclass
from itertools import product
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np
from scipy.stats import loguniform, randint, uniform
from sklearn.model_selection import ParameterSampler

SEARCH_METHODS = ("random", "grid")


@dataclass(frozen=True)
class LogUniform:
    """Continuous dimension sampled uniformly on a log10 scale."""
    low: float
    high: float

    def __post_init__(self):
        if not 0 < self.low < self.high:
            raise ValueError(f"LogUniform needs 0 < low < high, got ({self.low}, {self.high})")

    def distribution(self, n_features: int):
        return loguniform(self.low, self.high)

    def levels(self, n_levels: int, n_features: int) -> List[float]:
        return np.logspace(np.log10(self.low), np.log10(self.high), n_levels).tolist()


@dataclass(frozen=True)
class Uniform:
    """Continuous dimension sampled uniformly between low and high."""
    low: float
    high: float

    def __post_init__(self):
        if not self.low < self.high:
            raise ValueError(f"Uniform needs low < high, got ({self.low}, {self.high})")

    def distribution(self, n_features: int):
        return uniform(self.low, self.high - self.low)

    def levels(self, n_levels: int, n_features: int) -> List[float]:
        return np.linspace(self.low, self.high, n_levels).tolist()


@dataclass(frozen=True)
class IntRange:
    """Integer dimension, both bounds inclusive."""
    low: int
    high: int

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(f"IntRange needs low <= high, got ({self.low}, {self.high})")

    def distribution(self, n_features: int):
        return randint(self.low, self.high + 1)

    def levels(self, n_levels: int, n_features: int) -> List[int]:
        return _int_levels(self.low, self.high, n_levels)


@dataclass(frozen=True)
class FeatureCount:
    """Integer dimension bounded above by the number of predictors (e.g. mtry)."""
    low: int = 1

    def _high(self, n_features: int) -> int:
        if n_features < self.low:
            raise ValueError(f"FeatureCount needs at least {self.low} predictors, got {n_features}")
        return n_features

    def distribution(self, n_features: int):
        return randint(self.low, self._high(n_features) + 1)

    def levels(self, n_levels: int, n_features: int) -> List[int]:
        return _int_levels(self.low, self._high(n_features), n_levels)


@dataclass(frozen=True)
class Choice:
    """Categorical dimension."""
    values: tuple

    def __init__(self, values: Sequence[Any]):
        if len(values) == 0:
            raise ValueError("Choice needs at least one value")
        object.__setattr__(self, "values", tuple(values))

    def distribution(self, n_features: int):
        return list(self.values)

    def levels(self, n_levels: int, n_features: int) -> List[Any]:
        return list(self.values)


def _int_levels(low: int, high: int, n_levels: int) -> List[int]:
    return sorted({int(round(v)) for v in np.linspace(low, high, n_levels)})


def _plain(value: Any) -> Any:
    """numpy scalars to built-in Python values."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def sample_candidates(
    search_space: Mapping[str, Any],
    budget: int,
    n_features: int,
    seed: int,
    method: str = "random",
    grid_levels: int = 3
) -> List[Dict[str, Any]]:
    """
    Draw hyperparameter candidates from a search space.

    Args:
        search_space: Parameter name -> dimension
        budget: Maximum number of candidates
        n_features: Number of predictors, resolves FeatureCount dimensions
        seed: Seed for the sampler; same seed gives the same candidates
        method: "random" or "grid"
        grid_levels: Points per dimension for the grid method

    Returns:
        List of candidates; a single empty candidate for an empty space
    """
    if budget < 1:
        raise ValueError(f"Search budget must be >= 1, got {budget}")
    if method not in SEARCH_METHODS:
        raise ValueError(f"Unknown search method '{method}', expected one of {SEARCH_METHODS}")
    if not search_space:
        return [{}]

    names = sorted(search_space)
    if method == "grid":
        axes = [search_space[name].levels(grid_levels, n_features) for name in names]
        grid = [dict(zip(names, point)) for point in product(*axes)]
        if len(grid) > budget:
            rng = np.random.RandomState(seed)
            keep = np.sort(rng.choice(len(grid), size=budget, replace=False))
            grid = [grid[i] for i in keep]
        candidates = grid
    else:
        distributions = {name: search_space[name].distribution(n_features) for name in names}
        # ParameterSampler caps all-discrete spaces at their grid size
        candidates = list(ParameterSampler(distributions, n_iter=budget, random_state=seed))

    return [{name: _plain(candidate[name]) for name in names} for candidate in candidates]
