import pytest

from modelComparator.core.search_space import (
    Choice,
    FeatureCount,
    IntRange,
    LogUniform,
    Uniform,
    sample_candidates,
)

SPACE = {
    "penalty": LogUniform(1e-10, 1.0),
    "mixture": Uniform(0.05, 1.0),
}


def test_empty_space_yields_single_empty_candidate():
    assert sample_candidates({}, budget=20, n_features=4, seed=1) == [{}]


def test_random_sampling_is_deterministic():
    first = sample_candidates(SPACE, budget=10, n_features=4, seed=5)
    second = sample_candidates(SPACE, budget=10, n_features=4, seed=5)
    assert first == second
    assert len(first) == 10


def test_random_sampling_respects_bounds():
    for candidate in sample_candidates(SPACE, budget=50, n_features=4, seed=0):
        assert 1e-10 <= candidate["penalty"] <= 1.0
        assert 0.05 <= candidate["mixture"] <= 1.0
        assert isinstance(candidate["penalty"], float)


def test_feature_count_resolves_against_predictors():
    space = {"mtry": FeatureCount(1), "min_n": IntRange(2, 40)}
    candidates = sample_candidates(space, budget=30, n_features=3, seed=2)
    assert all(1 <= c["mtry"] <= 3 for c in candidates)
    assert all(2 <= c["min_n"] <= 40 for c in candidates)
    assert all(isinstance(c["mtry"], int) for c in candidates)


def test_feature_count_needs_enough_predictors():
    with pytest.raises(ValueError):
        sample_candidates({"mtry": FeatureCount(2)}, budget=3, n_features=1, seed=0)


def test_discrete_space_capped_at_grid_size():
    candidates = sample_candidates({"c": Choice(["a", "b"])}, budget=10, n_features=1, seed=0)
    assert sorted(c["c"] for c in candidates) == ["a", "b"]


def test_grid_method_subsets_to_budget():
    grid = sample_candidates(SPACE, budget=4, n_features=4, seed=3, method="grid", grid_levels=3)
    assert len(grid) == 4
    assert len({tuple(sorted(c.items())) for c in grid}) == 4
    full = sample_candidates(SPACE, budget=100, n_features=4, seed=3, method="grid", grid_levels=3)
    assert len(full) == 9
    assert all(c in full for c in grid)


def test_invalid_arguments():
    with pytest.raises(ValueError):
        sample_candidates(SPACE, budget=0, n_features=4, seed=0)
    with pytest.raises(ValueError):
        sample_candidates(SPACE, budget=2, n_features=4, seed=0, method="bayes")
    with pytest.raises(ValueError):
        LogUniform(0.0, 1.0)
    with pytest.raises(ValueError):
        IntRange(5, 2)
