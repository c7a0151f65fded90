import threading
from unittest.mock import patch

import numpy as np
import pytest

from modelComparator.core import fitting
from modelComparator.core.exceptions import AllCandidatesFailedError, TuningCancelledError
from modelComparator.core.hyperparameter_tuner import HyperparameterTuner
from modelComparator.core.registry import ModelRegistry
from modelComparator.core.search_space import Choice


def register(name, kind, fixed=None, space=None):
    return ModelRegistry().register_family(name, kind, fixed_params=fixed, search_space=space)


def test_tune_scores_every_candidate(dataset, folds, preprocessing, metric_set, lasso_family):
    result = HyperparameterTuner(seed=1).tune(lasso_family, dataset, folds, preprocessing, metric_set, 3)

    assert result.family == "LASSO"
    assert [c.index for c in result.candidates] == [0, 1, 2]
    for candidate in result.candidates:
        assert not candidate.failed
        assert set(candidate.metrics) == set(metric_set.names)
        assert len(candidate.fold_metrics) == folds.k
        assert 0.0 <= candidate.metrics["roc_auc"] <= 1.0
        assert candidate.metrics["roc_auc"] == pytest.approx(
            np.mean([f["roc_auc"] for f in candidate.fold_metrics])
        )


def test_family_without_search_space_has_one_candidate(dataset, folds, preprocessing, metric_set):
    family = register("Ridge", "ridge", fixed={"penalty": 0.01})
    result = HyperparameterTuner().tune(family, dataset, folds, preprocessing, metric_set, 20)
    assert len(result.candidates) == 1
    assert result.candidates[0].params == {}


def test_tuning_is_deterministic(dataset, folds, preprocessing, metric_set, lasso_family):
    tuner = HyperparameterTuner(seed=3)
    first = tuner.tune(lasso_family, dataset, folds, preprocessing, metric_set, 2)
    second = tuner.tune(lasso_family, dataset, folds, preprocessing, metric_set, 2)
    assert [c.params for c in first.candidates] == [c.params for c in second.candidates]
    assert [c.metrics for c in first.candidates] == [c.metrics for c in second.candidates]


def test_failed_candidate_is_recorded_not_fatal(dataset, folds, preprocessing, metric_set):
    family = register("RF", "randomforest", fixed={"trees": 5}, space={"min_n": Choice([1, 4])})
    result = HyperparameterTuner().tune(family, dataset, folds, preprocessing, metric_set, 2)

    failed = [c for c in result.candidates if c.failed]
    assert len(failed) == 1 and result.n_failed == 1
    assert failed[0].params == {"min_n": 1}
    assert "family=RF" in failed[0].error and "fold=Fold1" in failed[0].error
    assert np.isnan(failed[0].metrics["roc_auc"])
    assert [c.params for c in result.viable()] == [{"min_n": 4}]


def test_all_candidates_failing_raises(dataset, folds, preprocessing, metric_set):
    family = register("RF", "randomforest", fixed={"trees": 5}, space={"min_n": Choice([0, 1])})
    with pytest.raises(AllCandidatesFailedError) as excinfo:
        HyperparameterTuner().tune(family, dataset, folds, preprocessing, metric_set, 2)
    assert excinfo.value.family == "RF"
    assert len(excinfo.value.errors) == 2


def test_fit_failure_on_later_fold_names_the_fold(dataset, folds, preprocessing, metric_set, lasso_family):
    calls = []
    real_fit = fitting.fit_on_rows

    def flaky_fit(*args, **kwargs):
        calls.append(1)
        if len(calls) == 3:
            raise RuntimeError("did not converge")
        return real_fit(*args, **kwargs)

    with patch("modelComparator.core.hyperparameter_tuner.fit_on_rows", side_effect=flaky_fit):
        result = HyperparameterTuner().tune(lasso_family, dataset, folds, preprocessing, metric_set, 2)

    first = result.candidates[0]
    assert first.failed
    assert "fold=Fold3" in first.error and "RuntimeError: did not converge" in first.error
    assert len(first.fold_metrics) == 2
    assert not result.candidates[1].failed


def test_cancel_before_start(dataset, folds, preprocessing, metric_set, lasso_family):
    event = threading.Event()
    event.set()
    with pytest.raises(TuningCancelledError):
        HyperparameterTuner().tune(lasso_family, dataset, folds, preprocessing, metric_set, 2,
                                   cancel_event=event)


def test_cancel_stops_before_next_fold(dataset, folds, preprocessing, metric_set, lasso_family):
    event = threading.Event()
    calls = []
    real_fit = fitting.fit_on_rows

    def fit_then_cancel(*args, **kwargs):
        calls.append(1)
        event.set()
        return real_fit(*args, **kwargs)

    with patch("modelComparator.core.hyperparameter_tuner.fit_on_rows", side_effect=fit_then_cancel):
        with pytest.raises(TuningCancelledError):
            HyperparameterTuner().tune(lasso_family, dataset, folds, preprocessing, metric_set, 3,
                                       cancel_event=event)
    assert len(calls) == 1


def test_parallel_candidates_match_sequential(dataset, folds, preprocessing, metric_set, lasso_family):
    sequential = HyperparameterTuner(seed=4, n_jobs=1).tune(
        lasso_family, dataset, folds, preprocessing, metric_set, 3)
    parallel = HyperparameterTuner(seed=4, n_jobs=2).tune(
        lasso_family, dataset, folds, preprocessing, metric_set, 3)
    assert [c.index for c in parallel.candidates] == [0, 1, 2]
    assert [c.metrics for c in parallel.candidates] == [c.metrics for c in sequential.candidates]


def test_transforms_fitted_on_fold_training_rows_only(dataset, folds, metric_set, lasso_family, recording_spec):
    HyperparameterTuner().tune(lasso_family, dataset, folds, recording_spec, metric_set, 2)

    assert len(recording_spec.fitted) == 2 * folds.k
    training_sets = [set(folds.training(f).tolist()) for f in range(folds.k)]
    for rows in recording_spec.fitted:
        assert set(rows.tolist()) in training_sets


def test_history_frame(dataset, folds, preprocessing, metric_set, lasso_family):
    result = HyperparameterTuner().tune(lasso_family, dataset, folds, preprocessing, metric_set, 2)
    frame = result.to_frame()
    assert list(frame["candidate"]) == [0, 1]
    assert "param_penalty" in frame.columns and "roc_auc" in frame.columns
    assert frame["error"].isna().all()


def test_unknown_search_method():
    with pytest.raises(ValueError):
        HyperparameterTuner(search_method="bayes")
