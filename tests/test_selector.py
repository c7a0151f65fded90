import pytest

from modelComparator.core.base import CandidateResult, TuningResult
from modelComparator.core.exceptions import NoViableCandidateError
from modelComparator.core.selector import select_best, select_best_params

NAN = float("nan")


def candidates(*aucs, errors=()):
    return TuningResult(
        family="LASSO",
        candidates=tuple(
            CandidateResult(
                index=i,
                params={"penalty": 10.0 ** -i},
                metrics={"roc_auc": auc, "brier_score": 1 - auc if auc == auc else NAN},
                error="boom" if i in errors else None,
            )
            for i, auc in enumerate(aucs)
        ),
    )


def test_unique_maximum_selected():
    assert select_best(candidates(0.71, 0.93, 0.85), "roc_auc").index == 1


def test_tie_broken_by_lowest_index():
    assert select_best(candidates(0.80, 0.90, 0.90, 0.90), "roc_auc").index == 1


def test_failed_candidates_excluded():
    result = candidates(NAN, 0.6, 0.99, errors=(0, 2))
    assert select_best(result, "roc_auc").index == 1


def test_lower_is_better_metric():
    best = select_best(candidates(0.70, 0.95, 0.80), "brier_score", greater_is_better=False)
    assert best.index == 1


def test_no_viable_candidate():
    with pytest.raises(NoViableCandidateError):
        select_best(candidates(NAN, NAN, errors=(0, 1)), "roc_auc")


def test_empty_tuning_result():
    with pytest.raises(NoViableCandidateError):
        select_best(TuningResult(family="LASSO", candidates=()), "roc_auc")


def test_unscored_metric():
    with pytest.raises(ValueError):
        select_best(candidates(0.7, 0.8), "accuracy")


def test_best_params_is_the_candidate_mapping():
    params = select_best_params(candidates(0.71, 0.93, 0.85), "roc_auc")
    assert params == {"penalty": 0.1}
