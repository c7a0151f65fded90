import pytest

from modelComparator.core.aggregator import aggregate
from modelComparator.core.base import FinalMetrics
from modelComparator.core.exceptions import DuplicateFamilyError


def final(name, auc):
    return FinalMetrics(family=name, candidate={}, metrics={"roc_auc": auc, "accuracy": auc - 0.1})


def test_one_row_group_per_family_in_input_order():
    table = aggregate([final("XGBoost", 0.8), final("LASSO", 0.9)])
    assert table.families == ["XGBoost", "LASSO"]
    frame = table.to_frame()
    assert list(frame.columns) == ["family", "metric", "value"]
    assert frame.groupby("family").size().to_dict() == {"LASSO": 2, "XGBoost": 2}
    assert table["LASSO"].metrics["roc_auc"] == 0.9


def test_wide_table():
    wide = aggregate([final("XGBoost", 0.8), final("LASSO", 0.9)]).to_wide()
    assert list(wide.index) == ["XGBoost", "LASSO"]
    assert list(wide.columns) == ["roc_auc", "accuracy"]
    assert wide.loc["LASSO", "accuracy"] == pytest.approx(0.8)


def test_duplicate_family_rejected():
    with pytest.raises(DuplicateFamilyError):
        aggregate([final("LASSO", 0.8), final("Ridge", 0.7), final("LASSO", 0.9)])


def test_empty_input():
    table = aggregate([])
    assert len(table) == 0
    assert table.to_frame().empty
