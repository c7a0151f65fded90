import numpy as np
import pytest

from modelComparator.core.exceptions import InsufficientDataError
from modelComparator.core.splitter import make_folds, make_train_test_split
from modelComparator.data.dataset import Dataset


def test_folds_are_deterministic(dataset):
    first = make_folds(dataset, k=5, seed=42)
    second = make_folds(dataset, k=5, seed=42)
    assert np.array_equal(first.fold_ids, second.fold_ids)


def test_different_seed_changes_folds(dataset):
    assert not np.array_equal(
        make_folds(dataset, k=5, seed=1).fold_ids,
        make_folds(dataset, k=5, seed=2).fold_ids,
    )


def test_every_index_in_exactly_one_fold(dataset, folds):
    held_out = np.concatenate(folds.folds())
    assert sorted(held_out.tolist()) == list(range(len(dataset)))
    for fold in range(folds.k):
        train, test = folds.training(fold), folds.held_out(fold)
        assert np.intersect1d(train, test).size == 0
        assert len(train) + len(test) == len(dataset)


@pytest.mark.parametrize("n_pos,n_neg,k", [(50, 50, 5), (37, 68, 5), (23, 61, 4), (12, 9, 3)])
def test_folds_are_stratified_within_one_record(frame_factory, n_pos, n_neg, k):
    dataset = Dataset.from_frame(frame_factory(n_pos, n_neg), "diabetes", "pos")
    folds = make_folds(dataset, k=k, seed=7)
    for held_out in folds.folds():
        n_fold_pos = int(dataset.labels[held_out].sum())
        assert abs(n_fold_pos - n_pos * len(held_out) / len(dataset)) <= 1
        assert abs((len(held_out) - n_fold_pos) - n_neg * len(held_out) / len(dataset)) <= 1


def test_fold_assignment_is_read_only(folds):
    with pytest.raises(ValueError):
        folds.fold_ids[0] = 3


def test_small_class_raises_insufficient_data(frame_factory):
    dataset = Dataset.from_frame(frame_factory(3, 40), "diabetes", "pos")
    with pytest.raises(InsufficientDataError):
        make_folds(dataset, k=5, seed=123)


def test_k_below_two_rejected(dataset):
    with pytest.raises(ValueError):
        make_folds(dataset, k=1)


def test_split_is_disjoint_and_complete(dataset, split):
    assert np.intersect1d(split.train, split.test).size == 0
    assert sorted(np.concatenate([split.train, split.test]).tolist()) == list(range(len(dataset)))
    assert len(split.train) == 80


def test_split_is_deterministic_and_stratified(dataset):
    first = make_train_test_split(dataset, 0.8, seed=9)
    second = make_train_test_split(dataset, 0.8, seed=9)
    assert np.array_equal(first.train, second.train)
    assert int(dataset.labels[first.test].sum()) == 10


def test_split_needs_two_records_per_class(frame_factory):
    dataset = Dataset.from_frame(frame_factory(1, 30), "diabetes", "pos")
    with pytest.raises(InsufficientDataError):
        make_train_test_split(dataset, 0.8)


def test_split_fraction_leaving_empty_side_raises(frame_factory):
    dataset = Dataset.from_frame(frame_factory(3, 3), "diabetes", "pos")
    with pytest.raises(InsufficientDataError):
        make_train_test_split(dataset, 0.9)


@pytest.mark.parametrize("fraction", [0.0, 1.0, 1.5])
def test_split_fraction_out_of_range(dataset, fraction):
    with pytest.raises(ValueError):
        make_train_test_split(dataset, fraction)
