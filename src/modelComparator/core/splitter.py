"""
Stratified resampling for modelComparator.

Both the cross-validation folds and the train/test partition are computed
once per run from a seed and shared read-only by every model family, so all
families are tuned and tested on identical rows.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np
from sklearn.model_selection import StratifiedKFold, train_test_split

from .exceptions import InsufficientDataError
from ..utils.logger import get_logger

logger = get_logger("Splitter")


def _read_only(values) -> np.ndarray:
    array = np.array(values, dtype=int)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class FoldAssignment:
    """Fold number of every row; fold f holds out the rows with fold_ids == f."""
    fold_ids: np.ndarray
    k: int

    def held_out(self, fold: int) -> np.ndarray:
        return np.flatnonzero(self.fold_ids == fold)

    def training(self, fold: int) -> np.ndarray:
        return np.flatnonzero(self.fold_ids != fold)

    def splits(self) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """(train_indices, held_out_indices) for every fold, in fold order."""
        for fold in range(self.k):
            yield self.training(fold), self.held_out(fold)

    def folds(self) -> List[np.ndarray]:
        return [self.held_out(fold) for fold in range(self.k)]


@dataclass(frozen=True, eq=False)
class TrainTestSplit:
    """Disjoint train and test row indices covering the whole dataset."""
    train: np.ndarray
    test: np.ndarray


def _check_class_sizes(labels: np.ndarray, minimum: int, purpose: str) -> None:
    classes, counts = np.unique(labels, return_counts=True)
    if len(classes) < 2:
        raise InsufficientDataError(f"{purpose} needs both label classes, found only {classes.tolist()}")
    small = {int(c): int(n) for c, n in zip(classes, counts) if n < minimum}
    if small:
        raise InsufficientDataError(
            f"{purpose} needs at least {minimum} records per label class; "
            f"too small: {small} (label -> count)"
        )


def make_folds(dataset, k: int = 5, seed: int = 123) -> FoldAssignment:
    """
    Assign every row of the dataset to one of k label-stratified folds.

    Args:
        dataset: Dataset to partition
        k: Number of folds
        seed: Shuffle seed; the same seed and row order give the same folds

    Returns:
        FoldAssignment

    Raises:
        InsufficientDataError: If a label class has fewer than k records
    """
    if k < 2:
        raise ValueError(f"k must be >= 2, got {k}")
    labels = np.asarray(dataset.labels)
    _check_class_sizes(labels, k, f"{k}-fold cross-validation")

    fold_ids = np.empty(len(labels), dtype=int)
    splitter = StratifiedKFold(n_splits=k, shuffle=True, random_state=seed)
    for fold, (_, held_out) in enumerate(splitter.split(np.zeros(len(labels)), labels)):
        fold_ids[held_out] = fold

    logger.debug(f"Built {k} folds with sizes {np.bincount(fold_ids, minlength=k).tolist()}")
    return FoldAssignment(fold_ids=_read_only(fold_ids), k=k)


def make_train_test_split(dataset, train_fraction: float = 0.8, seed: int = 123) -> TrainTestSplit:
    """
    Partition the dataset into label-stratified train and test rows.

    Raises:
        InsufficientDataError: If a label class has fewer than 2 records, or
            the fraction leaves a partition without one record of each class
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
    labels = np.asarray(dataset.labels)
    _check_class_sizes(labels, 2, "A stratified train/test split")

    n_rows = len(labels)
    n_classes = len(np.unique(labels))
    n_train = int(np.floor(n_rows * train_fraction))
    if n_train < n_classes or n_rows - n_train < n_classes:
        raise InsufficientDataError(
            f"train_fraction={train_fraction} on {n_rows} records leaves {n_train} train / "
            f"{n_rows - n_train} test rows; each side needs one record per label class"
        )

    train, test = train_test_split(
        np.arange(n_rows),
        train_size=n_train,
        stratify=labels,
        random_state=seed,
    )
    return TrainTestSplit(train=_read_only(np.sort(train)), test=_read_only(np.sort(test)))
