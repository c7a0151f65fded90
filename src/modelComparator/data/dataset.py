"""
In-memory dataset for modelComparator.

A Dataset is built once from a cleaned table and shared read-only by the
splitter, the tuner workers and the final evaluator.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .validator import DataValidator


@dataclass(frozen=True, eq=False)
class Dataset:
    """Predictor table plus a binary label vector (1 = positive class)."""
    features: pd.DataFrame
    labels: np.ndarray
    label_name: str
    positive_label: str
    negative_label: str

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        label_column: str,
        positive_label: Optional[str] = None
    ) -> 'Dataset':
        """
        Build a dataset from a cleaned table.

        Args:
            frame: Table with predictor columns and one label column
            label_column: Name of the binary label column
            positive_label: Label value treated as the event class. Defaults
                to the last value in sorted order.

        Returns:
            Dataset with a positional row index
        """
        validator = DataValidator()
        validator.validate_frame(frame, label_column)

        raw_labels = frame[label_column].astype(str).to_numpy()
        classes = sorted(np.unique(raw_labels).tolist())
        validator.validate_label_classes(classes, positive_label)
        if positive_label is None:
            positive_label = classes[-1]
        positive_label = str(positive_label)
        negative_label = next(c for c in classes if c != positive_label)

        features = frame.drop(columns=[label_column]).reset_index(drop=True).copy()
        labels = (raw_labels == positive_label).astype(int)
        labels.setflags(write=False)
        return cls(
            features=features,
            labels=labels,
            label_name=label_column,
            positive_label=positive_label,
            negative_label=negative_label,
        )

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def n_features(self) -> int:
        return self.features.shape[1]

    @property
    def feature_names(self) -> List[str]:
        return list(self.features.columns)

    @property
    def indices(self) -> np.ndarray:
        return np.arange(len(self.labels))

    def class_counts(self) -> dict:
        """Number of records per label value."""
        n_positive = int(self.labels.sum())
        return {self.negative_label: len(self.labels) - n_positive, self.positive_label: n_positive}

    def rows(self, indices: Sequence[int]) -> pd.DataFrame:
        """Copy of the predictor rows at the given positions."""
        return self.features.iloc[np.asarray(indices)].copy()

    def labels_at(self, indices: Sequence[int]) -> np.ndarray:
        return self.labels[np.asarray(indices)].copy()
