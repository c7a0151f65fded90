"""
Data loading utilities for modelComparator.

This module reads a clinical CSV table, normalizes its column names and drops
incomplete records before the table becomes a Dataset.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .dataset import Dataset
from ..utils.logger import get_logger


def clean_names(columns: Iterable[str]) -> List[str]:
    """Convert column names to unique snake_case identifiers."""
    cleaned = []
    seen = {}
    for column in columns:
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", str(column).strip())
        name = re.sub(r"[^0-9a-zA-Z]+", "_", name).strip("_").lower()
        if not name:
            name = "x"
        if name[0].isdigit():
            name = f"x{name}"
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 1
        cleaned.append(name)
    return cleaned


class DataLoader:
    """Data loader for clinical binary-outcome tables."""

    def __init__(self):
        self.logger = get_logger("DataLoader")
        self.n_dropped_ = 0

    def load_data(
        self,
        data_file: Union[str, Path],
        label_column: str,
        positive_label: Optional[str] = None,
        standardize_names: bool = True,
        missing_zero_columns: Optional[List[str]] = None
    ) -> Dataset:
        """
        Load a CSV table and turn it into a Dataset.

        Args:
            data_file: Path to the CSV file (one row per patient)
            label_column: Name of the binary label column (after cleaning)
            positive_label: Label value treated as the event class
            standardize_names: Convert column names to snake_case
            missing_zero_columns: Columns where a value of 0 means "not measured"

        Returns:
            Dataset without missing values
        """
        data_file = Path(data_file)
        if not data_file.exists():
            raise FileNotFoundError(f"Data file not found: {data_file}")

        self.logger.info(f"Loading data from {data_file}")
        frame = pd.read_csv(data_file)
        self.logger.info(f"Loaded table: {frame.shape}")

        frame = self.clean(frame, standardize_names, missing_zero_columns)
        dataset = Dataset.from_frame(frame, label_column, positive_label)
        self.logger.info(
            f"Final dataset: {len(dataset)} records x {dataset.n_features} predictors, "
            f"label distribution: {dataset.class_counts()}"
        )
        return dataset

    def clean(
        self,
        frame: pd.DataFrame,
        standardize_names: bool = True,
        missing_zero_columns: Optional[List[str]] = None
    ) -> pd.DataFrame:
        """Normalize names, mark impossible zeros as missing and drop incomplete rows."""
        frame = frame.copy()
        if standardize_names:
            frame.columns = clean_names(frame.columns)

        for column in missing_zero_columns or []:
            if column not in frame.columns:
                raise ValueError(f"Column '{column}' listed in missing_zero_columns not found")
            frame[column] = frame[column].replace(0, np.nan)

        n_before = len(frame)
        frame = frame.dropna().reset_index(drop=True)
        self.n_dropped_ = n_before - len(frame)
        if self.n_dropped_:
            self.logger.info(f"Dropped {self.n_dropped_} of {n_before} records with missing values")
        return frame
