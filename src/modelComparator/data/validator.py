"""
Data validation utilities for modelComparator.

This module handles data validation and quality checks.
"""

from typing import List, Optional

import numpy as np
import pandas as pd

from ..core.exceptions import DataValidationError
from ..utils.logger import get_logger


class DataValidator:
    """Data validator for clinical tabular datasets."""

    def __init__(self):
        self.logger = get_logger("DataValidator")

    def validate_frame(self, frame: pd.DataFrame, label_column: str) -> None:
        """
        Validate a cleaned table before it becomes a Dataset.

        Raises:
            DataValidationError: If validation fails
        """
        if frame.empty:
            raise DataValidationError("Input table is empty")

        if label_column not in frame.columns:
            raise DataValidationError(f"Label column '{label_column}' not found in columns {list(frame.columns)}")

        if frame.shape[1] < 2:
            raise DataValidationError("No predictor columns besides the label")

        missing = frame.isnull().sum()
        missing = missing[missing > 0]
        if not missing.empty:
            raise DataValidationError(f"Missing values in columns: {missing.to_dict()}")

        numeric = frame.drop(columns=[label_column]).select_dtypes(include=[np.number])
        if not numeric.empty and np.isinf(numeric.to_numpy(dtype=float)).any():
            raise DataValidationError("Predictor columns contain infinite values")

        self.logger.debug(f"Validated table: {frame.shape[0]} rows x {frame.shape[1]} columns")

    def validate_label_classes(self, classes: List[str], positive_label: Optional[str]) -> None:
        """Check that the label is binary and the positive label exists."""
        if len(classes) != 2:
            raise DataValidationError(f"Expected 2 label classes, found {len(classes)}: {classes}")
        if positive_label is not None and str(positive_label) not in classes:
            raise DataValidationError(f"Positive label '{positive_label}' not among label classes {classes}")
