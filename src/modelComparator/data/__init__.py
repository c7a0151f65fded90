"""
Data handling modules for modelComparator.

This module contains data loading, validation and the in-memory dataset.
"""

from .dataset import Dataset
from .loader import DataLoader, clean_names
from .validator import DataValidator

__all__ = [
    "Dataset",
    "DataLoader",
    "DataValidator",
    "clean_names",
]
