"""
Preprocessing modules for modelComparator.

This module contains the shared preprocessing recipe.
"""

from .normalizer import Normalizer, PreprocessingSpec

__all__ = [
    "Normalizer",
    "PreprocessingSpec",
]
