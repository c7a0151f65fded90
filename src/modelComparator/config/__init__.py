"""
Configuration modules for modelComparator.

This module contains default configurations and model family configurations.
"""

from .default_config import DEFAULT_CONFIG, DEFAULT_METRICS
from .model_configs import MODEL_CONFIGS

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_METRICS",
    "MODEL_CONFIGS",
]
