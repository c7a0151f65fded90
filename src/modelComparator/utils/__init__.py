"""
Utility modules for modelComparator.

This module contains logging, configuration and file helpers.
"""

from .logger import get_logger, setup_logging
from .config import ConfigManager, PipelineConfig
from .helpers import ensure_directory, format_time, load_object, safe_filename, save_object

__all__ = [
    "get_logger",
    "setup_logging",
    "ConfigManager",
    "PipelineConfig",
    "ensure_directory",
    "format_time",
    "load_object",
    "safe_filename",
    "save_object",
]
