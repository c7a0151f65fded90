"""
Configuration management for modelComparator.

This module contains configuration loading and management utilities.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..config.default_config import DEFAULT_CONFIG
from .logger import get_logger

_DATA = DEFAULT_CONFIG["data"]
_RESAMPLING = DEFAULT_CONFIG["resampling"]
_TUNING = DEFAULT_CONFIG["tuning"]
_EXECUTION = DEFAULT_CONFIG["execution"]
_OUTPUT = DEFAULT_CONFIG["output"]
_LOGGING = DEFAULT_CONFIG["logging"]


@dataclass
class PipelineConfig:
    """Configuration for one comparison run."""

    # Data configuration
    data_path: Optional[str] = None
    label_column: str = _DATA["label_column"]
    positive_label: Optional[str] = _DATA["positive_label"]
    standardize_names: bool = _DATA["standardize_names"]
    missing_zero_columns: List[str] = field(default_factory=lambda: list(_DATA["missing_zero_columns"]))

    # Resampling configuration
    k: int = _RESAMPLING["k"]
    train_fraction: float = _RESAMPLING["train_fraction"]
    seed: int = _RESAMPLING["seed"]

    # Tuning configuration
    models: Optional[List[str]] = None
    search_budget: int = _TUNING["search_budget"]
    family_budgets: Dict[str, int] = field(default_factory=dict)
    search_method: str = _TUNING["search_method"]
    grid_levels: int = _TUNING["grid_levels"]
    target_metric: str = _TUNING["target_metric"]
    metrics: List[str] = field(default_factory=lambda: list(_TUNING["metrics"]))
    threshold: float = _TUNING["threshold"]

    # Parallelism
    n_workers: int = _EXECUTION["n_workers"]
    candidate_n_jobs: int = _EXECUTION["candidate_n_jobs"]

    # Output configuration
    output_dir: str = _OUTPUT["directory"]
    save_models: bool = _OUTPUT["save_models"]
    log_level: str = _LOGGING["level"]
    log_file: Optional[str] = _LOGGING["file"]

    def budget_for(self, family: str) -> int:
        """Search budget of one family, honouring per-family overrides."""
        return int(self.family_budgets.get(family, self.search_budget))

    def validate(self) -> 'PipelineConfig':
        """Raise ValueError on inconsistent settings."""
        if self.k < 2:
            raise ValueError(f"k must be >= 2, got {self.k}")
        if not 0.0 < self.train_fraction < 1.0:
            raise ValueError(f"train_fraction must be in (0, 1), got {self.train_fraction}")
        if self.search_budget < 1:
            raise ValueError(f"search_budget must be >= 1, got {self.search_budget}")
        for family, budget in self.family_budgets.items():
            if int(budget) < 1:
                raise ValueError(f"search budget for {family} must be >= 1, got {budget}")
        if self.search_method not in ("random", "grid"):
            raise ValueError(f"search_method must be 'random' or 'grid', got {self.search_method}")
        if self.grid_levels < 1:
            raise ValueError(f"grid_levels must be >= 1, got {self.grid_levels}")
        if not self.metrics:
            raise ValueError("metrics must name at least one metric")
        from ..evaluation.metrics import canonical_metric_name
        # Aliases are accepted; a target outside metrics is appended by the runner
        for name in list(self.metrics) + [self.target_metric]:
            canonical_metric_name(name)
        if self.models is not None:
            from ..config.model_configs import MODEL_CONFIGS
            unknown = [name for name in self.models if name not in MODEL_CONFIGS]
            if unknown:
                raise ValueError(f"Unknown model families {unknown}. Available: {list(MODEL_CONFIGS)}")
        if not 0.0 < self.threshold < 1.0:
            raise ValueError(f"threshold must be in (0, 1), got {self.threshold}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        return self


class ConfigManager:
    """Configuration manager for modelComparator."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.logger = get_logger("ConfigManager")
        self.config = config or PipelineConfig()

    def load_from_file(self, config_path: Union[str, Path]) -> 'ConfigManager':
        """
        Load configuration from a YAML or JSON file.

        Args:
            config_path: Path to configuration file

        Returns:
            Self for method chaining
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.logger.info(f"Loading configuration from {config_path}")

        suffix = config_path.suffix.lower()
        with open(config_path, 'r', encoding='utf-8') as f:
            if suffix in ('.yaml', '.yml'):
                config_data = yaml.safe_load(f) or {}
            elif suffix == '.json':
                config_data = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration file must contain a mapping, got {type(config_data).__name__}")

        self.update_config(**config_data)
        self.logger.info("Configuration loaded successfully")
        return self

    def save_to_file(self, config_path: Union[str, Path]) -> None:
        """Save configuration as YAML or JSON, chosen by file suffix."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_data = asdict(self.config)
        suffix = config_path.suffix.lower()
        if suffix in ('.yaml', '.yml'):
            with open(config_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(config_data, f, default_flow_style=False, sort_keys=False)
        elif suffix == '.json':
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(config_data, f, indent=2)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        self.logger.info(f"Configuration saved to {config_path}")

    def get_config(self) -> PipelineConfig:
        """Get the current configuration."""
        return self.config

    def update_config(self, **kwargs) -> 'ConfigManager':
        """
        Update configuration with new values; None values are ignored.

        Returns:
            Self for method chaining
        """
        known = {f.name for f in fields(PipelineConfig)}
        for key, value in kwargs.items():
            if value is None:
                continue
            if key in known:
                setattr(self.config, key, value)
            else:
                self.logger.warning(f"Unknown configuration key: {key}")
        return self
