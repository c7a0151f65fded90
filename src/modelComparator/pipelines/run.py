"""
Run pipeline for modelComparator.

Loads the data, runs the comparison across all requested model families and
exports the results.
"""

import argparse
from dataclasses import asdict
from pathlib import Path

from ..core.comparison_runner import ComparisonResult, ModelComparisonRunner
from ..core.registry import build_default_registry
from ..data.loader import DataLoader
from ..evaluation.reporter import ResultsReporter
from ..utils.config import ConfigManager, PipelineConfig
from ..utils.logger import get_logger, setup_logging


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Defaults, overridden by the config file, overridden by CLI flags."""
    manager = ConfigManager()
    config_path = getattr(args, 'config', None)
    if config_path:
        manager.load_from_file(config_path)

    overrides = {
        key: value for key, value in vars(args).items()
        if key not in ('command', 'config', 'allow_partial')
    }
    manager.update_config(**overrides)
    return manager.get_config().validate()


def run_pipeline(config: PipelineConfig) -> ComparisonResult:
    """Load the dataset, compare the configured families and export the results."""
    logger = get_logger("RunPipeline")
    if not config.data_path:
        raise ValueError("No input data: pass --data or set data_path in the configuration file")

    output_dir = Path(config.output_dir)
    setup_logging(config.log_level, output_dir / config.log_file if config.log_file else None)
    logger.info(f"Output directory: {output_dir}")

    loader = DataLoader()
    dataset = loader.load_data(
        config.data_path,
        label_column=config.label_column,
        positive_label=config.positive_label,
        standardize_names=config.standardize_names,
        missing_zero_columns=config.missing_zero_columns,
    )

    registry = build_default_registry(config.models)
    runner = ModelComparisonRunner(config, registry)
    result = runner.run(dataset)

    reporter = ResultsReporter()
    reporter.export(result, output_dir, save_models=config.save_models, run_info={
        "config": asdict(config),
        "n_records": len(dataset),
        "n_dropped": loader.n_dropped_,
        "positive_label": dataset.positive_label,
    })
    reporter.print_report(result)
    return result


def handle_run(args: argparse.Namespace) -> int:
    """Handle the run command; the return value is the exit status."""
    logger = get_logger("RunPipeline")
    logger.info("Starting comparison run...")

    config = build_config(args)
    result = run_pipeline(config)

    if result.is_complete:
        return 0
    for name, message in result.failure_messages().items():
        logger.error(f"{name}: {message}")
    if getattr(args, 'allow_partial', False):
        logger.warning("Result table is incomplete; continuing because --allow_partial was given")
        return 0
    logger.error("Result table is incomplete; rerun with --allow_partial to accept partial results")
    return 1
