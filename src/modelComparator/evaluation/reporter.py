"""
Results reporting utilities for modelComparator.

This module exports a comparison run to disk and renders the comparison table
for the console.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from .metrics import MetricSet
from ..utils.helpers import ensure_directory, safe_filename, save_object
from ..utils.logger import get_logger

RESULTS_CSV = "model_comparison.csv"
RESULTS_JSON = "model_comparison.json"
TUNING_CSV = "tuning_history.csv"
PREDICTIONS_CSV = "test_predictions.csv"
PARAMS_JSON = "selected_params.json"
MODELS_DIR = "models"


class ResultsReporter:
    """Reporter for modelComparator results."""

    def __init__(self):
        self.logger = get_logger("ResultsReporter")

    def export(
        self,
        result,
        output_dir: Union[str, Path],
        save_models: bool = False,
        run_info: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Path]:
        """
        Write every artifact of a comparison run.

        Args:
            result: ComparisonResult
            output_dir: Destination directory
            save_models: Also dump the fitted final models with joblib
            run_info: Extra fields for the JSON summary (e.g. the config)

        Returns:
            Artifact name -> written path
        """
        output_dir = ensure_directory(output_dir)
        written = {}

        results_csv = output_dir / RESULTS_CSV
        result.table.to_frame().to_csv(results_csv, index=False)
        written["results_csv"] = results_csv

        written["results_json"] = self.save_results_json(
            self.summarize(result, run_info), output_dir / RESULTS_JSON
        )

        history = [tuning.to_frame() for tuning in result.tuning_results.values()]
        if history:
            tuning_csv = output_dir / TUNING_CSV
            pd.concat(history, ignore_index=True, sort=False).to_csv(tuning_csv, index=False)
            written["tuning_csv"] = tuning_csv

        if result.predictions is not None:
            predictions_csv = output_dir / PREDICTIONS_CSV
            result.predictions.to_csv(predictions_csv, index=False)
            written["predictions_csv"] = predictions_csv

        params = {name: best.params for name, best in result.best_candidates.items()}
        written["params_json"] = self.save_results_json(params, output_dir / PARAMS_JSON)

        if save_models:
            model_dir = ensure_directory(output_dir / MODELS_DIR)
            for name, fitted in result.fitted_models.items():
                save_object(fitted, model_dir / f"{safe_filename(name)}.joblib")
            written["models_dir"] = model_dir

        self.logger.info(f"Results exported to {output_dir}")
        return written

    def summarize(self, result, run_info: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """JSON-ready summary of a run."""
        summary = {
            "generated": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "complete": result.is_complete,
            "target_metric": result.target_metric,
            "results": result.table.to_frame().to_dict(orient="records"),
            "selected": {
                name: {"candidate": best.index, "params": best.params, "cv_metrics": best.metrics}
                for name, best in result.best_candidates.items()
            },
            "failures": result.failure_messages(),
        }
        if run_info:
            summary["run"] = run_info
        return summary

    def save_results_json(self, results: Dict[str, Any], output_path: Union[str, Path]) -> Path:
        """Save results as JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        results_serializable = self._make_json_serializable(results)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(results_serializable, f, indent=2)

        self.logger.info(f"Results saved as JSON: {output_path}")
        return output_path

    def load_results(self, results_path: Union[str, Path]) -> pd.DataFrame:
        """Read an exported long results table (family, metric, value)."""
        results_path = Path(results_path)
        if results_path.is_dir():
            results_path = results_path / RESULTS_CSV
        if not results_path.exists():
            raise FileNotFoundError(f"Results file not found: {results_path}")

        table = pd.read_csv(results_path)
        missing = {"family", "metric", "value"} - set(table.columns)
        if missing:
            raise ValueError(f"{results_path} is not a comparison table, missing columns {sorted(missing)}")
        return table

    @staticmethod
    def wide_table(long_table: pd.DataFrame) -> pd.DataFrame:
        """One row per family, one column per metric, in file order."""
        if long_table.empty:
            return pd.DataFrame()
        wide = long_table.pivot(index="family", columns="metric", values="value")
        return wide.reindex(
            index=list(dict.fromkeys(long_table["family"])),
            columns=list(dict.fromkeys(long_table["metric"])),
        )

    @staticmethod
    def best_per_metric(long_table: pd.DataFrame) -> Dict[str, str]:
        """Metric -> family with the best test value."""
        best = {}
        for metric, group in long_table.groupby("metric", sort=False):
            group = group.dropna(subset=["value"])
            if group.empty:
                continue
            if MetricSet.greater_is_better(metric):
                best[metric] = group.loc[group["value"].idxmax(), "family"]
            else:
                best[metric] = group.loc[group["value"].idxmin(), "family"]
        return best

    def format_report(
        self,
        long_table: pd.DataFrame,
        failures: Optional[Dict[str, str]] = None,
        title: str = "Model comparison (test set)"
    ) -> str:
        """Console rendering of a comparison table."""
        lines: List[str] = ["=" * 60, title, "=" * 60]
        wide = self.wide_table(long_table)
        if wide.empty:
            lines.append("No family produced results.")
        else:
            lines.append(wide.to_string(float_format=lambda v: f"{v:.4f}"))
            lines.append("")
            lines.append("Best family per metric:")
            for metric, family in self.best_per_metric(long_table).items():
                lines.append(f"  {metric}: {family}")
        if failures:
            lines.append("")
            lines.append(f"INCOMPLETE: {len(failures)} families failed")
            for name, message in failures.items():
                lines.append(f"  {name}: {message}")
        return "\n".join(lines)

    def print_report(self, result) -> str:
        text = self.format_report(result.table.to_frame(), result.failure_messages())
        print(text)
        return text

    def _make_json_serializable(self, obj: Any) -> Any:
        """Convert numpy arrays and other non-serializable objects to JSON-serializable format."""
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.generic):
            return self._make_json_serializable(obj.item())
        elif isinstance(obj, float) and not np.isfinite(obj):
            return None
        elif isinstance(obj, dict):
            return {str(key): self._make_json_serializable(value) for key, value in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_json_serializable(item) for item in obj]
        elif isinstance(obj, Path):
            return str(obj)
        else:
            return obj
