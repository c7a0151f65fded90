"""
Candidate selection for modelComparator.
"""

from typing import Any, Dict

import numpy as np

from .base import CandidateResult, TuningResult
from .exceptions import NoViableCandidateError


def select_best(
    tuning_result: TuningResult,
    metric_name: str,
    greater_is_better: bool = True
) -> CandidateResult:
    """
    Pick the best non-failed candidate by one metric.

    Ties are broken by the lowest candidate index, so selection does not
    depend on the order parallel workers finished in.

    Args:
        tuning_result: Search results of one family
        metric_name: Metric to rank by, as scored by the tuner
        greater_is_better: False for loss-type metrics such as the Brier score

    Returns:
        The selected CandidateResult; its ``params`` is the chosen
        hyperparameter mapping (see ``select_best_params``)

    Raises:
        NoViableCandidateError: If every candidate failed
        ValueError: If the metric was not scored
    """
    viable = [
        c for c in tuning_result.viable()
        if np.isfinite(c.metrics.get(metric_name, float('nan')))
    ]
    if not viable:
        if tuning_result.candidates and all(
            metric_name not in c.metrics for c in tuning_result.candidates
        ):
            raise ValueError(f"Metric '{metric_name}' was not scored for '{tuning_result.family}'")
        raise NoViableCandidateError(
            f"No viable candidate for '{tuning_result.family}' "
            f"({tuning_result.n_failed}/{len(tuning_result.candidates)} failed)"
        )

    sign = 1.0 if greater_is_better else -1.0
    return min(viable, key=lambda c: (-sign * c.metrics[metric_name], c.index))


def select_best_params(
    tuning_result: TuningResult,
    metric_name: str,
    greater_is_better: bool = True
) -> Dict[str, Any]:
    """Hyperparameter mapping of the candidate chosen by ``select_best``."""
    return dict(select_best(tuning_result, metric_name, greater_is_better).params)
