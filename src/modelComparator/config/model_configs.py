"""
Model family configurations for modelComparator.

Each entry declares the estimator kind, the parameters held fixed and the
tunable search space. ``penalty`` is the glmnet-style regularisation
strength, ``mixture`` the share of L1 in the penalty, ``mtry`` the number of
predictors tried per split and ``min_n`` the minimum node size for a split.
"""

from ..core.base import EstimatorKind
from ..core.search_space import FeatureCount, IntRange, LogUniform, Uniform

PENALTY_RANGE = LogUniform(1e-10, 1.0)

MODEL_CONFIGS = {
    "LASSO": {
        "kind": EstimatorKind.LASSO,
        "fixed_params": {},
        "search_space": {
            "penalty": PENALTY_RANGE,
        },
    },

    "Ridge": {
        "kind": EstimatorKind.RIDGE,
        "fixed_params": {},
        "search_space": {
            "penalty": PENALTY_RANGE,
        },
    },

    "ElasticNet": {
        "kind": EstimatorKind.ELASTIC_NET,
        "fixed_params": {},
        "search_space": {
            "penalty": PENALTY_RANGE,
            "mixture": Uniform(0.05, 1.0),
        },
    },

    "RandomForest": {
        "kind": EstimatorKind.RANDOM_FOREST,
        "fixed_params": {
            "trees": 500,
        },
        "search_space": {
            "mtry": FeatureCount(1),
            "min_n": IntRange(2, 40),
        },
    },

    "XGBoost": {
        "kind": EstimatorKind.XGBOOST,
        "fixed_params": {
            "trees": 500,
        },
        "search_space": {
            "learn_rate": LogUniform(10 ** -3, 10 ** -0.5),
            "tree_depth": IntRange(1, 15),
        },
    },
}
