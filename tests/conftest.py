import numpy as np
import pandas as pd
import pytest

from modelComparator.core.registry import ModelRegistry, build_default_registry
from modelComparator.core.search_space import LogUniform
from modelComparator.core.splitter import make_folds, make_train_test_split
from modelComparator.data.dataset import Dataset
from modelComparator.evaluation.metrics import MetricSet
from modelComparator.preprocessing.normalizer import Normalizer, PreprocessingSpec
from modelComparator.utils.config import PipelineConfig

QUICK_TREES = {"RandomForest": {"trees": 15}, "XGBoost": {"trees": 15}}


def make_frame(n_pos: int = 50, n_neg: int = 50, seed: int = 0) -> pd.DataFrame:
    """Two predictors; glucose separates the classes, age is noise."""
    rng = np.random.RandomState(seed)
    labels = np.array(["pos"] * n_pos + ["neg"] * n_neg)
    glucose = np.where(labels == "pos", 150.0, 100.0) + rng.normal(0, 20, size=len(labels))
    age = rng.uniform(21, 70, size=len(labels))
    order = rng.permutation(len(labels))
    return pd.DataFrame({
        "glucose": glucose[order],
        "age": age[order],
        "diabetes": labels[order],
    })


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def binary_frame():
    """100 records, 2 predictors, 50/50 labels."""
    return make_frame()


@pytest.fixture
def dataset(binary_frame):
    return Dataset.from_frame(binary_frame, label_column="diabetes", positive_label="pos")


@pytest.fixture
def folds(dataset):
    return make_folds(dataset, k=5, seed=123)


@pytest.fixture
def split(dataset):
    return make_train_test_split(dataset, train_fraction=0.8, seed=123)


@pytest.fixture
def metric_set():
    return MetricSet(["roc_auc", "accuracy", "sensitivity", "specificity"])


@pytest.fixture
def preprocessing():
    return PreprocessingSpec()


@pytest.fixture
def lasso_family():
    registry = ModelRegistry()
    return registry.register_family("LASSO", "lasso", search_space={"penalty": LogUniform(1e-4, 1e-1)})


@pytest.fixture
def quick_registry():
    """Default families with few trees so the forests fit quickly."""
    return build_default_registry(overrides=QUICK_TREES)


@pytest.fixture
def quick_config(tmp_path):
    return PipelineConfig(
        search_budget=3,
        n_workers=2,
        output_dir=str(tmp_path / "results"),
        log_file=None,
    )


class RecordingSpec(PreprocessingSpec):
    """Preprocessing recipe that remembers the rows every transform was fitted on."""

    def __init__(self):
        super().__init__()
        object.__setattr__(self, "fitted", [])

    def build(self) -> Normalizer:
        spec = self

        class RecordingNormalizer(Normalizer):
            def fit(self, X, y=None):
                spec.fitted.append(np.asarray(X.index))
                return super().fit(X, y)

        return RecordingNormalizer()


@pytest.fixture
def recording_spec():
    return RecordingSpec()
