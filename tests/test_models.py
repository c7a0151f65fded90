import numpy as np
import pytest

from modelComparator.core.base import EstimatorKind
from modelComparator.models import (
    ElasticNetClassifier,
    LassoClassifier,
    ModelFactory,
    RandomForestClassifier,
    RidgeClassifier,
    XGBoostClassifier,
)


@pytest.mark.parametrize("kind, cls", [
    ("lasso", LassoClassifier),
    ("ridge", RidgeClassifier),
    (EstimatorKind.ELASTIC_NET, ElasticNetClassifier),
    ("random_forest", RandomForestClassifier),
    ("xgboost", XGBoostClassifier),
])
def test_factory_creates_wrapper(kind, cls):
    model = ModelFactory.create_model(kind, {}, random_state=1)
    assert isinstance(model, cls)
    assert model.random_state == 1


def test_penalty_maps_to_inverse_strength():
    model = LassoClassifier(penalty=0.01)
    assert model.inverse_strength(200) == pytest.approx(0.5)


def test_wrappers_reject_unknown_parameters():
    with pytest.raises(ValueError):
        RidgeClassifier(mixture=0.5)
    with pytest.raises(ValueError):
        ElasticNetClassifier(mixture=1.5)
    with pytest.raises(ValueError):
        RandomForestClassifier(min_n=1)


def test_lasso_zeroes_noise_coefficients(dataset):
    X = (dataset.features - dataset.features.mean()) / dataset.features.std()
    model = LassoClassifier(penalty=0.1, random_state=0).fit(X, dataset.labels)
    assert model.get_selected_features() == ["glucose"]


def test_forest_caps_mtry_at_predictor_count(dataset):
    model = RandomForestClassifier(trees=10, mtry=7, random_state=0).fit(dataset.features, dataset.labels)
    assert model.rf_.max_features == 2
    assert model.get_feature_names_by_importance(top_k=1) == ["glucose"]


def test_positive_proba_is_event_probability(dataset):
    model = XGBoostClassifier(trees=10, tree_depth=2, random_state=0).fit(dataset.features, dataset.labels)
    proba = model.positive_proba(dataset.features)
    assert proba.shape == (len(dataset),)
    assert proba[dataset.labels == 1].mean() > proba[dataset.labels == 0].mean()
    assert np.all((proba >= 0) & (proba <= 1))


def test_single_class_training_rejected(dataset):
    with pytest.raises(ValueError):
        RidgeClassifier().fit(dataset.features, np.ones(len(dataset), dtype=int))
