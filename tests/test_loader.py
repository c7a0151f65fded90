import numpy as np
import pandas as pd
import pytest

from modelComparator.core.exceptions import DataValidationError
from modelComparator.data.dataset import Dataset
from modelComparator.data.loader import DataLoader, clean_names

PIMA_COLUMNS = ["Pregnant", "Glucose", "Pressure", "Triceps", "Insulin", "Mass", "Pedigree", "Age", "Diabetes"]


def pima_like(tmp_path, rows):
    path = tmp_path / "pima.csv"
    pd.DataFrame(rows, columns=PIMA_COLUMNS).to_csv(path, index=False)
    return path


def test_clean_names():
    assert clean_names(["Glucose", "bloodPressure", "Body Mass Index", "2h insulin", "Age", "age"]) == [
        "glucose", "blood_pressure", "body_mass_index", "x2h_insulin", "age", "age_2",
    ]


def test_load_drops_incomplete_rows(tmp_path):
    path = pima_like(tmp_path, [
        [6, 148, 72, 35, 0, 33.6, 0.627, 50, "pos"],
        [1, 85, 66, 29, 0, 26.6, 0.351, 31, "neg"],
        [8, 183, 64, None, 0, 23.3, 0.672, 32, "pos"],
        [1, 89, 66, 23, 94, 28.1, 0.167, 21, "neg"],
    ])
    loader = DataLoader()
    dataset = loader.load_data(path, label_column="diabetes", positive_label="pos")

    assert len(dataset) == 3
    assert loader.n_dropped_ == 1
    assert dataset.feature_names == [c.lower() for c in PIMA_COLUMNS[:-1]]
    assert dataset.labels.tolist() == [1, 0, 0]
    assert dataset.class_counts() == {"neg": 2, "pos": 1}


def test_zero_as_missing_columns(tmp_path):
    path = pima_like(tmp_path, [
        [6, 148, 72, 35, 0, 33.6, 0.627, 50, "pos"],
        [1, 85, 66, 29, 0, 26.6, 0.351, 31, "neg"],
        [1, 89, 66, 23, 94, 28.1, 0.167, 21, "neg"],
        [0, 137, 40, 35, 168, 43.1, 2.288, 33, "pos"],
    ])
    loader = DataLoader()
    dataset = loader.load_data(path, "diabetes", missing_zero_columns=["insulin"])
    assert len(dataset) == 2
    # pregnant = 0 is a valid value and is kept
    assert dataset.features["pregnant"].tolist() == [1, 0]


def test_unknown_zero_column(tmp_path):
    path = pima_like(tmp_path, [[6, 148, 72, 35, 0, 33.6, 0.627, 50, "pos"]])
    with pytest.raises(ValueError):
        DataLoader().load_data(path, "diabetes", missing_zero_columns=["skin"])


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataLoader().load_data(tmp_path / "absent.csv", "diabetes")


def test_dataset_positive_label_defaults_to_last_class(binary_frame):
    dataset = Dataset.from_frame(binary_frame, "diabetes")
    assert dataset.positive_label == "pos" and dataset.negative_label == "neg"
    assert dataset.n_features == 2


def test_dataset_is_read_only(dataset):
    with pytest.raises(ValueError):
        dataset.labels[0] = 1


def test_rows_keep_positions(dataset):
    rows = dataset.rows([5, 2])
    assert rows.index.tolist() == [5, 2]
    rows.iloc[0, 0] = -1
    assert dataset.features.iloc[5, 0] != -1


@pytest.mark.parametrize("mutate, message", [
    (lambda f: f.drop(columns=["diabetes"]), "not found"),
    (lambda f: f.assign(glucose=np.nan), "Missing values"),
    (lambda f: f.assign(diabetes="pos"), ""),
    (lambda f: f.assign(diabetes=np.where(np.arange(len(f)) % 3 == 0, "a", np.where(np.arange(len(f)) % 3 == 1, "b", "c"))), ""),
    (lambda f: f.iloc[0:0], "empty"),
    (lambda f: f.assign(age=np.inf), "infinite"),
])
def test_validation_errors(binary_frame, mutate, message):
    with pytest.raises(DataValidationError, match=message):
        Dataset.from_frame(mutate(binary_frame), "diabetes")


def test_unknown_positive_label(binary_frame):
    with pytest.raises(DataValidationError):
        Dataset.from_frame(binary_frame, "diabetes", positive_label="yes")
