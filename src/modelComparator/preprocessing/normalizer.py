"""
Shared preprocessing recipe for modelComparator.

``PreprocessingSpec`` is the declarative recipe every model family uses:
normalize numeric predictors to zero mean and unit variance and, optionally,
one-hot encode categorical predictors. ``Normalizer`` is one fitted instance
of that recipe; a new one is built for every fold and for the final fit, so
its statistics only ever come from the rows passed to ``fit``.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from ..core.base import BasePreprocessor
from ..utils.logger import get_logger


@dataclass(frozen=True)
class PreprocessingSpec:
    """Declarative preprocessing recipe shared by all model families."""
    normalize: bool = True
    encode_categorical: bool = True

    def build(self) -> 'Normalizer':
        """A fresh, unfitted transform for this recipe."""
        return Normalizer(normalize=self.normalize, encode_categorical=self.encode_categorical)


class Normalizer(BasePreprocessor):
    """Center and scale numeric predictors; one-hot encode categorical ones."""

    def __init__(self, normalize: bool = True, encode_categorical: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.normalize = normalize
        self.encode_categorical = encode_categorical
        self.logger = get_logger("Normalizer")

        self.column_transformer_: Optional[ColumnTransformer] = None
        self.numeric_columns_: List[str] = []
        self.categorical_columns_: List[str] = []
        self.fitted_index_: Optional[pd.Index] = None

    def fit(self, X: pd.DataFrame, y: Optional[np.ndarray] = None) -> 'Normalizer':
        """Estimate centering/scaling (and category levels) from X only."""
        self.numeric_columns_ = X.select_dtypes(include=[np.number]).columns.tolist()
        self.categorical_columns_ = [c for c in X.columns if c not in self.numeric_columns_]
        if self.categorical_columns_ and not self.encode_categorical:
            raise ValueError(f"Non-numeric predictors need encode_categorical=True: {self.categorical_columns_}")

        transformers = []
        if self.numeric_columns_:
            numeric = StandardScaler() if self.normalize else 'passthrough'
            transformers.append(('numeric', numeric, self.numeric_columns_))
        if self.categorical_columns_:
            transformers.append((
                'categorical',
                OneHotEncoder(handle_unknown='ignore', sparse_output=False),
                self.categorical_columns_,
            ))

        self.column_transformer_ = ColumnTransformer(transformers, verbose_feature_names_out=False)
        self.column_transformer_.set_output(transform='pandas')
        self.column_transformer_.fit(X)

        self.fitted_index_ = X.index.copy()
        self.is_fitted = True
        self.logger.debug(f"Fitted on {len(X)} rows: {len(self.numeric_columns_)} numeric, "
                          f"{len(self.categorical_columns_)} categorical predictors")
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Apply the fitted recipe."""
        if not self.is_fitted:
            raise ValueError("Preprocessor must be fitted before transforming")
        return self.column_transformer_.transform(X)

    @property
    def means_(self) -> Optional[pd.Series]:
        """Per-column training means of the numeric predictors."""
        if not self.is_fitted or not self.normalize or not self.numeric_columns_:
            return None
        scaler = self.column_transformer_.named_transformers_['numeric']
        return pd.Series(scaler.mean_, index=self.numeric_columns_)
