"""
Schema utilities for labeled numeric matrices.

A matrix is a pandas DataFrame whose columns are features plus, for
training or evaluation data, one response column holding class numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Sequence, Tuple, Union

import pandas as pd

from mlogit.config import INTERCEPT
from mlogit.errors import ValidationError
from mlogit.utils.logging_utils import get_logger

logger = get_logger(__name__)

ResponseId = Union[Hashable, int]


@dataclass(frozen=True)
class ResponseColumn:
    """Identity of the response column: its frame label and 0-based position."""

    name: Hashable
    index: int


def resolve_response_column(df: pd.DataFrame, response: ResponseId) -> ResponseColumn:
    """
    Find the response column by name or by 0-based position.

    An int is read as a position; a ResponseColumn is looked up by label.

    Raises
    ------
    ValidationError
        If the column does not exist.
    """
    columns = list(df.columns)
    if isinstance(response, ResponseColumn):
        if response.name not in columns:
            raise ValidationError(f"Response column {response.name!r} not found in data.")
        return ResponseColumn(name=response.name, index=columns.index(response.name))

    if isinstance(response, int) and not isinstance(response, bool):
        if not 0 <= response < len(columns):
            raise ValidationError(
                f"Response index {response} is out of range for {len(columns)} columns."
            )
        return ResponseColumn(name=columns[response], index=response)

    if response not in columns:
        raise ValidationError(f"Response column {response!r} not found in data.")
    return ResponseColumn(name=response, index=columns.index(response))


def feature_columns(df: pd.DataFrame, response: ResponseColumn) -> Tuple[Hashable, ...]:
    """Return every column label except the response, in frame order."""
    return tuple(c for c in df.columns if c != response.name)


def validate_numeric_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check that every column of a matrix is numeric.

    Raises
    ------
    ValidationError
        If any column is not numeric.
    """
    non_numeric = [
        c for c in df.columns if not pd.api.types.is_numeric_dtype(df[c])
    ]
    if non_numeric:
        raise ValidationError(
            f"Matrix columns must be numeric; recode these first: {non_numeric}"
        )
    return df


def split_xy(df: pd.DataFrame, response_name: Hashable) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split a labeled matrix into features X and a one-column label matrix Y.
    """
    if response_name not in df.columns:
        raise ValidationError(f"Response column {response_name!r} not found in data.")
    X = df.drop(columns=[response_name])
    Y = df[[response_name]]
    return X, Y


def model_features_match_data(
    coefficients: pd.DataFrame,
    data: pd.DataFrame,
    intercept: bool,
    label_column_name: Hashable,
    y_idx: int,
) -> bool:
    """
    Decide whether prediction data carries ground-truth labels.

    Returns True when ``data`` holds the model's features plus the response
    column, False when it holds exactly the features.

    Raises
    ------
    ValidationError
        If the data columns fit neither shape.
    """
    feature_names: Sequence[Hashable] = list(coefficients.index)
    if intercept and feature_names and feature_names[-1] == INTERCEPT:
        feature_names = feature_names[:-1]
    n_features = len(feature_names)

    columns = list(data.columns)
    if label_column_name in columns and len(columns) == n_features + 1:
        if columns.index(label_column_name) != y_idx:
            logger.warning(
                "Response column %r is at position %d, model was trained with %d.",
                label_column_name,
                columns.index(label_column_name),
                y_idx,
            )
        return True

    if len(columns) == n_features:
        return False

    raise ValidationError(
        f"Data has {len(columns)} columns; the model expects {n_features} "
        f"features, optionally plus response column {label_column_name!r}."
    )
