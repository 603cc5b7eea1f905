"""
Well-formedness checks run before any engine invocation.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Sequence
from typing import Any

import pandas as pd

from mlogit.errors import MissingDataError, ValidationError
from mlogit.models.params import TrainingConfig


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_training_config(config: TrainingConfig, data: Any) -> TrainingConfig:
    """
    Check a training configuration and return it unchanged.

    The first violated rule raises; there is no error aggregation.

    Raises
    ------
    MissingDataError
        If ``data`` is None.
    ValidationError
        For data that is not a DataFrame, a wrongly typed or non-finite
        parameter, a negative iteration cap or regularization strength, or
        rescaling without an intercept.
    """
    if not isinstance(config.intercept, bool):
        raise ValidationError(f"Parameter intercept must be logical, got {config.intercept!r}.")
    if not isinstance(config.shift_and_rescale, bool):
        raise ValidationError(
            f"Parameter shift_and_rescale must be logical, got {config.shift_and_rescale!r}."
        )

    for name in ("tolerance", "reg_lambda"):
        value = getattr(config, name)
        if value is not None and not _is_real(value):
            raise ValidationError(f"Parameter {name} must be numeric, got {value!r}.")
        if value is not None and not math.isfinite(value):
            raise ValidationError(f"Parameter {name} must be finite, got {value!r}.")
    for name in ("outer_iter_max", "inner_iter_max"):
        value = getattr(config, name)
        if value is not None and not _is_integer(value):
            raise ValidationError(f"Parameter {name} must be an integer, got {value!r}.")

    labels = config.label_names
    if isinstance(labels, str) or not isinstance(labels, Sequence) or not all(
        isinstance(label, str) for label in labels
    ):
        raise ValidationError(f"Parameter label_names must be a sequence of strings, got {labels!r}.")

    if data is None:
        raise MissingDataError("Must provide data.")
    if not isinstance(data, pd.DataFrame):
        raise ValidationError(f"Data must be a pandas DataFrame, got {type(data).__name__}.")

    if config.inner_iter_max is not None and config.inner_iter_max < 0:
        raise ValidationError("Parameter inner_iter_max must be a natural number.")
    if config.outer_iter_max is not None and config.outer_iter_max < 0:
        raise ValidationError("Parameter outer_iter_max must be a natural number.")
    if config.reg_lambda is not None and config.reg_lambda < 0:
        raise ValidationError("Parameter reg_lambda must be a non-negative number.")
    if not config.intercept and config.shift_and_rescale:
        raise ValidationError("shift_and_rescale should be False when intercept is False.")

    return config
