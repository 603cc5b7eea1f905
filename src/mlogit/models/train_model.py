"""
Train a multinomial logistic regression model through the engine.

Usage (from Python):

    from mlogit.models.train_model import train_mlogit
    model = train_mlogit(df, "Species", label_names=["Setosa", "Versicolor", "Virginica"])

This will:
- Validate the training parameters
- Encode them into the MultiLogReg script's argument bundle
- Invoke the engine
- Hydrate the returned coefficients into an MLogitModel
"""

from __future__ import annotations

from dataclasses import replace
from typing import Hashable, Optional, Sequence

import pandas as pd

from mlogit.config import (
    COEFFICIENT_OUTPUT,
    MULTI_LOGISTIC_REGRESSION_SCRIPT,
    OUTPUT_FORMAT,
)
from mlogit.data.schema import (
    ResponseColumn,
    feature_columns,
    resolve_response_column,
    split_xy,
    validate_numeric_matrix,
)
from mlogit.engine.base import Engine, EngineOutputs, get_engine
from mlogit.engine.bundle import ArgumentBundle
from mlogit.errors import HydrationError
from mlogit.models.model import MLogitModel
from mlogit.models.params import TrainingConfig
from mlogit.models.validation import validate_training_config
from mlogit.utils.logging_utils import get_logger
from mlogit.utils.paths import get_script_path

logger = get_logger(__name__)


def encode_intercept(intercept: bool, shift_and_rescale: bool) -> int:
    """
    Map the intercept settings to the script's ``icpt`` code.

    0 = no intercept, 1 = intercept, 2 = intercept with shift and rescale.
    """
    if not intercept:
        return 0
    return 2 if shift_and_rescale else 1


def prepare_training_config(config: TrainingConfig, data: pd.DataFrame) -> TrainingConfig:
    """
    Resolve the response column and feature names against the data schema.
    """
    response = resolve_response_column(data, config.response)
    return replace(
        config,
        response=response,
        feature_names=feature_columns(data, response),
        label_names=tuple(config.label_names),
    )


def build_training_args(config: TrainingConfig, data: pd.DataFrame) -> ArgumentBundle:
    """
    Build the MultiLogReg argument bundle for a prepared configuration.

    Optional parameters are only added when supplied, so the script's own
    defaults apply otherwise.
    """
    X, y = split_xy(data, config.response.name)

    bundle = (
        ArgumentBundle(script=get_script_path(MULTI_LOGISTIC_REGRESSION_SCRIPT))
        .with_inputs(X=X, y=y)
        .with_params(
            icpt=encode_intercept(config.intercept, config.shift_and_rescale),
            fmt=OUTPUT_FORMAT,
        )
        .with_outputs(COEFFICIENT_OUTPUT)
    )

    if config.reg_lambda is not None:
        bundle = bundle.with_params(reg=config.reg_lambda)
    if config.outer_iter_max is not None:
        bundle = bundle.with_params(moi=config.outer_iter_max)
    if config.inner_iter_max is not None:
        bundle = bundle.with_params(mii=config.inner_iter_max)
    if config.tolerance is not None:
        bundle = bundle.with_params(tol=config.tolerance)

    return bundle


def hydrate_model(outputs: EngineOutputs, config: TrainingConfig) -> MLogitModel:
    """
    Turn the raw coefficient output of a training run into an MLogitModel.

    Raises
    ------
    HydrationError
        If the coefficient output is missing or its shape disagrees with
        the feature names or the supplied label names.
    """
    if COEFFICIENT_OUTPUT not in outputs:
        raise HydrationError(
            f"Engine output {COEFFICIENT_OUTPUT!r} is missing; got {sorted(outputs)}."
        )
    beta = pd.DataFrame(outputs[COEFFICIENT_OUTPUT]).copy()

    num_columns = beta.shape[1]
    if num_columns == 0:
        raise HydrationError("Coefficient table has no columns.")
    classes = num_columns + 1

    response: ResponseColumn = config.response

    if config.label_names:
        if len(config.label_names) != classes:
            raise HydrationError(
                f"Got {len(config.label_names)} label names for a model with "
                f"{classes} classes."
            )
        label_names = tuple(config.label_names)
    else:
        label_names = tuple(f"class:{i}" for i in range(1, classes + 1))

    # The baseline class has no coefficient column
    beta.columns = list(label_names[: classes - 1])

    row_names = config.model_feature_names
    if len(row_names) != beta.shape[0]:
        raise HydrationError(
            f"Coefficient table has {beta.shape[0]} rows; expected "
            f"{len(row_names)} for features {list(row_names)}."
        )
    beta.index = list(row_names)

    return MLogitModel(
        coefficients=beta,
        classes=classes,
        label_names=label_names,
        feature_names=config.feature_names,
        y_idx=response.index,
        y_col_name=response.name,
        label_column_name=response.name,
        intercept=config.intercept,
        shift_and_rescale=config.shift_and_rescale,
        model_path="",
        transform_path="",
        call=config.describe_call(),
    )


def train_mlogit(
    data: Optional[pd.DataFrame],
    response: Hashable,
    intercept: bool = True,
    shift_and_rescale: bool = False,
    tolerance: Optional[float] = None,
    outer_iter_max: Optional[int] = None,
    inner_iter_max: Optional[int] = None,
    reg_lambda: Optional[float] = None,
    label_names: Sequence[str] = (),
    engine: Optional[Engine] = None,
) -> MLogitModel:
    """
    Fit a multinomial logistic regression model.

    The largest class number is the baseline category; a label of 0 or -1,
    if present, is the baseline instead. Classes are numbered 1..K.

    Parameters
    ----------
    data : pandas.DataFrame
        Numeric training matrix including the response column.
    response : Hashable
        Response column label, or 0-based position when an int.
    intercept, shift_and_rescale, tolerance, outer_iter_max, inner_iter_max,
    reg_lambda, label_names
        See TrainingConfig.
    engine : Engine | None
        Engine backend. If None, uses the configured default.

    Returns
    -------
    MLogitModel
        The hydrated model.
    """
    config = TrainingConfig(
        intercept=intercept,
        shift_and_rescale=shift_and_rescale,
        tolerance=tolerance,
        outer_iter_max=outer_iter_max,
        inner_iter_max=inner_iter_max,
        reg_lambda=reg_lambda,
        label_names=label_names,
        response=response,
    )
    validate_training_config(config, data)
    validate_numeric_matrix(data)
    config = prepare_training_config(config, data)

    logger.info(
        "Training multinomial logistic regression on %d rows, %d features (response=%s).",
        len(data),
        len(config.feature_names),
        config.response.name,
    )

    bundle = build_training_args(config, data)
    logger.debug("MultiLogReg arguments: %s", dict(bundle.params))
    engine = engine if engine is not None else get_engine()
    outputs = engine.invoke(bundle)

    model = hydrate_model(outputs, config)
    logger.info("Trained model with %d classes.", model.classes)
    return model
