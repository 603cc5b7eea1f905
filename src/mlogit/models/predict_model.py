"""
Score or evaluate a trained MLogitModel on new data.

If the data carries the model's response column, the model is evaluated:
probabilities plus goodness-of-fit statistics are returned. Otherwise only
per-class probabilities are computed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd

from mlogit.config import (
    GLM_PREDICT_SCRIPT,
    MULTINOMIAL_FAMILY,
    OUTPUT_FORMAT,
    PROBABILITY_OUTPUT,
    STATISTICS_COLUMNS,
)
from mlogit.data.schema import model_features_match_data, split_xy
from mlogit.engine.base import Engine, EngineOutputs, get_engine
from mlogit.engine.bundle import ArgumentBundle
from mlogit.errors import HydrationError, ValidationError
from mlogit.models.model import MLogitModel
from mlogit.utils.logging_utils import get_logger
from mlogit.utils.paths import PathLike, get_script_path, get_statistics_path

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class ScoringRequest:
    """Prediction without ground truth."""

    features: pd.DataFrame
    mode = "scoring"


@dataclass(frozen=True, eq=False)
class EvaluationRequest:
    """Prediction against known labels."""

    features: pd.DataFrame
    labels: pd.DataFrame
    mode = "evaluation"


PredictionRequest = Union[ScoringRequest, EvaluationRequest]


@dataclass(frozen=True, eq=False)
class PredictionResult:
    """Per-class probabilities and, in evaluation mode, statistics."""

    probabilities: pd.DataFrame
    statistics: Optional[pd.DataFrame] = None

    @property
    def mode(self) -> str:
        return "scoring" if self.statistics is None else "evaluation"

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {"probabilities": self.probabilities}
        if self.statistics is not None:
            output["statistics"] = self.statistics
        return output


def classify_prediction_request(model: MLogitModel, data: pd.DataFrame) -> PredictionRequest:
    """Decide once whether ``data`` is scored or evaluated."""
    testing = model_features_match_data(
        model.coef(),
        data,
        model.intercept,
        model.label_column_name,
        model.y_idx,
    )
    if testing:
        X, Y = split_xy(data, model.y_col_name)
        return EvaluationRequest(features=X, labels=Y)
    return ScoringRequest(features=data)


def build_prediction_args(
    model: MLogitModel,
    request: PredictionRequest,
    statistics_path: PathLike,
) -> ArgumentBundle:
    """Build the GLM-predict argument bundle for one request."""
    bundle = (
        ArgumentBundle(script=get_script_path(GLM_PREDICT_SCRIPT))
        .with_inputs(B_full=model.coef())
        .with_outputs(PROBABILITY_OUTPUT)
        .with_params(O=str(statistics_path), dfam=MULTINOMIAL_FAMILY, fmt=OUTPUT_FORMAT)
    )

    if isinstance(request, EvaluationRequest):
        return bundle.with_inputs(X=request.features, Y=request.labels).with_params(
            scoring_only="no"
        )
    return bundle.with_inputs(X=request.features).with_params(scoring_only="yes")


def hydrate_probabilities(
    outputs: EngineOutputs, model: MLogitModel, index: pd.Index
) -> pd.DataFrame:
    if PROBABILITY_OUTPUT not in outputs:
        raise HydrationError(
            f"Engine output {PROBABILITY_OUTPUT!r} is missing; got {sorted(outputs)}."
        )
    probabilities = pd.DataFrame(outputs[PROBABILITY_OUTPUT]).copy()
    if probabilities.shape[1] != len(model.label_names):
        raise HydrationError(
            f"Engine returned {probabilities.shape[1]} probability columns for "
            f"{len(model.label_names)} labels."
        )
    if len(probabilities) != len(index):
        raise HydrationError(
            f"Engine returned {len(probabilities)} probability rows for {len(index)} input rows."
        )
    probabilities.columns = list(model.label_names)
    probabilities.index = index
    return probabilities


def read_statistics(path: PathLike) -> pd.DataFrame:
    """Read the headerless statistics file the engine wrote."""
    stats_path = Path(path)
    if not stats_path.exists():
        raise HydrationError(f"Engine did not write statistics to {stats_path}.")
    return pd.read_csv(stats_path, header=None, names=STATISTICS_COLUMNS)


def predict_mlogit(
    model: MLogitModel,
    data: pd.DataFrame,
    engine: Optional[Engine] = None,
    workspace: Optional[PathLike] = None,
) -> PredictionResult:
    """
    Compute per-class probabilities for ``data``.

    Parameters
    ----------
    model : MLogitModel
        A trained model.
    data : pandas.DataFrame
        Features, optionally with the model's response column.
    engine : Engine | None
        Engine backend. If None, uses the configured default.
    workspace : str | Path | None
        Directory for the statistics file. If None, uses the workspace dir.

    Returns
    -------
    PredictionResult
        Probabilities with one column per label name; statistics only when
        ``data`` carried labels.

    Raises
    ------
    ValidationError
        If ``data`` is not a DataFrame or does not fit the model.
    """
    if not isinstance(data, pd.DataFrame):
        raise ValidationError(f"Data must be a pandas DataFrame, got {type(data).__name__}.")

    logger.info("Predicting labels using multinomial logistic regression model on data.")

    request = classify_prediction_request(model, data)
    logger.info("Prediction mode: %s (%d rows).", request.mode, len(data))

    statistics_path = get_statistics_path(workspace)
    bundle = build_prediction_args(model, request, statistics_path)
    logger.debug("GLM-predict arguments: %s", dict(bundle.params))

    engine = engine if engine is not None else get_engine()
    try:
        outputs = engine.invoke(bundle)
        probabilities = hydrate_probabilities(outputs, model, data.index)

        statistics = None
        if isinstance(request, EvaluationRequest):
            statistics = read_statistics(statistics_path)
    finally:
        statistics_path.unlink(missing_ok=True)

    return PredictionResult(probabilities=probabilities, statistics=statistics)
