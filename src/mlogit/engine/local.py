"""
In-process engine that runs the multinomial scripts with scikit-learn.

Supports the two scripts the orchestration layer calls:

- MultiLogReg.dml: fits coefficients for classes 1..K-1 against the
  baseline class K. Labels <= 0 are recoded to the baseline.
- GLM-predict.dml (dfam=3): turns coefficients into per-class
  probabilities and, when labels are given, writes a statistics CSV.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd
from sklearn.linear_model import LogisticRegression
from sklearn.preprocessing import StandardScaler

from mlogit.config import (
    COEFFICIENT_OUTPUT,
    GLM_PREDICT_SCRIPT,
    MULTI_LOGISTIC_REGRESSION_SCRIPT,
    MULTINOMIAL_FAMILY,
    PROBABILITY_OUTPUT,
)
from mlogit.engine.bundle import ArgumentBundle
from mlogit.errors import EngineInvocationError
from mlogit.models.metrics import build_statistics_table
from mlogit.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Script defaults, applied when a named parameter is absent
DEFAULT_TOLERANCE = 1e-6
DEFAULT_OUTER_ITER_MAX = 100
DEFAULT_REG = 0.0


def _require_input(bundle: ArgumentBundle, name: str) -> pd.DataFrame:
    if name not in bundle.inputs:
        raise EngineInvocationError(
            f"Script {bundle.script} requires input {name!r}."
        )
    return bundle.inputs[name]


def recode_labels(
    y: pd.DataFrame | pd.Series, num_classes: int | None = None
) -> np.ndarray:
    """
    Return labels as integers 1..K with non-positive labels moved to K.

    The largest label is the baseline category; a label of 0 or -1 is
    recoded to the baseline instead. When fitting, the baseline is max+1 of
    the labels seen. When ``num_classes`` is given (a fitted model), it is
    that class count, whatever subset of classes the batch holds.
    """
    values = np.asarray(y, dtype=float).ravel()
    if values.size == 0:
        raise EngineInvocationError("Label vector is empty.")
    if np.any(np.isnan(values)) or np.any(values != np.round(values)):
        raise EngineInvocationError("Labels must be integer class numbers.")

    labels = values.astype(int)
    baseline = num_classes if num_classes is not None else labels.max() + 1
    if labels.min() <= 0:
        labels = np.where(labels <= 0, baseline, labels)
    return labels


def _fit_multilogreg(bundle: ArgumentBundle) -> Dict[str, pd.DataFrame]:
    X = _require_input(bundle, "X").to_numpy(dtype=float)
    y = recode_labels(_require_input(bundle, "y"))
    num_classes = int(y.max())

    missing = sorted(set(range(1, num_classes + 1)) - set(np.unique(y)))
    if num_classes < 2 or missing:
        raise EngineInvocationError(
            f"Labels must cover classes 1..K with K >= 2; missing {missing}."
        )

    icpt = int(bundle.param("icpt", 0))
    reg = float(bundle.param("reg", DEFAULT_REG))
    max_iter = int(bundle.param("moi", DEFAULT_OUTER_ITER_MAX))
    tol = float(bundle.param("tol", DEFAULT_TOLERANCE))

    scaler = None
    X_fit = X
    if icpt == 2:
        scaler = StandardScaler()
        X_fit = scaler.fit_transform(X)

    clf = LogisticRegression(
        C=1.0 / reg if reg > 0 else np.inf,
        fit_intercept=icpt > 0,
        max_iter=max_iter,
        tol=tol,
    )
    try:
        clf.fit(X_fit, y)
    except ValueError as exc:
        raise EngineInvocationError(f"MultiLogReg failed: {exc}") from exc

    weights = np.asarray(clf.coef_, dtype=float)
    intercepts = np.asarray(clf.intercept_, dtype=float)
    if weights.shape[0] == 1:
        # Binary fit returns only the logit of the second class
        weights = np.vstack([np.zeros_like(weights), weights])
        intercepts = np.concatenate([[0.0], intercepts])

    # Log-odds of each class against the baseline (last) class
    beta = (weights[:-1] - weights[-1]).T
    beta0 = intercepts[:-1] - intercepts[-1]

    if scaler is not None:
        beta0 = beta0 - (scaler.mean_ / scaler.scale_) @ beta
        beta = beta / scaler.scale_[:, None]

    if icpt > 0:
        beta = np.vstack([beta, beta0])

    logger.info(
        "MultiLogReg fitted %d classes on %d rows (icpt=%d, reg=%s).",
        num_classes,
        X.shape[0],
        icpt,
        reg,
    )
    return {COEFFICIENT_OUTPUT: pd.DataFrame(beta)}


def _softmax_with_baseline(eta: np.ndarray) -> np.ndarray:
    full = np.hstack([eta, np.zeros((eta.shape[0], 1))])
    full = full - full.max(axis=1, keepdims=True)
    exp = np.exp(full)
    return exp / exp.sum(axis=1, keepdims=True)


def _run_glm_predict(bundle: ArgumentBundle) -> Dict[str, pd.DataFrame]:
    family = int(bundle.param("dfam", MULTINOMIAL_FAMILY))
    if family != MULTINOMIAL_FAMILY:
        raise EngineInvocationError(
            f"Only the multinomial family (dfam={MULTINOMIAL_FAMILY}) is supported."
        )

    X = _require_input(bundle, "X").to_numpy(dtype=float)
    B = _require_input(bundle, "B_full").to_numpy(dtype=float)

    if B.shape[0] == X.shape[1] + 1:
        eta = X @ B[:-1] + B[-1]
    elif B.shape[0] == X.shape[1]:
        eta = X @ B
    else:
        raise EngineInvocationError(
            f"Coefficient rows ({B.shape[0]}) do not match "
            f"feature columns ({X.shape[1]})."
        )

    probabilities = _softmax_with_baseline(eta)
    outputs = {PROBABILITY_OUTPUT: pd.DataFrame(probabilities)}

    if bundle.param("scoring_only", "yes") == "no":
        y = recode_labels(_require_input(bundle, "Y"), num_classes=probabilities.shape[1])
        if y.max() > probabilities.shape[1]:
            raise EngineInvocationError(
                f"Label {y.max()} exceeds the model's {probabilities.shape[1]} classes."
            )
        stats_path = bundle.param("O")
        if stats_path is None:
            raise EngineInvocationError("GLM-predict requires $O for statistics.")
        stats = build_statistics_table(y - 1, probabilities)
        stats.to_csv(stats_path, header=False, index=False)
        logger.info("Wrote prediction statistics to %s", stats_path)

    return outputs


class LocalEngine:
    """Runs the supported scripts in the current process."""

    def invoke(self, bundle: ArgumentBundle) -> Dict[str, pd.DataFrame]:
        script = Path(bundle.script).name
        logger.info("Running %s in-process.", script)

        if script == MULTI_LOGISTIC_REGRESSION_SCRIPT:
            outputs = _fit_multilogreg(bundle)
        elif script == GLM_PREDICT_SCRIPT:
            outputs = _run_glm_predict(bundle)
        else:
            raise EngineInvocationError(f"Unsupported script: {bundle.script}")

        return {name: outputs[name] for name in bundle.outputs if name in outputs}
