# path: src/mlogit/models/metrics.py
"""
Goodness-of-fit statistics for multinomial predictions.
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, log_loss

from mlogit.config import STATISTICS_COLUMNS


def compute_classification_metrics(
    y_true: np.ndarray,
    y_proba: np.ndarray,
) -> Dict[str, Any]:
    """
    Compute a set of basic classification metrics.

    Parameters
    ----------
    y_true : np.ndarray
        True class indices (0..n_classes-1).
    y_proba : np.ndarray
        Predicted probabilities with shape (n_samples, n_classes). Column j
        corresponds to class index j.

    Returns
    -------
    dict
        {
          "accuracy": float,
          "log_loss": float,
          "log_likelihood": float,
          "baseline_accuracy": float,
          "confusion_matrix": list[list[int]],
        }
    """
    num_classes = y_proba.shape[1]
    y_pred = np.argmax(y_proba, axis=1)

    acc = accuracy_score(y_true, y_pred)

    # Majority-class baseline accuracy
    counts = np.bincount(y_true, minlength=num_classes)
    if counts.sum() > 0:
        baseline_acc = counts.max() / counts.sum()
    else:
        baseline_acc = float("nan")

    try:
        ll = log_loss(y_true, y_proba, labels=np.arange(num_classes))
    except ValueError:
        # Empty input or a single row
        ll = float("nan")

    cm = confusion_matrix(
        y_true,
        y_pred,
        labels=np.arange(num_classes),
    )

    return {
        "accuracy": float(acc),
        "log_loss": float(ll),
        "log_likelihood": float(-ll * len(y_true)),
        "baseline_accuracy": float(baseline_acc),
        "confusion_matrix": cm.tolist(),
    }


def build_statistics_table(y_true: np.ndarray, y_proba: np.ndarray) -> pd.DataFrame:
    """
    Lay metrics out as rows of ``Name, Y-column, Scaled, Value``.

    Whole-model statistics leave ``Y-column`` empty; per-class statistics
    use the 1-based class number and leave ``Scaled`` empty. Precision and
    recall come from the confusion matrix and are NaN for a class that is
    never predicted (precision) or never observed (recall).
    """
    metrics = compute_classification_metrics(y_true, y_proba)
    cm = np.asarray(metrics["confusion_matrix"], dtype=float)
    hits = np.diag(cm)
    with np.errstate(divide="ignore", invalid="ignore"):
        precision = hits / cm.sum(axis=0)
        recall = hits / cm.sum(axis=1)
    rows: List[list] = [
        ["LOGLHOOD", "", "FALSE", metrics["log_likelihood"]],
        ["LOG_LOSS", "", "FALSE", metrics["log_loss"]],
        ["ACCURACY", "", "FALSE", metrics["accuracy"]],
        ["BASELINE_ACCURACY", "", "FALSE", metrics["baseline_accuracy"]],
    ]

    one_hot = np.eye(y_proba.shape[1])[y_true]
    avg_tot = one_hot.mean(axis=0)
    avg_res = (one_hot - y_proba).mean(axis=0)
    for k in range(y_proba.shape[1]):
        rows.append(["AVG_TOT_Y", k + 1, "", float(avg_tot[k])])
        rows.append(["AVG_RES_Y", k + 1, "", float(avg_res[k])])
        rows.append(["PRECISION", k + 1, "", float(precision[k])])
        rows.append(["RECALL", k + 1, "", float(recall[k])])

    return pd.DataFrame(rows, columns=STATISTICS_COLUMNS)
