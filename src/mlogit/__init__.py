"""
mlogit: orchestration of multinomial logistic regression on a matrix engine.
"""

from mlogit.errors import (
    EngineInvocationError,
    HydrationError,
    MissingDataError,
    MLogitError,
    ValidationError,
)
from mlogit.models.model import MLogitModel
from mlogit.models.predict_model import PredictionResult, predict_mlogit
from mlogit.models.train_model import train_mlogit

__all__ = [
    "EngineInvocationError",
    "HydrationError",
    "MissingDataError",
    "MLogitError",
    "MLogitModel",
    "PredictionResult",
    "ValidationError",
    "predict_mlogit",
    "train_mlogit",
]
