"""
Save and load trained models with joblib.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

import joblib

from mlogit.models.model import MLogitModel
from mlogit.utils.logging_utils import get_logger
from mlogit.utils.paths import PathLike, get_model_path

logger = get_logger(__name__)


def save_model(model: MLogitModel, path: Optional[PathLike] = None) -> MLogitModel:
    """
    Save a model artifact and return a copy that records its location.

    Parameters
    ----------
    model : MLogitModel
        Model to save.
    path : str | Path | None
        Target file. If None, uses the default model path.
    """
    model_path = Path(path) if path is not None else get_model_path()
    model_path.parent.mkdir(parents=True, exist_ok=True)

    saved = replace(model, model_path=str(model_path))
    joblib.dump(saved, model_path)
    logger.info("Saved model to %s", model_path)
    return saved


def load_model(path: Optional[PathLike] = None) -> MLogitModel:
    model_path = Path(path) if path is not None else get_model_path()
    if not model_path.exists():
        raise FileNotFoundError(
            f"Model file not found at {model_path}. Train the model first."
        )
    model = joblib.load(model_path)
    logger.info("Loaded model from %s", model_path)
    return model
