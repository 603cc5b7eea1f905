"""
Global configuration for the mlogit project.

This module centralizes paths, engine script names and the fixed argument
values of the engine protocol, so you can tweak them in one place.
"""

from pathlib import Path

# Project root = folder that contains "src", "workspace", "models", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Scratch area for engine side-channel files (e.g. prediction statistics)
WORKSPACE_DIR: Path = PROJECT_ROOT / "workspace"

# Models directory
MODELS_DIR: Path = PROJECT_ROOT / "models"
DEFAULT_MODEL_FILENAME: str = "mlogit_model.joblib"

# Engine scripts
ALGORITHMS_DIR: Path = PROJECT_ROOT / "scripts" / "algorithms"
MULTI_LOGISTIC_REGRESSION_SCRIPT: str = "MultiLogReg.dml"
GLM_PREDICT_SCRIPT: str = "GLM-predict.dml"

# Reserved row name for the intercept term in the coefficient table
INTERCEPT: str = "(Intercept)"

# Engine protocol constants
OUTPUT_FORMAT: str = "csv"
COEFFICIENT_OUTPUT: str = "B_out"
PROBABILITY_OUTPUT: str = "means"
MULTINOMIAL_FAMILY: int = 3  # dfam=3 selects multinomial in GLM-predict
STATISTICS_FILENAME: str = "stats_predict.csv"
STATISTICS_COLUMNS = ["Name", "Y-column", "Scaled", "Value"]

# Engine backends: "local" runs in-process, "external" shells out
DEFAULT_ENGINE: str = "local"
EXTERNAL_ENGINE_COMMAND = ["spark-submit", "SystemML.jar"]
