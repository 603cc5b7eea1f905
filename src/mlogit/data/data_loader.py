"""
Data loading utilities for mlogit.

This module loads numeric matrices for training and prediction from CSV
files.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from mlogit.data.schema import validate_numeric_matrix
from mlogit.utils.logging_utils import get_logger

logger = get_logger(__name__)


def load_matrix(path: Path | str) -> pd.DataFrame:
    """
    Load a numeric matrix from a CSV file with a header row.

    Parameters
    ----------
    path : pathlib.Path | str
        Path to the CSV file.

    Returns
    -------
    pandas.DataFrame
        Validated numeric matrix.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Data file not found: {csv_path}")

    logger.info("Loading matrix from %s", csv_path)
    df = pd.read_csv(csv_path)
    df = validate_numeric_matrix(df)
    logger.info("Loaded %d rows x %d columns.", df.shape[0], df.shape[1])
    return df
