from typing import Dict, List

import numpy as np
import pandas as pd
import pytest
from sklearn.datasets import load_iris

from mlogit.engine.bundle import ArgumentBundle
from mlogit.models.metrics import build_statistics_table


class RecordingEngine:
    """Engine double that records bundles and replays canned outputs."""

    def __init__(self, outputs: Dict[str, pd.DataFrame], write_statistics: bool = True):
        self.outputs = outputs
        self.write_statistics = write_statistics
        self.bundles: List[ArgumentBundle] = []

    def invoke(self, bundle: ArgumentBundle) -> Dict[str, pd.DataFrame]:
        self.bundles.append(bundle)
        if self.write_statistics and bundle.param("scoring_only") == "no":
            y = np.array([0, 1])
            proba = np.array([[0.7, 0.2, 0.1], [0.1, 0.8, 0.1]])
            build_statistics_table(y, proba).to_csv(
                bundle.param("O"), header=False, index=False
            )
        return dict(self.outputs)

    @property
    def last(self) -> ArgumentBundle:
        return self.bundles[-1]


@pytest.fixture
def iris_df() -> pd.DataFrame:
    """Iris features with the species recoded to classes 1..3."""
    iris = load_iris(as_frame=True)
    df = iris.data.copy()
    df.columns = ["sepal_length", "sepal_width", "petal_length", "petal_width"]
    df["species"] = iris.target + 1
    return df


@pytest.fixture
def small_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "x1": [0.1, 0.4, 0.3, 0.9],
            "x2": [1.0, 0.5, 0.2, 0.7],
            "y": [1, 2, 3, 1],
        }
    )
