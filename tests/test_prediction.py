from pathlib import Path

import pandas as pd
import pytest

from mlogit.config import INTERCEPT, STATISTICS_COLUMNS
from mlogit.errors import HydrationError, ValidationError
from mlogit.models.predict_model import (
    EvaluationRequest,
    ScoringRequest,
    classify_prediction_request,
    predict_mlogit,
)
from mlogit.models.train_model import train_mlogit

from conftest import RecordingEngine

PROBS = pd.DataFrame([[0.2, 0.3, 0.5]] * 4)


@pytest.fixture
def model(small_df):
    beta = pd.DataFrame([[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]])
    return train_mlogit(
        small_df, "y", label_names=["A", "B", "C"], engine=RecordingEngine({"B_out": beta})
    )


def test_scoring_without_response_column(model, small_df, tmp_path: Path):
    engine = RecordingEngine({"means": PROBS})
    result = predict_mlogit(model, small_df[["x1", "x2"]], engine=engine, workspace=tmp_path)

    bundle = engine.last
    assert bundle.params["$scoring_only"] == "yes"
    assert "X" in bundle.inputs and "Y" not in bundle.inputs
    assert bundle.params["$dfam"] == 3
    assert bundle.params["$fmt"] == "csv"
    assert bundle.outputs == ("means",)
    assert list(bundle.inputs["B_full"].index) == ["x1", "x2", INTERCEPT]

    assert result.mode == "scoring"
    assert result.statistics is None
    assert "statistics" not in result.to_dict()
    assert list(result.probabilities.columns) == ["A", "B", "C"]


def test_evaluation_with_response_column(model, small_df, tmp_path: Path):
    engine = RecordingEngine({"means": PROBS})
    result = predict_mlogit(model, small_df, engine=engine, workspace=tmp_path)

    bundle = engine.last
    assert bundle.params["$scoring_only"] == "no"
    assert list(bundle.inputs["X"].columns) == ["x1", "x2"]
    assert list(bundle.inputs["Y"].columns) == ["y"]

    assert result.mode == "evaluation"
    assert list(result.statistics.columns) == STATISTICS_COLUMNS
    assert "ACCURACY" in set(result.statistics["Name"])
    assert not Path(bundle.params["$O"]).exists()


def test_request_classification_is_a_tagged_union(model, small_df):
    assert isinstance(classify_prediction_request(model, small_df), EvaluationRequest)
    assert isinstance(classify_prediction_request(model, small_df[["x1", "x2"]]), ScoringRequest)


def test_misaligned_data_fails(model):
    with pytest.raises(ValidationError):
        classify_prediction_request(model, pd.DataFrame({"x1": [1.0]}))


def test_statistics_paths_are_unique_per_call(model, small_df, tmp_path: Path):
    engine = RecordingEngine({"means": PROBS})
    predict_mlogit(model, small_df, engine=engine, workspace=tmp_path)
    predict_mlogit(model, small_df, engine=engine, workspace=tmp_path)
    paths = {b.params["$O"] for b in engine.bundles}
    assert len(paths) == 2


def test_missing_probability_output(model, small_df, tmp_path: Path):
    with pytest.raises(HydrationError, match="means"):
        predict_mlogit(model, small_df[["x1", "x2"]], engine=RecordingEngine({}), workspace=tmp_path)


def test_missing_statistics_file(model, small_df, tmp_path: Path):
    engine = RecordingEngine({"means": PROBS}, write_statistics=False)
    with pytest.raises(HydrationError, match="statistics"):
        predict_mlogit(model, small_df, engine=engine, workspace=tmp_path)


def test_non_dataframe_input_fails(model, tmp_path: Path):
    with pytest.raises(ValidationError, match="DataFrame"):
        predict_mlogit(model, [[0.1, 1.0]], engine=RecordingEngine({"means": PROBS}), workspace=tmp_path)


def test_statistics_file_removed_when_hydration_fails(model, small_df, tmp_path: Path):
    engine = RecordingEngine({"means": pd.DataFrame([[1.0]])})
    with pytest.raises(HydrationError):
        predict_mlogit(model, small_df, engine=engine, workspace=tmp_path)
    assert list(tmp_path.iterdir()) == []
