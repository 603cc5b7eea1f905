import numpy as np
import pandas as pd
import pytest
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from mlogit.config import INTERCEPT, STATISTICS_COLUMNS
from mlogit.engine.bundle import ArgumentBundle
from mlogit.engine.local import LocalEngine, recode_labels
from mlogit.errors import EngineInvocationError
from mlogit.models.predict_model import predict_mlogit
from mlogit.models.train_model import train_mlogit

FEATURES = ["sepal_length", "sepal_width", "petal_length", "petal_width"]


def test_recode_labels_moves_non_positive_to_baseline():
    assert recode_labels(pd.Series([0, 1, 2])).tolist() == [3, 1, 2]
    assert recode_labels(pd.Series([-1, 1, 2, 2])).tolist() == [3, 1, 2, 2]
    assert recode_labels(pd.Series([1, 2, 3])).tolist() == [1, 2, 3]


def test_recode_labels_rejects_fractions():
    with pytest.raises(EngineInvocationError):
        recode_labels(pd.Series([1.5, 2.0]))


@pytest.mark.parametrize("shift_and_rescale", [False, True])
def test_probabilities_match_sklearn(iris_df, tmp_path, shift_and_rescale):
    model = train_mlogit(
        iris_df,
        "species",
        shift_and_rescale=shift_and_rescale,
        reg_lambda=1.0,
        outer_iter_max=500,
        label_names=["Setosa", "Versicolor", "Virginica"],
        engine=LocalEngine(),
    )
    assert model.classes == 3
    assert list(model.coefficients.index) == FEATURES + [INTERCEPT]
    assert list(model.coefficients.columns) == ["Setosa", "Versicolor"]

    result = predict_mlogit(model, iris_df[FEATURES], engine=LocalEngine(), workspace=tmp_path)

    reference = LogisticRegression(C=1.0, max_iter=500, tol=1e-6)
    if shift_and_rescale:
        reference = make_pipeline(StandardScaler(), reference)
    reference.fit(iris_df[FEATURES].to_numpy(), iris_df["species"].to_numpy())
    expected = reference.predict_proba(iris_df[FEATURES].to_numpy())

    assert result.statistics is None
    assert np.allclose(result.probabilities.to_numpy(), expected, atol=1e-6)
    assert np.allclose(result.probabilities.sum(axis=1), 1.0)


def test_binary_model_matches_sklearn(iris_df, tmp_path):
    df = iris_df[iris_df["species"] != 1].copy()
    df["species"] = df["species"] - 1
    model = train_mlogit(df, "species", reg_lambda=1.0, engine=LocalEngine())
    assert model.classes == 2
    assert model.label_names == ("class:1", "class:2")

    result = predict_mlogit(model, df[FEATURES], engine=LocalEngine(), workspace=tmp_path)
    reference = LogisticRegression(C=1.0, max_iter=100, tol=1e-6).fit(
        df[FEATURES].to_numpy(), df["species"].to_numpy()
    )
    expected = reference.predict_proba(df[FEATURES].to_numpy())
    assert np.allclose(result.probabilities.to_numpy(), expected, atol=1e-6)


def test_evaluation_end_to_end(iris_df, tmp_path):
    model = train_mlogit(iris_df, "species", reg_lambda=0.5, engine=LocalEngine())
    result = predict_mlogit(model, iris_df, engine=LocalEngine(), workspace=tmp_path)

    stats = result.statistics
    assert list(stats.columns) == STATISTICS_COLUMNS
    accuracy = stats.loc[stats["Name"] == "ACCURACY", "Value"].iloc[0]
    assert accuracy > 0.9
    assert (stats["Name"] == "AVG_TOT_Y").sum() == 3
    assert list(result.probabilities.columns) == ["class:1", "class:2", "class:3"]


def test_no_intercept_model_has_no_intercept_row(iris_df):
    model = train_mlogit(iris_df, "species", intercept=False, reg_lambda=1.0, engine=LocalEngine())
    assert list(model.coefficients.index) == FEATURES


def test_missing_class_fails(iris_df):
    df = iris_df[iris_df["species"] != 2]
    with pytest.raises(EngineInvocationError, match="missing"):
        train_mlogit(df, "species", engine=LocalEngine())


def test_unknown_script_fails():
    with pytest.raises(EngineInvocationError, match="Unsupported"):
        LocalEngine().invoke(ArgumentBundle(script="/algorithms/Kmeans.dml"))


def test_integer_labelled_frame_trains_and_evaluates(iris_df, tmp_path):
    df = pd.DataFrame(iris_df.to_numpy())
    model = train_mlogit(df, 4, reg_lambda=1.0, engine=LocalEngine())
    assert model.y_col_name == 4
    assert list(model.coefficients.index) == [0, 1, 2, 3, INTERCEPT]

    result = predict_mlogit(model, df, engine=LocalEngine(), workspace=tmp_path)
    assert result.mode == "evaluation"
    accuracy = result.statistics.loc[result.statistics["Name"] == "ACCURACY", "Value"].iloc[0]
    assert accuracy > 0.9

    scored = predict_mlogit(model, df[[0, 1, 2, 3]], engine=LocalEngine(), workspace=tmp_path)
    assert scored.mode == "scoring"


def test_zero_baseline_kept_when_evaluating_a_subset(iris_df, tmp_path):
    df = iris_df.copy()
    df["species"] = df["species"] - 1  # labels 0, 1, 2; 0 is the baseline
    model = train_mlogit(df, "species", reg_lambda=1.0, engine=LocalEngine())
    assert model.classes == 3

    subset = df[df["species"] != 2]
    stats = predict_mlogit(model, subset, engine=LocalEngine(), workspace=tmp_path).statistics
    avg_tot = stats[stats["Name"] == "AVG_TOT_Y"].set_index("Y-column")["Value"]
    # Label 0 maps to class 3, label 1 to class 1; class 2 is absent
    assert avg_tot.loc[2] == 0.0
    assert avg_tot.loc[3] == pytest.approx(0.5)
    accuracy = stats.loc[stats["Name"] == "ACCURACY", "Value"].iloc[0]
    assert accuracy > 0.9


def test_statistics_include_precision_and_recall(iris_df, tmp_path):
    model = train_mlogit(iris_df, "species", reg_lambda=1.0, engine=LocalEngine())
    stats = predict_mlogit(model, iris_df, engine=LocalEngine(), workspace=tmp_path).statistics
    recall = stats[stats["Name"] == "RECALL"]
    assert len(recall) == 3
    assert recall["Value"].between(0.0, 1.0).all()
    assert (stats["Name"] == "PRECISION").sum() == 3
