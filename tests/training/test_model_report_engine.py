import numpy as np
import pandas as pd
import pytest

from ensemble_lab.training.engines.model_report_engine import (
    ModelReport,
    ModelReportEngine,
    comparison_table,
    importance_table,
)
from ensemble_lab.training.engines.registry import resolve_model_train_engine


def _fit(model_cfg, family, task, X, y, names):
    engine = resolve_model_train_engine(family=family, task=task, cfg=model_cfg, seed=0)
    return engine.train(X=X, y=y, feature_names=names)


def test_regression_report(model_cfg, regression_xy):
    X, y, names = regression_xy
    result = _fit(model_cfg, "bagging", "regression", X[:60], y[:60], names)

    report = ModelReportEngine().evaluate(result=result, X=X[60:], y=y[60:])

    assert {"rmse", "mae", "r2", "oob_score"} <= set(report.metrics)
    assert report.metrics["rmse"] >= report.metrics["mae"] >= 0
    assert report.confusion is None
    assert report.residual_summary["count"] == 20
    # random forest 没有 staged_predict
    assert report.staged_errors is None


def test_classification_report(model_cfg, classification_xy):
    X, y, names = classification_xy
    result = _fit(model_cfg, "boosting", "classification", X[:60], y[:60], names)

    report = ModelReportEngine().evaluate(result=result, X=X[60:], y=y[60:])

    m = report.metrics
    assert m["error_rate"] == pytest.approx(1.0 - m["accuracy"])
    assert 0.0 <= m["auc"] <= 1.0
    assert "train_loss" in m
    assert report.confusion.values.sum() == 20
    assert list(report.confusion.index) == ["e", "p"]
    assert report.residual_summary is None


def test_staged_errors_for_boosting(model_cfg, regression_xy):
    X, y, names = regression_xy
    result = _fit(model_cfg, "boosting", "regression", X[:60], y[:60], names)

    report = ModelReportEngine().evaluate(result=result, X=X[60:], y=y[60:])

    staged = report.staged_errors
    assert list(staged.columns) == ["n_estimators", "test_error"]
    assert staged["n_estimators"].tolist() == list(range(1, 16))
    assert staged["test_error"].iloc[-1] == pytest.approx(report.metrics["rmse"])


def test_no_auc_when_single_class_in_test(model_cfg, classification_xy):
    X, y, names = classification_xy
    result = _fit(model_cfg, "bagging", "classification", X, y, names)
    only_e = np.flatnonzero(y.to_numpy() == "e")[:5]

    report = ModelReportEngine().evaluate(result=result, X=X[only_e], y=y.iloc[only_e])

    assert "auc" not in report.metrics


def test_empty_eval_set(model_cfg, regression_xy):
    X, y, names = regression_xy
    result = _fit(model_cfg, "boosting", "regression", X, y, names)

    with pytest.raises(ValueError):
        ModelReportEngine().evaluate(result=result, X=X[:0], y=y[:0])


def test_importance_table_sorted(model_cfg, regression_xy):
    X, y, names = regression_xy
    result = _fit(model_cfg, "bagging", "regression", X, y, names)

    table = importance_table(result.model, names)

    assert list(table.columns) == ["feature", "importance"]
    assert table["importance"].is_monotonic_decreasing
    assert table["feature"].iloc[0] == "x0"
    assert table["importance"].sum() == pytest.approx(1.0)
    assert len(importance_table(result.model, names, top=2)) == 2


def test_importance_table_ties_keep_order():
    class Stub:
        feature_importances_ = np.array([0.25, 0.5, 0.25])

    table = importance_table(Stub(), ["a", "b", "c"])

    assert table["feature"].tolist() == ["b", "a", "c"]


def test_comparison_table():
    empty = pd.DataFrame(columns=["feature", "importance"])
    reports = {
        "bagging": ModelReport("bagging", "regression", {"rmse": 1.0, "oob_score": 0.9}, empty),
        "boosting": ModelReport("boosting", "regression", {"rmse": 0.8, "train_loss": 0.1}, empty),
    }

    df = comparison_table(reports)

    assert df.index.name == "family"
    assert list(df.index) == ["bagging", "boosting"]
    assert df.loc["boosting", "rmse"] == 0.8
    assert pd.isna(df.loc["boosting", "oob_score"])
