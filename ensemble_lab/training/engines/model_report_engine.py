# ensemble_lab/training/engines/model_report_engine.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    mean_absolute_error,
    mean_squared_error,
    r2_score,
    roc_auc_score,
)

from ensemble_lab.training.engines.train_result import TrainResult


@dataclass(eq=False)
class ModelReport:
    family: str
    task: str
    metrics: Dict[str, float]
    importances: pd.DataFrame
    confusion: Optional[pd.DataFrame] = None
    residual_summary: Optional[pd.Series] = None
    staged_errors: Optional[pd.DataFrame] = None
    extra: Dict[str, Any] = field(default_factory=dict)


class ModelReportEngine:
    """
    ModelReportEngine（FINAL / FROZEN）

    Responsibility:
    - Evaluate a fitted model on the held-out partition
    - Tabulate importances / confusion / residuals / staged test error
    - Return pure in-memory report (no side effects)
    """

    # ------------------------------------------------------------------
    # Public API (FROZEN)
    # ------------------------------------------------------------------
    def evaluate(
        self,
        *,
        result: TrainResult,
        X,
        y: pd.Series,
    ) -> ModelReport:
        if X.shape[0] == 0:
            raise ValueError("[ModelReportEngine] empty eval dataset")

        model = result.model
        y_true = pd.Series(y).to_numpy()
        y_pred = model.predict(X)

        confusion = None
        residual_summary = None

        if result.task == "classification":
            metrics = self._classification_metrics(model, X, y_true, y_pred)
            confusion = self._confusion_table(model, y_true, y_pred)
        else:
            metrics = self._regression_metrics(y_true, y_pred)
            residual_summary = pd.Series(
                y_true.astype(np.float64) - y_pred, name="residual"
            ).describe()

        # oob / train metrics from the fitting engine
        for name, value in result.metrics.items():
            metrics[name] = float(value)

        staged = None
        if hasattr(model, "staged_predict"):
            staged = self.staged_errors(model, X, y_true, result.task)

        return ModelReport(
            family=result.family,
            task=result.task,
            metrics=metrics,
            importances=importance_table(model, result.feature_names),
            confusion=confusion,
            residual_summary=residual_summary,
            staged_errors=staged,
        )

    def staged_errors(self, model, X, y_true: np.ndarray, task: str) -> pd.DataFrame:
        """
        test error after each boosting stage（error rate / rmse）
        """
        rows = []
        for i, pred in enumerate(model.staged_predict(X), start=1):
            if task == "classification":
                err = 1.0 - accuracy_score(y_true, pred)
            else:
                err = float(np.sqrt(mean_squared_error(y_true, pred)))
            rows.append({"n_estimators": i, "test_error": err})
        return pd.DataFrame(rows, columns=["n_estimators", "test_error"])

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _classification_metrics(model, X, y_true, y_pred) -> Dict[str, float]:
        acc = float(accuracy_score(y_true, y_pred))
        metrics = {"accuracy": acc, "error_rate": 1.0 - acc}

        classes = list(getattr(model, "classes_", []))
        if (
            hasattr(model, "predict_proba")
            and len(classes) == 2
            and len(np.unique(y_true)) == 2
        ):
            y_prob = model.predict_proba(X)[:, 1]
            metrics["auc"] = float(
                roc_auc_score((y_true == classes[1]).astype(int), y_prob)
            )
        return metrics

    @staticmethod
    def _regression_metrics(y_true, y_pred) -> Dict[str, float]:
        metrics = {
            "rmse": float(np.sqrt(mean_squared_error(y_true, y_pred))),
            "mae": float(mean_absolute_error(y_true, y_pred)),
        }
        if len(y_true) >= 2:
            metrics["r2"] = float(r2_score(y_true, y_pred))
        return metrics

    @staticmethod
    def _confusion_table(model, y_true, y_pred) -> pd.DataFrame:
        labels = list(model.classes_)
        cm = confusion_matrix(y_true, y_pred, labels=labels)
        return pd.DataFrame(
            cm,
            index=pd.Index(labels, name="actual"),
            columns=pd.Index(labels, name="predicted"),
        )


def importance_table(
    model,
    feature_names: List[str],
    top: Optional[int] = None,
) -> pd.DataFrame:
    """
    impurity-based importance, sorted descending (ties keep column order)
    """
    values = np.asarray(getattr(model, "feature_importances_", []), dtype=np.float64)
    names = list(feature_names) if feature_names else [f"x{i}" for i in range(len(values))]

    df = pd.DataFrame({"feature": names, "importance": values})
    df = df.sort_values("importance", ascending=False, kind="mergesort").reset_index(drop=True)

    if top is not None:
        df = df.head(top)
    return df


def comparison_table(reports: Mapping[str, ModelReport]) -> pd.DataFrame:
    """
    一行一个 model family，列为 metrics 并集
    """
    rows = {family: report.metrics for family, report in reports.items()}
    df = pd.DataFrame.from_dict(rows, orient="index")
    df.index.name = "family"
    return df
