from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

import pandas as pd

from ensemble_lab.training.engines.train_result import TrainResult
from ensemble_lab.utils.errors import UserInputError

TASKS = ("classification", "regression")


class ModelTrainEngine(ABC):
    """
    Abstract ModelTrainEngine (FINAL)

    A ModelTrainEngine decides:
    - Regression vs classification semantics (declared, never inferred)
    - Which estimator is fitted and with which params

    A ModelTrainEngine MUST NOT:
    - Touch files
    - Re-encode X (design matrix is final)
    """

    family: str = ""

    def __init__(self, *, task: str, params, random_state: int):
        if task not in TASKS:
            raise UserInputError(f"Unknown task {task!r}. Available: {', '.join(TASKS)}")
        self.task = task
        self.params = params
        self.random_state = random_state

    @abstractmethod
    def build_estimator(self) -> Any:
        raise NotImplementedError

    def collect_metrics(self, model: Any) -> dict:
        return {}

    def train(
        self,
        *,
        X,
        y: pd.Series,
        feature_names: Optional[List[str]] = None,
    ) -> TrainResult:
        """
        Returns fitted TrainResult
        """
        if X.shape[0] == 0:
            raise UserInputError(f"[{self.family}] empty training set")
        if X.shape[0] != len(y):
            raise ValueError(
                f"[{self.family}] X rows={X.shape[0]} != y rows={len(y)}"
            )

        model = self.build_estimator()
        model.fit(X, pd.Series(y).to_numpy())

        return TrainResult(
            model=model,
            family=self.family,
            task=self.task,
            feature_names=list(feature_names) if feature_names is not None else [],
            metrics=self.collect_metrics(model),
        )
