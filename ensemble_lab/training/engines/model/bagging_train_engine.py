# ensemble_lab/training/engines/model/bagging_train_engine.py
from __future__ import annotations

from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from ensemble_lab.config.model_config import BaggingParams
from ensemble_lab.training.engines.model_train_engine import ModelTrainEngine


class BaggingTrainEngine(ModelTrainEngine):
    family = "bagging"

    params: BaggingParams

    def build_estimator(self):
        cls = RandomForestClassifier if self.task == "classification" else RandomForestRegressor
        return cls(
            n_estimators=self.params.n_estimators,
            max_features=self.params.max_features,
            min_samples_leaf=self.params.min_samples_leaf,
            bootstrap=True,
            oob_score=True,
            n_jobs=self.params.n_jobs,
            random_state=self.random_state,
        )

    def collect_metrics(self, model) -> dict:
        # classifier: oob accuracy；regressor: oob R^2
        oob = float(model.oob_score_)
        metrics = {"oob_score": oob}
        if self.task == "classification":
            metrics["oob_error"] = 1.0 - oob
        return metrics
