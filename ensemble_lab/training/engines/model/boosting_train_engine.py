# ensemble_lab/training/engines/model/boosting_train_engine.py
from __future__ import annotations

from sklearn.ensemble import GradientBoostingClassifier, GradientBoostingRegressor

from ensemble_lab.config.model_config import BoostingParams
from ensemble_lab.training.engines.model_train_engine import ModelTrainEngine


class BoostingTrainEngine(ModelTrainEngine):
    family = "boosting"

    params: BoostingParams

    def build_estimator(self):
        cls = (
            GradientBoostingClassifier
            if self.task == "classification"
            else GradientBoostingRegressor
        )
        return cls(
            n_estimators=self.params.n_estimators,
            learning_rate=self.params.learning_rate,
            max_depth=self.params.max_depth,
            subsample=self.params.subsample,
            random_state=self.random_state,
        )

    def collect_metrics(self, model) -> dict:
        return {"train_loss": float(model.train_score_[-1])}
