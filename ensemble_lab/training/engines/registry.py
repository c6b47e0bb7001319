from typing import Callable, Dict, Tuple

from ensemble_lab.config.model_config import ModelConfig
from ensemble_lab.training.engines.model_train_engine import ModelTrainEngine
from ensemble_lab.training.engines.model.bagging_train_engine import BaggingTrainEngine
from ensemble_lab.training.engines.model.boosting_train_engine import BoostingTrainEngine
from ensemble_lab.utils.errors import UserInputError

_ENGINE_REGISTRY: Dict[
    Tuple[str, str],
    Callable[[ModelConfig, int], ModelTrainEngine],
] = {
    ("bagging", "classification"): lambda cfg, seed: BaggingTrainEngine(
        task="classification", params=cfg.bagging, random_state=seed
    ),
    ("bagging", "regression"): lambda cfg, seed: BaggingTrainEngine(
        task="regression", params=cfg.bagging, random_state=seed
    ),
    ("boosting", "classification"): lambda cfg, seed: BoostingTrainEngine(
        task="classification", params=cfg.boosting, random_state=seed
    ),
    ("boosting", "regression"): lambda cfg, seed: BoostingTrainEngine(
        task="regression", params=cfg.boosting, random_state=seed
    ),
}


def resolve_model_train_engine(
        *, family: str, task: str, cfg: ModelConfig, seed: int
) -> ModelTrainEngine:
    key = (family, task)

    if key not in _ENGINE_REGISTRY:
        available = ", ".join(str(k) for k in _ENGINE_REGISTRY)
        raise UserInputError(
            f"No ModelTrainEngine for {key}. Available: {available}"
        )

    return _ENGINE_REGISTRY[key](cfg, seed)


def available_families() -> list[str]:
    return sorted({family for family, _ in _ENGINE_REGISTRY})
