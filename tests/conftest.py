# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
import yaml
from loguru import logger

from ensemble_lab.config.app_config import AppConfig
from ensemble_lab.datasets.catalog import DIAMONDS_SCHEMA, MUSHROOMS_SCHEMA
from ensemble_lab.schema.dataset import Dataset
from ensemble_lab.utils.path import PathManager


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture(autouse=True)
def _reset_path_manager():
    yield
    PathManager.set_data_dir(None)


# =============================================================================
# Synthetic datasets
# =============================================================================
_CUTS = ["Fair", "Good", "Very Good", "Premium", "Ideal"]
_COLORS = ["D", "E", "F", "G", "H", "I", "J"]
_CLARITIES = ["I1", "SI2", "SI1", "VS2", "VS1", "VVS2", "VVS1", "IF"]


def make_diamonds_frame(n: int = 60) -> pd.DataFrame:
    """
    确定性的小 diamonds 表：price 随 carat / cut / clarity 单调上升
    """
    rows = []
    for i in range(n):
        carat = round(0.2 + 0.05 * (i % 30), 2)
        cut = _CUTS[i % 5]
        color = _COLORS[i % 7]
        clarity = _CLARITIES[i % 8]
        price = int(300 + 4000 * carat + 150 * (i % 5) + 80 * (i % 8))
        rows.append(
            dict(
                carat=carat,
                cut=cut,
                color=color,
                clarity=clarity,
                depth=60.0 + (i % 4) * 0.5,
                table=55.0 + (i % 3),
                price=price,
                x=round(4.0 + carat, 2),
                y=round(4.0 + carat, 2),
                z=round(2.5 + carat / 2, 2),
            )
        )
    return pd.DataFrame(rows)


def make_mushrooms_frame(n: int = 40) -> pd.DataFrame:
    """
    class 完全由 odor 决定（n = none → edible，其它 → poisonous）；
    veil-type 恒为 p（常数列）。
    """
    odors = ["n", "f", "a", "p", "n", "l", "n", "c"]
    rows = []
    for i in range(n):
        odor = odors[i % len(odors)]
        rows.append(
            {
                "class": "e" if odor in ("n", "a", "l") else "p",
                "cap-shape": ["x", "f", "b"][i % 3],
                "cap-surface": ["s", "y", "f"][i % 3],
                "cap-color": ["n", "w", "g", "y"][i % 4],
                "bruises": ["t", "f"][i % 2],
                "odor": odor,
                "gill-attachment": "f",
                "gill-spacing": ["c", "w"][i % 2],
                "gill-size": ["n", "b"][(i // 2) % 2],
                "gill-color": ["k", "n", "w", "p"][i % 4],
                "stalk-shape": ["e", "t"][i % 2],
                "stalk-root": ["e", "c", "b", "?"][i % 4],
                "stalk-surface-above-ring": ["s", "f"][i % 2],
                "stalk-surface-below-ring": ["s", "y"][i % 2],
                "stalk-color-above-ring": ["w", "p"][i % 2],
                "stalk-color-below-ring": ["w", "g"][i % 2],
                "veil-type": "p",
                "veil-color": "w",
                "ring-number": ["o", "t"][i % 2],
                "ring-type": ["p", "e"][i % 2],
                "spore-print-color": ["k", "n", "w"][i % 3],
                "population": ["s", "n", "v"][i % 3],
                "habitat": ["u", "g", "m", "d"][i % 4],
            }
        )
    return pd.DataFrame(rows)


@pytest.fixture
def diamonds_frame() -> pd.DataFrame:
    return make_diamonds_frame()


@pytest.fixture
def mushrooms_frame() -> pd.DataFrame:
    return make_mushrooms_frame()


@pytest.fixture
def diamonds_dataset(diamonds_frame) -> Dataset:
    return Dataset(diamonds_frame, DIAMONDS_SCHEMA)


@pytest.fixture
def mushrooms_dataset(mushrooms_frame) -> Dataset:
    return Dataset(mushrooms_frame, MUSHROOMS_SCHEMA)


# =============================================================================
# Config on disk
# =============================================================================
@pytest.fixture
def data_dir(tmp_path: Path, diamonds_frame, mushrooms_frame) -> Path:
    d = tmp_path / "data"
    d.mkdir()

    # 重复若干行，验证 dedup
    diamonds = pd.concat([diamonds_frame, diamonds_frame.iloc[:5]], ignore_index=True)
    diamonds.to_csv(d / "diamonds.csv", index=False)

    mushrooms_frame.to_parquet(d / "mushrooms.parquet", index=False)
    return d


@pytest.fixture
def make_config_file(tmp_path: Path, data_dir: Path):
    """
    Factory fixture：写一个最小 YAML 配置，overrides 按顶层 key 合并。
    """

    def _make(**overrides) -> Path:
        raw = {
            "log": {"dir": str(tmp_path / "logs"), "level": "DEBUG"},
            "data": {
                "data_dir": str(data_dir),
                "datasets": {
                    "diamonds": {
                        "file": "diamonds.csv",
                        "schema_name": "diamonds",
                        "response": "price",
                        "task": "regression",
                        "key_columns": ["carat", "cut", "color", "clarity", "price"],
                    },
                    "mushrooms": {
                        "file": "mushrooms.parquet",
                        "schema_name": "mushrooms",
                        "response": "class",
                        "task": "classification",
                    },
                },
            },
            "split": {"test_size": 0.25, "seed": 42},
            "model": {
                "bagging": {"n_estimators": 15},
                "boosting": {"n_estimators": 20, "max_depth": 2},
            },
        }
        for key, value in overrides.items():
            raw[key] = {**raw.get(key, {}), **value}

        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump(raw), encoding="utf-8")
        return path

    return _make


@pytest.fixture
def app_config(make_config_file) -> AppConfig:
    return AppConfig.load(str(make_config_file()))


@pytest.fixture
def mushrooms_distinct_rows(mushrooms_frame) -> int:
    """
    mushrooms_frame 中按全部 predictor 去重后的行数（odor 列有重复取值，
    因此小于 24）
    """
    return len(mushrooms_frame.drop(columns=["class"]).drop_duplicates())
