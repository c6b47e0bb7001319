import pandas as pd
import pytest

from ensemble_lab.datasets.catalog import DIAMONDS_SCHEMA, MUSHROOMS_SCHEMA
from ensemble_lab.datasets.loader import DatasetLoadEngine
from ensemble_lab.utils.errors import UserInputError


def test_load_csv(data_dir):
    ds = DatasetLoadEngine().load(data_dir / "diamonds.csv", DIAMONDS_SCHEMA)

    assert len(ds) == 65
    assert ds.columns == DIAMONDS_SCHEMA.names


def test_load_parquet(data_dir):
    ds = DatasetLoadEngine().load(data_dir / "mushrooms.parquet", MUSHROOMS_SCHEMA)

    assert len(ds) == 40
    assert ds.frame["class"].cat.categories.tolist() == ["e", "p"]


def test_whitespace_stripped(tmp_path, diamonds_frame):
    df = diamonds_frame.copy()
    df["cut"] = df["cut"].map(lambda v: f" {v}  ")
    path = tmp_path / "padded.csv"
    df.to_csv(path, index=False)

    ds = DatasetLoadEngine().load(path, DIAMONDS_SCHEMA)

    assert ds.frame["cut"].tolist() == diamonds_frame["cut"].tolist()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DatasetLoadEngine().load(tmp_path / "nope.csv", DIAMONDS_SCHEMA)


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "diamonds.xlsx"
    path.write_bytes(b"")

    with pytest.raises(UserInputError):
        DatasetLoadEngine().load(path, DIAMONDS_SCHEMA)


def test_strip_leaves_numeric_untouched():
    df = pd.DataFrame({"a": [1, 2], "b": [" x", "y "]})

    out = DatasetLoadEngine._strip_strings(df)

    assert out["a"].tolist() == [1, 2]
    assert out["b"].tolist() == ["x", "y"]
    assert df["b"].tolist() == [" x", "y "]
