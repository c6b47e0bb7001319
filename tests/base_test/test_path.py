from pathlib import Path

from ensemble_lab import path


def test_root_detected():
    root = path.root()

    assert root.exists()
    assert (root / "ensemble_lab").exists()


def test_default_config_file_exists():
    assert path.default_config_file().exists()


def test_set_root(tmp_path):
    old = path.root()
    try:
        path.set_root(tmp_path)
        assert path.root() == tmp_path.resolve()
        assert path.data_dir() == tmp_path.resolve() / "data"
    finally:
        path.set_root(old)


def test_set_data_dir_relative_resolves_against_root(tmp_path):
    path.set_data_dir("datasets")

    assert path.data_dir() == path.root() / "datasets"


def test_dataset_file(tmp_path):
    path.set_data_dir(tmp_path)

    assert path.dataset_file("diamonds.csv") == tmp_path / "diamonds.csv"
    absolute = Path("/abs/mushrooms.csv")
    assert path.dataset_file(str(absolute)) == absolute
