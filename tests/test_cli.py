import yaml
from typer.testing import CliRunner

from ensemble_lab import __version__
from ensemble_lab.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"v{__version__}" in result.stdout


def test_prepare(make_config_file):
    result = runner.invoke(app, ["prepare", "diamonds", "--config", str(make_config_file())])

    assert result.exit_code == 0, result.stdout
    assert "Prepared diamonds" in result.stdout
    assert "rows loaded" in result.stdout


def test_compare(make_config_file):
    result = runner.invoke(
        app, ["compare", "mushrooms", "--config", str(make_config_file()), "--top", "3"]
    )

    assert result.exit_code == 0, result.stdout
    assert "Test metrics" in result.stdout
    assert "bagging" in result.stdout
    assert "boosting" in result.stdout


def test_unknown_dataset_exits_1(make_config_file):
    result = runner.invoke(app, ["prepare", "iris", "--config", str(make_config_file())])

    assert result.exit_code == 1
    assert "UserInputError" in result.stdout


def test_missing_config_exits_1(tmp_path):
    result = runner.invoke(app, ["prepare", "diamonds", "--config", str(tmp_path / "none.yml")])

    assert result.exit_code == 1
    assert "FileNotFoundError" in result.stdout


def test_invalid_config_exits_1_without_traceback(make_config_file):
    path = make_config_file()
    raw = yaml.safe_load(path.read_text())
    raw["data"]["datasets"]["diamonds"]["task"] = "foo"
    path.write_text(yaml.safe_dump(raw))

    result = runner.invoke(app, ["prepare", "diamonds", "--config", str(path)])

    assert result.exit_code == 1
    assert "ValidationError" in result.stdout
    assert "Traceback" not in result.stdout


def test_top_limits_importances(make_config_file):
    result = runner.invoke(
        app, ["compare", "diamonds", "--config", str(make_config_file()), "--top", "1"]
    )

    assert result.exit_code == 0, result.stdout
    assert "top 1 importances" in result.stdout


def test_top_zero_rejected(make_config_file):
    result = runner.invoke(
        app, ["compare", "diamonds", "--config", str(make_config_file()), "--top", "0"]
    )

    assert result.exit_code == 2
