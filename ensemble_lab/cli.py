#!filepath: ensemble_lab/cli.py
from datetime import datetime
from typing import Optional

import pandas as pd
import typer
from pydantic import ValidationError
from rich import print
from rich.console import Console
from rich.table import Table

from ensemble_lab import __version__, logs
from ensemble_lab.config.app_config import AppConfig
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.training.engines.model_report_engine import comparison_table
from ensemble_lab.utils.errors import (
    InvalidArgumentError,
    SchemaMismatchError,
    UserInputError,
)
from ensemble_lab.workflows.ensemble_comparison import build_experiment_pipeline

app = typer.Typer(help="Bagging vs Boosting experiment CLI")
console = Console()

_EXPECTED_ERRORS = (
    UserInputError,
    InvalidArgumentError,
    SchemaMismatchError,
    FileNotFoundError,
    ValidationError,
)


def _run_id(dataset: str) -> str:
    return f"{dataset}-{datetime.now():%Y%m%d-%H%M%S}"


def _load_config(config: Optional[str]) -> AppConfig:
    cfg = AppConfig.load(config)
    logs.configure(cfg.log)
    return cfg


@logs.catch(msg="experiment failed")
def _run(dataset: str, config: Optional[str], prepare_only: bool) -> ExperimentContext:
    cfg = _load_config(config)
    pipeline = build_experiment_pipeline(dataset, cfg, prepare_only=prepare_only)
    return pipeline.run(_run_id(dataset))


def _frame_table(df: pd.DataFrame, title: str, index_name: str = "") -> Table:
    table = Table(title=title)
    table.add_column(index_name or (df.index.name or ""))
    for col in df.columns:
        table.add_column(str(col), justify="right")

    for idx, row in df.iterrows():
        cells = [
            f"{v:.4f}" if isinstance(v, float) else str(v)
            for v in row.tolist()
        ]
        table.add_row(str(idx), *cells)
    return table


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def prepare(
    dataset: str,
    config: Optional[str] = typer.Option(None, help="YAML config path"),
):
    """
    运行数据准备（load → dedup → partition → design matrix）并打印摘要
    """
    try:
        ctx = _run(dataset, config, prepare_only=True)
    except _EXPECTED_ERRORS as e:
        print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1)

    summary = pd.DataFrame(
        {
            "value": [
                ctx.rows_loaded,
                len(ctx.dataset),
                ctx.rows_loaded - len(ctx.dataset),
                len(ctx.partition.train),
                len(ctx.partition.test),
                ctx.train_X.shape[1],
                len(ctx.dropped_columns),
            ]
        },
        index=[
            "rows loaded",
            "rows after dedup",
            "duplicates removed",
            "train rows",
            "test rows",
            "design columns",
            "constant columns dropped",
        ],
    )
    console.print(_frame_table(summary, f"Prepared {dataset}"))

    if ctx.dropped_columns:
        print(f"[yellow]dropped: {', '.join(ctx.dropped_columns)}[/yellow]")


@app.command()
def compare(
    dataset: str,
    config: Optional[str] = typer.Option(None, help="YAML config path"),
    top: Optional[int] = typer.Option(None, min=1, help="importances shown per model"),
):
    """
    训练 bagging / boosting 并打印对比表与 feature importance
    """
    print(f"[green]Running bagging vs boosting on {dataset}[/green]")

    try:
        ctx = _run(dataset, config, prepare_only=False)
    except _EXPECTED_ERRORS as e:
        print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1)

    if not ctx.reports:
        print("[yellow]no reports (empty test partition?)[/yellow]")
        return

    console.print(_frame_table(comparison_table(ctx.reports), "Test metrics", "family"))

    n = top if top is not None else ctx.cfg.model.top_importances
    for family, report in ctx.reports.items():
        imp = report.importances.head(n).set_index("feature")
        console.print(_frame_table(imp, f"{family}: top {n} importances", "feature"))

        if report.confusion is not None:
            console.print(_frame_table(report.confusion, f"{family}: confusion", "actual"))


if __name__ == "__main__":
    app()

# python -m ensemble_lab.cli compare diamonds
