"""Command line entry points for offline reranking."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from configs.loader import load_config
from monitoring import RerankMetrics, configure_logging
from results import load_results

from . import runner

app = typer.Typer(add_completion=False)


@app.command()
def rerank(
    pool: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file holding the ranked candidate pool"),
    config: Path = typer.Option(..., "--config", exists=True, dir_okay=False, help="Path to rerank YAML config"),
    user_id: int = typer.Option(0, "--user-id", help="User the recommendations are for"),
    n: Optional[int] = typer.Option(None, "--n", help="Result length; negative means unlimited"),
    exclude: List[int] = typer.Option([], "--exclude", help="Item ids to leave out"),
    override: List[str] = typer.Option([], help="Override config values"),
    output: Optional[Path] = typer.Option(None, "--output", file_okay=False, help="Directory for results and metrics"),
) -> None:
    settings = load_config(config, runner.parse_overrides(override))
    configure_logging(settings.logging.directory if settings.logging else None)
    metrics = RerankMetrics()
    results = runner.run_rerank(
        settings,
        load_results(pool),
        user_id,
        n,
        exclude=set(exclude) or None,
        metrics=metrics,
    )
    if output is not None:
        typer.echo(str(runner.write_run(results, metrics, output)))
        return
    for result in results:
        typer.echo(f"{result.item_id}\t{result.score:g}")


def rerank_command() -> None:
    typer.run(rerank)


__all__ = ["app", "rerank_command"]
