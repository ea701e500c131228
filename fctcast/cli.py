"""Command line interface for fctcast."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from fctcast.config import Config, load_config
from fctcast.engine.orchestrator import orchestrator_from_config
from fctcast.engine.projector import project_forecast
from fctcast.errors import ForecastError
from fctcast.reporting.plots import plot_issuance
from fctcast.reporting.summary import format_forecast
from fctcast.supply.halving import halving_state
from fctcast.supply.period import period_window
from fctcast.utils.logging import setup_logging
from fctcast.utils.validation import validate_config

app = typer.Typer(help="Facet FCT mint-rate forecast CLI")
console = Console()


def _load(config: Optional[Path]) -> Config:
    cfg = load_config(config)
    validate_config(cfg)
    return cfg


@app.command()
def forecast(
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
    history: Optional[bool] = typer.Option(None, "--history/--no-history", help="Reconstruct issuance samples for this period"),
    chart: Optional[Path] = typer.Option(None, help="Write the issuance chart to this .png or .svg file"),
    log_level: Optional[str] = typer.Option(None, help="Override the configured log level"),
) -> None:
    """Fetch chain state and forecast the next mint-rate adjustment."""

    cfg = _load(config)
    setup_logging(log_level or cfg.log_level)
    orchestrator = orchestrator_from_config(cfg)
    include_history = history if history is not None else (cfg.history.enabled or chart is not None)
    try:
        run = orchestrator.run(include_history=include_history)
    except ForecastError as exc:
        console.print(f"[bold red]Error calculating adjustment prediction[/bold red]: {exc}")
        raise typer.Exit(code=1)
    console.print(format_forecast(run.result), highlight=False)
    if run.failures:
        console.print(f"[yellow]{len(run.failures)} historical sample(s) dropped[/yellow]")
    if chart is not None:
        if run.samples:
            path = plot_issuance(run.samples, chart, target=run.result.target)
            console.print(f"Saved chart to {path}")
        else:
            console.print("[yellow]No issuance samples to chart[/yellow]")


@app.command()
def period(
    height: int = typer.Argument(..., min=0, help="Block height"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
) -> None:
    """Show halving epoch and adjustment period for a block height (offline)."""

    chain = _load(config).chain
    halving = halving_state(height, chain)
    window = period_window(height, chain.period_length)
    table = Table(title=f"Block {height:,}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Halvings occurred", str(halving.epoch))
    table.add_row("Target FCT", f"{halving.target:,}")
    table.add_row("Adjustment period", str(window.index))
    table.add_row("Period start block", f"{window.start:,}")
    table.add_row("Period end block", f"{window.end:,}")
    table.add_row("Blocks elapsed", f"{window.elapsed:,}")
    table.add_row("Blocks remaining", f"{window.remaining:,}")
    table.add_row("Percent complete", f"{window.percent_complete:.1f}%")
    console.print(table)


@app.command()
def project(
    elapsed: int = typer.Option(..., help="Blocks elapsed in the period, including the current block"),
    target: int = typer.Option(..., min=0, help="Period issuance target (FCT)"),
    minted: int = typer.Option(..., min=0, help="FCT minted so far this period"),
    rate: int = typer.Option(..., help="Current mint rate (gwei)"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
) -> None:
    """Run the rate projection on hand-entered numbers (offline)."""

    chain = _load(config).chain
    try:
        projection = project_forecast(elapsed, target, minted, rate, chain)
    except ForecastError as exc:
        console.print(f"[bold red]Invalid input[/bold red]: {exc}")
        raise typer.Exit(code=1)
    console.print(f"Forecasted issuance: {projection.projected_issuance:,} FCT ({projection.target_completion_percent:.1f}% of Target)")
    console.print(f"Unbounded rate: {projection.ideal_rate:,} (gwei)")
    console.print(f"Bounds: [{projection.lower_bound:,}, {projection.upper_bound:,}] (gwei)")
    console.print(f"Forecasted new mint rate: {projection.forecasted_rate:,} (gwei) ({projection.percent_change:+.1f}%)")


@app.command()
def validate(config: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Validate configuration without contacting the chain."""

    _load(config)
    console.print("Configuration validated successfully")


if __name__ == "__main__":
    app()
