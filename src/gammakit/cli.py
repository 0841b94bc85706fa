"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
from pathlib import Path
from typing import Any

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .distributions import get_distribution, list_distributions

app = typer.Typer(help="gammakit distribution quantile and sampling CLI.")
console = Console()

NAME_ARGUMENT = typer.Argument(..., help="Registered distribution name (see `registry`).")
PROBABILITIES_ARGUMENT = typer.Argument(..., help="Probabilities in [0, 1].")

PARAM_OPTION = typer.Option(
    None,
    "--param",
    "-p",
    help="Distribution parameter as name=value (repeat for multiples).",
    show_default=False,
)

SIZE_OPTION = typer.Option(1000, "--size", "-n", help="Number of variates to draw.")
SEED_OPTION = typer.Option(
    None,
    "--seed",
    help="Seed for the random engine (defaults to OS entropy).",
    show_default=False,
)
OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    "-o",
    help="Optional CSV path receiving the raw draws.",
    show_default=False,
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose or version:
        console.print(f"[bold green]gammakit {__version__}[/bold green]")
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List registered distributions."""
    table = Table(title="Registered Distributions")
    table.add_column("Name")
    table.add_column("Parameters")
    table.add_column("Kernels")
    table.add_column("Description", overflow="fold")
    for name in list_distributions():
        dist = get_distribution(name)
        kernels = [
            label
            for label, kernel in (
                ("quantile", dist.quantile),
                ("cdf", dist.cdf),
                ("pdf", dist.pdf),
                ("sample", dist.sampler),
            )
            if kernel is not None
        ]
        table.add_row(dist.name, ", ".join(dist.parameters), ", ".join(kernels), dist.notes or "")
    console.print(table)


@app.command()
def quantile(  # noqa: B008
    name: str = NAME_ARGUMENT,
    probabilities: list[float] = PROBABILITIES_ARGUMENT,
    params: list[str] | None = PARAM_OPTION,
) -> None:
    """Evaluate the quantile function at each probability."""
    try:
        dist = get_distribution(name)
        if dist.quantile is None:
            raise ValueError(f"Distribution '{dist.name}' has no quantile function.")
        args = dist.bind(_parse_params(params))
    except (KeyError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    values = dist.quantile(np.asarray(probabilities, dtype=float), *args)
    table = Table(title=f"{dist.name} quantiles")
    table.add_column("p", justify="right", no_wrap=True)
    table.add_column("Quantile", justify="right", no_wrap=True)
    for prob, value in zip(probabilities, values, strict=True):
        table.add_row(f"{prob:g}", _format_metric(value))
    console.print(table)


@app.command()
def sample(  # noqa: B008
    name: str = NAME_ARGUMENT,
    params: list[str] | None = PARAM_OPTION,
    size: int = SIZE_OPTION,
    seed: int | None = SEED_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Draw variates and print summary statistics."""
    try:
        dist = get_distribution(name)
        draws = dist.sample(_parse_params(params), size, random_state=seed)
    except (KeyError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{dist.name} sample")
    table.add_column("Statistic", no_wrap=True)
    table.add_column("Value", justify="right", no_wrap=True)
    finite = draws[np.isfinite(draws)]
    table.add_row("Size", str(size))
    table.add_row("Mean", _format_metric(finite.mean() if finite.size else None))
    table.add_row("Variance", _format_metric(finite.var(ddof=1) if finite.size > 1 else None))
    table.add_row("Min", _format_metric(finite.min() if finite.size else None))
    table.add_row("Max", _format_metric(finite.max() if finite.size else None))
    console.print(table)

    if output is not None:
        import pandas as pd

        pd.DataFrame({"value": draws}).to_csv(output, index=False)
        console.print(f"[green]Draws written[/green] {output} (rows={size})")


def _parse_params(raw: list[str] | None) -> dict[str, float]:
    params: dict[str, float] = {}
    for item in raw or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid parameter '{item}'. Expected name=value.")
        try:
            params[key.strip()] = float(value)
        except ValueError as exc:
            raise ValueError(f"Parameter '{key.strip()}' must be numeric, got '{value}'.") from exc
    return params


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val):
            return "nan"
        if math.isinf(val):
            return "inf" if val > 0 else "-inf"
        return f"{val:.6g}"
    return str(value)


def main() -> None:  # pragma: no cover - console entry
    app()
