"""Command-line entrypoints for ChemBalance."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any, Dict

import typer

from chembalance import __version__
from chembalance.balancer import Balancer, BalanceResult, BalancerSettings
from chembalance.console import Console
from chembalance.constants import DEFAULT_MAX_COEFFICIENT
from chembalance.equation import split_equation
from chembalance.errors import BalanceError, FailedToBalance
from chembalance.formula import expand_hydrates, parse_compound
from chembalance.matrix import build_stoichiometric_matrix
from chembalance.models import Equation

app = typer.Typer(add_completion=False)

EXIT_INVALID = 1
EXIT_NOT_BALANCED = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"chembalance {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: Annotated[
        str, typer.Option(help="Logging level (DEBUG, INFO, WARNING, ...).")
    ] = "WARNING",
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Balance chemical equations by brute-force coefficient search."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _show_progress(verbose: bool) -> None:
    if verbose:
        logging.getLogger("chembalance").setLevel(logging.INFO)


def _read_equation(equation_text: str, hydrates: bool) -> Equation:
    equation = split_equation(equation_text)
    if not hydrates:
        return equation
    return Equation.from_lists(
        [expand_hydrates(c) for c in equation.reactants],
        [expand_hydrates(c) for c in equation.products],
    )


def _result_payload(result: BalanceResult) -> Dict[str, Any]:
    return {
        "equation": str(result.equation),
        "elements": list(result.elements),
        "matrix": result.matrix.values.tolist(),
        "solutions": [list(vector) for vector in result.solutions],
        "rendered": result.render_lines(),
        "ambiguous": result.ambiguous,
        "advisories": list(result.advisories),
    }


def _error_payload(equation_text: str, exc: BalanceError) -> Dict[str, Any]:
    return {"equation": equation_text, "error": exc.kind, "message": str(exc)}


@app.command()
def balance(
    equation: Annotated[str, typer.Argument(help="Equation such as 'H2 + O2 -> H2O'.")],
    single: Annotated[
        bool, typer.Option("--single", help="Stop at the first solution found.")
    ] = False,
    max_coefficient: Annotated[
        int, typer.Option(min=1, help="Largest coefficient tried for each compound.")
    ] = DEFAULT_MAX_COEFFICIENT,
    hydrates: Annotated[
        bool, typer.Option(help="Accept hydrate notation such as CuSO4.5H2O.")
    ] = True,
    json_output: Annotated[
        bool, typer.Option("--json", help="Print the result as JSON.")
    ] = False,
    verbose: Annotated[
        bool, typer.Option(help="Log search progress, whatever --log-level says.")
    ] = False,
) -> None:
    """Balance a single equation."""
    _show_progress(verbose)
    balancer = Balancer(
        BalancerSettings(
            multiple_results=not single,
            max_coefficient=max_coefficient,
            verbose_logging=verbose,
        )
    )
    try:
        parsed = _read_equation(equation, hydrates)
        result = balancer.balance_with_compounds(parsed.reactants, parsed.products)
    except FailedToBalance as exc:
        typer.echo(f"{exc.kind}: {exc}")
        raise typer.Exit(code=EXIT_NOT_BALANCED)
    except BalanceError as exc:
        typer.echo(f"{exc.kind}: {exc}")
        raise typer.Exit(code=EXIT_INVALID)

    if json_output:
        typer.echo(json.dumps(_result_payload(result), indent=2))
        return

    for advisory in result.advisories:
        typer.echo(f"WARNING: {advisory}")
    if result.ambiguous:
        typer.echo("There are multiple possible solutions. Please select the most correct one.")
    typer.echo(result.render())


@app.command()
def matrix(
    equation: Annotated[str, typer.Argument(help="Equation such as 'H2 + O2 -> H2O'.")],
    hydrates: Annotated[
        bool, typer.Option(help="Accept hydrate notation such as CuSO4.5H2O.")
    ] = True,
) -> None:
    """Print the element universe and the signed stoichiometric matrix."""
    try:
        parsed = _read_equation(equation, hydrates)
        stoich = build_stoichiometric_matrix(
            [parse_compound(c) for c in parsed.reactants],
            [parse_compound(c) for c in parsed.products],
        )
    except BalanceError as exc:
        typer.echo(f"{exc.kind}: {exc}")
        raise typer.Exit(code=EXIT_INVALID)

    width = max(len(c) for c in parsed.compounds)
    label_width = max(len(e) for e in stoich.elements)
    typer.echo(" " * label_width + " " + " ".join(c.rjust(width) for c in parsed.compounds))
    for element, row in zip(stoich.elements, stoich.values, strict=True):
        typer.echo(element.ljust(label_width) + " " + " ".join(str(v).rjust(width) for v in row))


@app.command()
def console() -> None:
    """Start the interactive console on standard input."""
    Console(write=typer.echo).run(line.rstrip("\n") for line in sys.stdin)


@app.command()
def batch(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON file with settings and equations.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
    hydrates: Annotated[
        bool, typer.Option(help="Accept hydrate notation such as CuSO4.5H2O.")
    ] = True,
) -> None:
    """Balance every equation listed in a JSON config file."""
    with open(config_file, "r") as f:
        config = json.load(f)

    try:
        settings = BalancerSettings(**config.get("settings", {}))
    except (TypeError, ValueError) as exc:
        typer.echo(f"Invalid settings in {config_file}: {exc}")
        raise typer.Exit(code=EXIT_INVALID)
    _show_progress(config.get("settings", {}).get("verbose_logging", False))
    balancer = Balancer(settings)

    results = []
    for equation_text in config.get("equations", []):
        try:
            parsed = _read_equation(equation_text, hydrates)
            result = balancer.balance_with_compounds(parsed.reactants, parsed.products)
        except BalanceError as exc:
            results.append(_error_payload(equation_text, exc))
            continue
        results.append(_result_payload(result))
        balancer.clear()

    json_output = json.dumps(
        {"settings": settings.__dict__, "results": results}, indent=2
    )
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)
