"""
Batch evaluation command for infixcalc CLI.

Evaluates a file of expressions (one per line) into an output file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from infixcalc.cli.utils import console, print_error
from infixcalc.core.batch import calculate_from_file
from infixcalc.core.errors import InfixCalcError
from infixcalc.core.expression_lang.engine import Strategy
from infixcalc.core.manifest import CalculatorConfig


def batch_command(
    ctx: typer.Context,
    input_file: Annotated[Path | None, typer.Argument(help="File with one expression per line")] = None,
    output_file: Annotated[Path | None, typer.Argument(help="File to write results to")] = None,
    overwrite: Annotated[
        bool, typer.Option("--overwrite", help="Allow the output file to be the input file")
    ] = False,
    strategy: Annotated[
        Strategy | None,
        typer.Option("--strategy", "-s", help="Evaluator: stack, recursive, or verify (both)"),
    ] = None,
    show_failures: Annotated[
        bool, typer.Option("--show-failures", help="List lines that failed")
    ] = False,
) -> None:
    """Evaluate every line of INPUT_FILE and write Input/Output records to OUTPUT_FILE."""
    config: CalculatorConfig = ctx.obj
    source = input_file or Path(config.batch.input)
    target = output_file or Path(config.batch.output)
    chosen = strategy or Strategy(config.evaluation.strategy)

    try:
        report = calculate_from_file(
            source,
            target,
            overwrite=overwrite or config.batch.overwrite,
            strategy=chosen,
        )
    except FileNotFoundError as e:
        print_error(f"Input file not found: {source}")
        raise typer.Exit(code=1) from e
    except UnicodeDecodeError as e:
        print_error(f"Input file is not valid UTF-8: {source}")
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"Cannot access {e.filename or source}: {e.strerror or e}")
        raise typer.Exit(code=1) from e
    except InfixCalcError as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e

    console.print(
        f"Evaluated {report.total} lines: [green]{report.succeeded} ok[/green], "
        f"[red]{report.failed} failed[/red] -> {escape(str(target))}",
        highlight=False,
    )
    if show_failures:
        for number, outcome in enumerate(report.results, start=1):
            if not outcome.ok:
                console.print(
                    f"  line {number}: {escape(outcome.expression)} -> {escape(outcome.error or '')}",
                    highlight=False,
                )
