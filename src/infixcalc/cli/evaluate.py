"""
Expression evaluation commands for infixcalc CLI.

Evaluate a single expression, inspect its tokens, or run the built-in demo.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from infixcalc.cli.utils import console, print_error
from infixcalc.core.batch import calculate_from_file
from infixcalc.core.errors import InfixCalcError
from infixcalc.core.expression_lang.engine import Strategy, evaluate, evaluate_safely, values_agree
from infixcalc.core.expression_lang.operators import precedence_of
from infixcalc.core.expression_lang.tokenizer import tokenize
from infixcalc.core.manifest import CalculatorConfig

DEMO_EXPRESSIONS = [
    "4!-5^2/1*3==-51",
    "7/5+10<=9",
    "8*7/9-3!*2^4",
    "5-10",
]


def _config(ctx: typer.Context) -> CalculatorConfig:
    return ctx.obj


def eval_command(
    ctx: typer.Context,
    expression: Annotated[str, typer.Argument(help="Expression to evaluate, e.g. '2+3*4'")],
    strategy: Annotated[
        Strategy | None,
        typer.Option("--strategy", "-s", help="Evaluator: stack, recursive, or verify (both)"),
    ] = None,
) -> None:
    """Evaluate a single expression."""
    chosen = strategy or Strategy(_config(ctx).evaluation.strategy)
    try:
        value = evaluate(expression, chosen)
    except InfixCalcError as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e
    console.print(str(value), highlight=False)


def tokens_command(
    expression: Annotated[str, typer.Argument(help="Expression to tokenize")],
) -> None:
    """Show the tokens an expression is split into."""
    try:
        tokens = tokenize(expression)
    except InfixCalcError as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e

    table = Table(title="Tokens")
    table.add_column("Pos", justify="right")
    table.add_column("Kind")
    table.add_column("Text")
    table.add_column("Operator")
    table.add_column("Precedence", justify="right")
    for token in tokens:
        if token.is_number:
            table.add_row(str(token.pos), "number", escape(token.text), "", "")
        else:
            table.add_row(
                str(token.pos),
                "operator",
                escape(token.text),
                token.value.name,
                str(precedence_of(token.value)),
            )
    console.print(table)


def demo_command(
    ctx: typer.Context,
    input_file: Annotated[
        Path | None, typer.Option("--input", "-i", help="Batch input file (default from config)")
    ] = None,
    output_file: Annotated[
        Path | None, typer.Option("--output", "-o", help="Batch output file (default from config)")
    ] = None,
) -> None:
    """Evaluate the sample expressions with both evaluators, then batch-run the input file if present."""
    config = _config(ctx)

    table = Table(title="Stack vs recursive evaluation")
    table.add_column("Expression")
    table.add_column("Stack")
    table.add_column("Recursive")
    table.add_column("Agree")
    for expression in DEMO_EXPRESSIONS:
        stack = evaluate_safely(expression, Strategy.STACK)
        recursive = evaluate_safely(expression, Strategy.RECURSIVE)
        if stack.ok and recursive.ok:
            agree = "yes" if values_agree(stack.value, recursive.value) else "[red]no[/red]"
        else:
            agree = "-"
        table.add_row(escape(expression), escape(stack.render()), escape(recursive.render()), agree)
    console.print(table)

    source = input_file or Path(config.batch.input)
    target = output_file or Path(config.batch.output)
    if not source.is_file():
        console.print(f"No batch input at {escape(str(source))}; skipping file run", highlight=False)
        return
    try:
        report = calculate_from_file(
            source, target, overwrite=config.batch.overwrite, strategy=config.evaluation.strategy
        )
    except InfixCalcError as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e
    except UnicodeDecodeError as e:
        print_error(f"Input file is not valid UTF-8: {source}")
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"Cannot access {e.filename or source}: {e.strerror or e}")
        raise typer.Exit(code=1) from e
    console.print(
        f"Wrote {report.total} results to {escape(str(target))} ({report.failed} failed)",
        highlight=False,
    )
