"""
infixcalc CLI - main application.

Registers the command modules on a single typer app and applies global
options (version, config file, verbosity).
"""

import sys
from pathlib import Path

import typer

from infixcalc.cli.batch import batch_command
from infixcalc.cli.evaluate import demo_command, eval_command, tokens_command
from infixcalc.cli.utils import configure_logging, resolve_config, version_callback

app = typer.Typer(
    help="""infixcalc – infix arithmetic/boolean expression calculator

Commands:
  • eval: evaluate one expression
  • tokens: show how an expression is tokenized
  • batch: evaluate a file of expressions
  • demo: compare both evaluators on sample expressions
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to infixcalc.toml (default: ./infixcalc.toml if present)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """infixcalc CLI main callback for global options."""
    calculator_config = resolve_config(config)
    configure_logging(calculator_config, verbose)
    ctx.obj = calculator_config


app.command(name="eval")(eval_command)
app.command(name="tokens")(tokens_command)
app.command(name="batch")(batch_command)
app.command(name="demo")(demo_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
