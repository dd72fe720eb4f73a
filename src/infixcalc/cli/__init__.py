"""
infixcalc CLI Package.

- app.py: main typer app, global options, command registration
- evaluate.py: eval, tokens and demo commands
- batch.py: file batch command
- utils.py: shared utilities (console, config, logging)
"""

from infixcalc.cli.app import app, main
from infixcalc.cli.utils import version_callback

__all__ = [
    "app",
    "main",
    "version_callback",
]
