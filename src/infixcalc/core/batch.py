"""
File batch evaluation.

Reads one expression per line and writes, for each line, an ``Input:`` echo,
an ``Output:`` line holding the value or ``Error: <message>``, and a blank
separator. A failing line never stops the lines after it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, Field

from infixcalc.core.errors import OverwriteRefusedError
from infixcalc.core.expression_lang.engine import Strategy, evaluate_safely
from infixcalc.core.ir.values import EvaluationOutcome

logger = logging.getLogger(__name__)


class BatchReport(BaseModel):
    """Summary of one batch run."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    results: list[EvaluationOutcome] = Field(default_factory=list)


def calculate_lines(
    lines: Iterable[str],
    sink: TextIO,
    strategy: Strategy | str = Strategy.STACK,
) -> BatchReport:
    """Evaluate each line and write the formatted record to ``sink``."""
    report = BatchReport()
    for raw in lines:
        line = raw.rstrip("\r\n")
        outcome = evaluate_safely(line, strategy)
        sink.write(f"Input:  {line}\n")
        sink.write(f"Output: {outcome.render()}\n")
        sink.write("\n")

        report.total += 1
        report.results.append(outcome)
        if outcome.ok:
            report.succeeded += 1
        else:
            report.failed += 1
            logger.info(f"Line {report.total} failed: {outcome.error}")

    logger.info(f"Batch finished: {report.succeeded}/{report.total} lines evaluated")
    return report


def calculate_from_file(
    input_path: Path | str,
    output_path: Path | str,
    *,
    overwrite: bool = False,
    strategy: Strategy | str = Strategy.STACK,
) -> BatchReport:
    """Evaluate every line of ``input_path`` into ``output_path``.

    Raises:
        OverwriteRefusedError: If both paths name the same file and
            ``overwrite`` is not set.
        FileNotFoundError: If the input file does not exist.
        OSError: If either path cannot be read or written.
        UnicodeDecodeError: If the input file is not UTF-8 text.
    """
    source = Path(input_path)
    target = Path(output_path)
    if not overwrite and source.resolve() == target.resolve():
        raise OverwriteRefusedError("Overwrite flag off - cannot overwrite input file")

    # target may be the input file itself
    lines = source.read_text(encoding="utf-8").splitlines()
    logger.info(f"Evaluating {len(lines)} lines from {source}")
    with target.open("w", encoding="utf-8") as sink:
        return calculate_lines(lines, sink, strategy)
