import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from infixcalc.core.errors import ConfigError

CONFIG_FILENAME = "infixcalc.toml"

_STRATEGIES = ("stack", "recursive", "verify")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Evaluation Configuration
# =============================================================================


@dataclass
class EvaluationConfig:
    """Evaluator selection."""

    strategy: str = "stack"  # "stack" | "recursive" | "verify"


# =============================================================================
# Batch Configuration
# =============================================================================


@dataclass
class BatchConfig:
    """Defaults for file batch runs.

    Examples in infixcalc.toml:

        [batch]
        input = "input.txt"
        output = "output.txt"
        overwrite = false
    """

    input: str = "input.txt"
    output: str = "output.txt"
    overwrite: bool = False  # Allow output path == input path


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class CalculatorConfig:
    """
    Configuration loaded from infixcalc.toml.

    Every section is optional; missing keys fall back to defaults.
    """

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Path | None = None

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level)


def default_config() -> CalculatorConfig:
    return CalculatorConfig()


def find_config(start: Path | None = None) -> Path | None:
    """Return ``infixcalc.toml`` in ``start`` (default: cwd) if it exists."""
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path) -> CalculatorConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    evaluation_data = data.get("evaluation", {})
    batch_data = data.get("batch", {})
    logging_data = data.get("logging", {})

    strategy = str(evaluation_data.get("strategy", "stack")).lower()
    if strategy not in _STRATEGIES:
        raise ConfigError(
            f"Unknown evaluation strategy {strategy!r} in {path}; "
            f"expected one of {', '.join(_STRATEGIES)}"
        )

    level = str(logging_data.get("level", "WARNING")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {level!r} in {path}")

    overwrite = batch_data.get("overwrite", False)
    if not isinstance(overwrite, bool):
        raise ConfigError(f"[batch].overwrite must be true or false in {path}")

    return CalculatorConfig(
        evaluation=EvaluationConfig(strategy=strategy),
        batch=BatchConfig(
            input=batch_data.get("input", "input.txt"),
            output=batch_data.get("output", "output.txt"),
            overwrite=overwrite,
        ),
        logging=LoggingConfig(level=level),
        source=path,
    )
