"""Shared output helpers for the CLI commands."""

import math
from pathlib import Path
from typing import Any

import click

from exprcalc.config import CalcConfig
from exprcalc.engine import ConfigurationError, EvaluationError, ParseError

# Integral floats below this print without a fractional part
_EXACT_FLOAT_LIMIT = 1e16


def format_value(value: Any, round_digits: int | None = None) -> str:
    """Format a result for output.

    Floats are rounded to at most round_digits decimals with trailing zeros
    dropped ("0.###" style); integers always print exactly.
    """
    if not isinstance(value, float):
        return str(value)

    if round_digits is not None and math.isfinite(value):
        text = f"{value:.{round_digits}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return "0" if text == "-0" else text

    if value.is_integer() and abs(value) < _EXACT_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def load_config(config_path: Path | None, **options: Any) -> CalcConfig:
    """Resolve configuration, exiting with status 1 when it is invalid."""
    try:
        return CalcConfig.resolve(config_path, **options)
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)


def report_parse_error(expression: str, error: ParseError) -> None:
    """Show the expression with a caret under the failing character."""
    click.echo(click.style(expression.rstrip("\r\n"), fg="yellow"), err=True)
    click.echo(" " * error.index + click.style("^", fg="red"), err=True)
    click.echo(click.style(error.message, fg="magenta"), err=True)


def report_evaluation_error(error: EvaluationError) -> None:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
