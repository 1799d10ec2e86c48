"""Command that evaluates a single expression."""

import logging
from pathlib import Path

import click

from exprcalc.cli.output import (
    format_value,
    load_config,
    report_evaluation_error,
    report_parse_error,
)
from exprcalc.engine import DOMAINS, EvaluationError, ParseError, build_parser

logger = logging.getLogger(__name__)


@click.command()
@click.argument("expression", required=False)
@click.option(
    "--round", "-r", "round_digits",
    type=click.IntRange(min=0),
    default=None,
    help="Round the result to at most this many decimal places.",
)
@click.option(
    "--domain", "-d",
    type=click.Choice(sorted(DOMAINS)),
    default=None,
    help="Numeric domain to evaluate in (default: float).",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with default settings.",
)
def calc(
    expression: str | None,
    round_digits: int | None,
    domain: str | None,
    config_path: Path | None,
):
    """Evaluate EXPRESSION and print the result.

    The expression is read from stdin when not given.
    """
    config = load_config(config_path, round=round_digits, domain=domain)

    if expression is None:
        expression = click.get_text_stream("stdin").read()

    logger.debug("Evaluating %r in the %s domain", expression, config.domain)

    try:
        ast = build_parser(config.numeric_domain).parse(expression)
        value = ast.evaluate({})
    except ParseError as e:
        report_parse_error(expression, e)
        raise SystemExit(2)
    except EvaluationError as e:
        report_evaluation_error(e)
        raise SystemExit(1)

    click.echo(format_value(value, config.round))
