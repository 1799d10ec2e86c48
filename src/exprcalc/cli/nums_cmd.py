"""Command that applies an expression to every number in the input."""

import logging
import re
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

INTEGER_PATTERN = re.compile(r"-?\d+")
NUMBER_PATTERN = re.compile(r"-?\d*\.?\d+")


@click.command()
@click.argument("expression")
@click.option(
    "--round", "-r", "round_digits",
    type=click.IntRange(min=0),
    default=None,
    help="Round the results to at most this many decimal places.",
)
@click.option(
    "--integers-only", "-i",
    is_flag=True,
    default=False,
    help="Only match integers: '2.5' is the number 2 and the number 5.",
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
def nums(
    expression: str,
    round_digits: int | None,
    integers_only: bool,
    domain: str | None,
    config_path: Path | None,
):
    """Replace every number in stdin with EXPRESSION applied to it.

    EXPRESSION refers to the number as x, for example "x * 2 + 1".
    """
    config = load_config(
        config_path,
        round=round_digits,
        integers_only=integers_only or None,
        domain=domain,
    )
    numeric_domain = config.numeric_domain

    try:
        ast = build_parser(numeric_domain, ["x"]).parse(expression)
    except ParseError as e:
        report_parse_error(expression, e)
        raise SystemExit(2)

    # Integer literals never contain a point, whatever the setting
    if config.integers_only or numeric_domain.name == "integer":
        pattern = INTEGER_PATTERN
    else:
        pattern = NUMBER_PATTERN
    logger.debug("Matching numbers with %s", pattern.pattern)

    def substitute(match: re.Match[str]) -> str:
        value = numeric_domain.convert_literal(match.group())
        return format_value(ast.evaluate({"x": value}), config.round)

    text = click.get_text_stream("stdin").read()
    try:
        result = pattern.sub(substitute, text)
    except EvaluationError as e:
        report_evaluation_error(e)
        raise SystemExit(1)

    click.echo(result, nl=False)
