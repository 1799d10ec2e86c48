"""Command that lists what a numeric domain offers."""

from pathlib import Path

import click

from exprcalc.cli.output import format_value, load_config
from exprcalc.engine import DOMAINS


@click.command()
@click.option(
    "--domain", "-d",
    type=click.Choice(sorted(DOMAINS)),
    default=None,
    help="Numeric domain to describe (default: float).",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with default settings.",
)
def functions(domain: str | None, config_path: Path | None):
    """List the functions and constants of a numeric domain."""
    config = load_config(config_path, domain=domain)
    numeric_domain = config.numeric_domain

    click.echo(click.style(f"Functions ({numeric_domain.name}):", bold=True))
    for name in sorted(numeric_domain.functions):
        signature = numeric_domain.functions[name]
        click.echo(f"  {name}/{signature.arity}  {signature.description}".rstrip())

    if numeric_domain.constants:
        click.echo(click.style("Constants:", bold=True))
        for name in sorted(numeric_domain.constants):
            click.echo(f"  {name} = {format_value(numeric_domain.constants[name])}")
