"""exprcalc CLI entry point."""

import sys

import click


@click.group()
def cli():
    """exprcalc: evaluate arithmetic expressions from the command line."""
    # Integer results and inputs may run to any number of digits
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)


# Register subcommands
from exprcalc.cli.calc_cmd import calc  # noqa: E402
from exprcalc.cli.functions_cmd import functions  # noqa: E402
from exprcalc.cli.nums_cmd import nums  # noqa: E402

cli.add_command(calc)
cli.add_command(functions)
cli.add_command(nums)
