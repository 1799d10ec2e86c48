"""exprcalc: configurable arithmetic expression calculator."""

__version__ = "0.1.0"
