"""Numeric domain descriptors for the exprcalc expression engine.

A domain bundles everything the grammar needs to know about one numeric type:
- how a numeral is converted to a value
- the named constants
- the operator-precedence groups, loosest binding first
- the named functions and their fixed arities

Descriptors are validated eagerly when constructed, so a bad table fails
before any input is read.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable

IDENTIFIER_PATTERN = re.compile(r"[^\W\d]\w*")

# Characters the grammar reserves for grouping and argument lists
STRUCTURAL_CHARACTERS = frozenset("(),")


class ConfigurationError(ValueError):
    """Invalid domain descriptor or variable set, raised before parsing."""
    pass


def is_identifier(name: str) -> bool:
    """Check whether a name obeys the identifier lexical rule."""
    return IDENTIFIER_PATTERN.fullmatch(name) is not None


@dataclass(frozen=True)
class OperatorEntry:
    """One operator syntax within a group.

    Attributes:
        syntax: The literal text of the operator (e.g. "**")
        operation: Callable taking one (unary) or two (binary) domain values
    """

    syntax: str
    operation: Callable[..., Any]


@dataclass(frozen=True)
class UnaryGroup:
    """A precedence level of prefix operators.

    Entries are tried in declaration order; the first whose syntax matches wins.
    """

    entries: tuple[OperatorEntry, ...]


@dataclass(frozen=True)
class BinaryGroup:
    """A precedence level of infix operators sharing one associativity."""

    entries: tuple[OperatorEntry, ...]
    right_associative: bool = False


OperatorGroup = UnaryGroup | BinaryGroup


@dataclass(frozen=True)
class FunctionSignature:
    """A named function callable from expressions.

    Attributes:
        name: Function name as written in expressions
        arity: Exact number of arguments the function takes
        operation: The Python callable, invoked positionally
        description: Short human-readable description
    """

    name: str
    arity: int
    operation: Callable[..., Any]
    description: str = ""


@dataclass(frozen=True, eq=False)
class NumericDomain:
    """Configuration bundle that parameterizes the engine over a numeric type.

    Attributes:
        name: Short name of the domain (e.g. "float")
        convert_literal: Turns numeral text into a domain value; raises
            ValueError when the numeral is not valid for the domain
        operator_groups: Precedence groups, index 0 binds loosest
        constants: Constant name to value
        functions: Function name to signature
    """

    name: str
    convert_literal: Callable[[str], Any]
    operator_groups: tuple[OperatorGroup, ...]
    constants: dict[str, Any] = field(default_factory=dict)
    functions: dict[str, FunctionSignature] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the descriptor's tables.

        Raises:
            ConfigurationError: If a name is not an identifier, a function and
                a constant share a name, a function's arity is negative, or an
                operator syntax is empty or uses a structural character
        """
        for name in self.constants:
            if not is_identifier(name):
                raise ConfigurationError(
                    f"Constant name '{name}' is not a valid identifier"
                )

        for key, signature in self.functions.items():
            if key != signature.name:
                raise ConfigurationError(
                    f"Function registered as '{key}' is named '{signature.name}'"
                )
            if not is_identifier(key):
                raise ConfigurationError(
                    f"Function name '{key}' is not a valid identifier"
                )
            if key in self.constants:
                raise ConfigurationError(
                    f"Function name '{key}' is already a constant"
                )
            if signature.arity < 0:
                raise ConfigurationError(
                    f"Function '{key}' has negative arity {signature.arity}"
                )

        for group in self.operator_groups:
            if not group.entries:
                raise ConfigurationError("Operator groups must not be empty")
            for entry in group.entries:
                if not entry.syntax:
                    raise ConfigurationError("Operator syntax must not be empty")
                clash = STRUCTURAL_CHARACTERS.intersection(entry.syntax)
                if clash:
                    raise ConfigurationError(
                        f"Operator '{entry.syntax}' uses reserved character "
                        f"'{sorted(clash)[0]}'"
                    )

    def check_variables(self, variables: tuple[str, ...]) -> None:
        """Check caller-supplied variable names against this domain.

        Raises:
            ConfigurationError: If a variable is not an identifier or collides
                with a constant or function name
        """
        for name in variables:
            if not is_identifier(name):
                raise ConfigurationError(
                    f"Variable name '{name}' is not a valid identifier"
                )
            if name in self.constants:
                raise ConfigurationError(
                    f"The variable name '{name}' cannot be used because it is "
                    "already a built-in constant"
                )
            if name in self.functions:
                raise ConfigurationError(
                    f"The variable name '{name}' cannot be used because it is "
                    "already a built-in function"
                )

    def unary_groups(self) -> list[tuple[int, UnaryGroup]]:
        """Return (precedence index, group) for every unary group."""
        return [
            (index, group)
            for index, group in enumerate(self.operator_groups)
            if isinstance(group, UnaryGroup)
        ]
