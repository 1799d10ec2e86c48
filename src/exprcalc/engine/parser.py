"""Grammar builder and parser for the exprcalc expression engine.

Builds a precedence-climbing recursive descent parser from a NumericDomain's
operator-group table: one parsing function per group, with the primary
production (numerals, names, parenthesised expressions, function calls) at
the innermost level.

For the built-in float domain the levels are (lowest to highest):
1. + -            (left associative)
2. * / %          (left associative)
3. + - (unary)    (prefix)
4. ^ **           (right associative)
5. primary

The primary production commits to the first alternative that starts
matching, so a failure inside it is reported where it happened instead of
being retried as something else.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Iterable, Mapping

from exprcalc.engine.domain import (
    BinaryGroup,
    FunctionSignature,
    NumericDomain,
    OperatorEntry,
    UnaryGroup,
)
from exprcalc.engine.scanner import Scanner


# -----------------------------------------------------------------------------
# AST Node Types
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ExpressionNode:
    """Base class for AST nodes."""

    def evaluate(self, bindings: Mapping[str, Any] | None = None) -> Any:
        """Evaluate this tree against variable bindings.

        Args:
            bindings: Value for every variable the parser was built with

        Returns:
            The domain value of the expression

        Raises:
            EvaluationError: If a variable is unbound, an operation faults
                or the tree is too deep to walk
        """
        from exprcalc.engine.evaluator import EvaluationError, Evaluator

        try:
            return Evaluator(bindings or {}).evaluate(self)
        except RecursionError:
            raise EvaluationError("Expression is nested too deeply to evaluate") from None


@dataclass(frozen=True)
class Constant(ExpressionNode):
    """A resolved value: a numeral or a named constant.

    Attributes:
        value: The domain value
        text: The source spelling (numeral text or constant name)
    """

    value: Any
    text: str


@dataclass(frozen=True)
class Variable(ExpressionNode):
    """A variable reference, resolved only at evaluation time."""
    name: str


@dataclass(frozen=True)
class UnaryOp(ExpressionNode):
    """Prefix operation (e.g., -x)."""
    operator: str
    operand: ExpressionNode
    operation: Callable[[Any], Any] = field(repr=False)


@dataclass(frozen=True)
class BinaryOp(ExpressionNode):
    """Binary operation (e.g., a + b)."""
    operator: str
    left: ExpressionNode
    right: ExpressionNode
    operation: Callable[[Any, Any], Any] = field(repr=False)


@dataclass(frozen=True)
class FunctionCall(ExpressionNode):
    """Function call (e.g., sin(x), pow(a, b))."""
    name: str
    arguments: tuple[ExpressionNode, ...]
    function: FunctionSignature = field(repr=False)


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------


class ParseErrorKind(Enum):
    """The kinds of failure a parse can report."""

    OPERAND_MISSING = "operand_missing"
    CLOSE_PAREN_MISSING = "close_paren_missing"
    OPEN_PAREN_MISSING = "open_paren_missing"
    OPEN_PAREN_EXPECTED = "open_paren_expected"
    UNRECOGNIZED_OPERATOR = "unrecognized_operator"
    UNRECOGNIZED_NAME = "unrecognized_name"
    UNEXPECTED_CLOSING_PAREN = "unexpected_closing_paren"
    ARITY_MISMATCH = "arity_mismatch"
    EXTRANEOUS_CLOSING_PAREN = "extraneous_closing_paren"
    MISSING_OPERATOR = "missing_operator"
    INVALID_LITERAL = "invalid_literal"
    TOO_DEEP = "too_deep"


class ParseError(Exception):
    """Error during parsing.

    Attributes:
        message: Human-readable description
        index: Zero-based character offset of the failure in the input
        kind: Which of the ParseErrorKind failures occurred
        expected: Declared arity, for ARITY_MISMATCH
        actual: Parsed argument count, for ARITY_MISMATCH
    """

    def __init__(
        self,
        message: str,
        index: int,
        kind: ParseErrorKind,
        expected: int | None = None,
        actual: int | None = None,
    ):
        self.message = message
        self.index = index
        self.kind = kind
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message} (at position {index})")


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------


ParseFn = Callable[[Scanner], ExpressionNode]


def _match_operator(
    scanner: Scanner, entries: tuple[OperatorEntry, ...]
) -> OperatorEntry | None:
    """Consume the first entry whose syntax comes next, in declaration order."""
    for entry in entries:
        if scanner.literal(entry.syntax):
            return entry
    return None


class Parser:
    """Parser built for one domain and one set of variable names.

    The grammar is built once in the constructor and never changes, so a
    single Parser can be shared between threads; each parse() call keeps its
    position in its own Scanner.

    Usage:
        parser = Parser(FLOAT_DOMAIN, ["x"])
        ast = parser.parse("x * x + 1")
        ast.evaluate({"x": 3.0})  # 10.0
    """

    def __init__(self, domain: NumericDomain, variables: Iterable[str] = ()):
        self.domain = domain
        self.variables = tuple(dict.fromkeys(variables))
        domain.check_variables(self.variables)

        self._variable_names = frozenset(self.variables)
        self._unary_prefixes = [
            (index, entry)
            for index, group in domain.unary_groups()
            for entry in group.entries
        ]
        self._levels = self._build_levels()

    def parse(self, source: str) -> ExpressionNode:
        """Parse the expression and return the AST root.

        Raises:
            ParseError: If the input is not a single well-formed expression
        """
        scanner = Scanner(source)
        try:
            expression = self._levels[0](scanner)
        except RecursionError:
            raise ParseError(
                "Expression is nested too deeply.",
                scanner.position,
                ParseErrorKind.TOO_DEEP,
            ) from None

        position = scanner.skip_whitespace()
        if position < len(source):
            if source[position] == ")":
                raise ParseError(
                    "Extraneous closing parenthesis.",
                    position,
                    ParseErrorKind.EXTRANEOUS_CLOSING_PAREN,
                )
            raise ParseError(
                "Missing operator.", position, ParseErrorKind.MISSING_OPERATOR
            )

        return expression

    # -------------------------------------------------------------------------
    # Grammar construction
    # -------------------------------------------------------------------------

    def _build_levels(self) -> list[ParseFn]:
        """Build one parsing function per operator group, innermost first."""
        groups = self.domain.operator_groups
        levels: list[ParseFn] = [self._parse_primary] * (len(groups) + 1)

        for index in reversed(range(len(groups))):
            group = groups[index]
            if isinstance(group, UnaryGroup):
                levels[index] = self._unary_level(group, levels, index)
            elif group.right_associative:
                levels[index] = self._right_associative_level(group, levels[index + 1])
            else:
                levels[index] = self._left_associative_level(group, levels[index + 1])

        return levels

    def _unary_level(
        self, group: UnaryGroup, levels: list[ParseFn], index: int
    ) -> ParseFn:
        def parse_unary(scanner: Scanner) -> ExpressionNode:
            entry = _match_operator(scanner, group.entries)
            if entry is None:
                return levels[index + 1](scanner)
            # Recurse into the same level so prefixes chain (--x)
            operand = levels[index](scanner)
            return UnaryOp(entry.syntax, operand, entry.operation)

        return parse_unary

    def _left_associative_level(self, group: BinaryGroup, operand: ParseFn) -> ParseFn:
        def parse_left(scanner: Scanner) -> ExpressionNode:
            left = operand(scanner)

            while True:
                entry = _match_operator(scanner, group.entries)
                if entry is None:
                    break
                right = operand(scanner)
                left = BinaryOp(entry.syntax, left, right, entry.operation)

            return left

        return parse_left

    def _right_associative_level(self, group: BinaryGroup, operand: ParseFn) -> ParseFn:
        def parse_right(scanner: Scanner) -> ExpressionNode:
            operands = [operand(scanner)]
            entries: list[OperatorEntry] = []

            while True:
                entry = _match_operator(scanner, group.entries)
                if entry is None:
                    break
                entries.append(entry)
                operands.append(operand(scanner))

            result = operands.pop()
            for entry in reversed(entries):
                result = BinaryOp(entry.syntax, operands.pop(), result, entry.operation)

            return result

        return parse_right

    # -------------------------------------------------------------------------
    # Primary production
    # -------------------------------------------------------------------------

    def _parse_primary(self, scanner: Scanner) -> ExpressionNode:
        """Parse a numeral, name, parenthesised expression or prefixed operand."""
        start = scanner.skip_whitespace()

        if start >= len(scanner.source):
            raise ParseError(
                "Unexpected end of expression: operand missing.",
                start,
                ParseErrorKind.OPERAND_MISSING,
            )

        numeral = scanner.numeral()
        if numeral is not None:
            try:
                value = self.domain.convert_literal(numeral)
            except (ValueError, ArithmeticError) as e:
                raise ParseError(
                    f"Invalid number '{numeral}': {e}.",
                    start,
                    ParseErrorKind.INVALID_LITERAL,
                ) from e
            return Constant(value, numeral)

        name = scanner.identifier()
        if name is not None:
            return self._parse_name(scanner, name, start)

        if scanner.literal("("):
            expression = self._levels[0](scanner)
            self._expect_close_paren(scanner)
            return expression

        # A sign in operand position binds at its own group's level
        for index, entry in self._unary_prefixes:
            if scanner.literal(entry.syntax):
                operand = self._levels[index](scanner)
                return UnaryOp(entry.syntax, operand, entry.operation)

        if scanner.peek() == ")":
            raise ParseError(
                "Expected a number, parenthesised expression, unary operator "
                "or function name.",
                start,
                ParseErrorKind.UNEXPECTED_CLOSING_PAREN,
            )

        raise ParseError(
            "Unrecognized unary operator or function name.",
            start,
            ParseErrorKind.UNRECOGNIZED_OPERATOR,
        )

    def _parse_name(self, scanner: Scanner, name: str, start: int) -> ExpressionNode:
        """Resolve an identifier as a function call, variable or constant."""
        signature = self.domain.functions.get(name)
        if signature is not None:
            return self._parse_function_call(scanner, signature, start)

        if name in self._variable_names:
            return Variable(name)

        if name in self.domain.constants:
            return Constant(self.domain.constants[name], name)

        raise ParseError(
            f"Unrecognized variable, constant or function name '{name}'.",
            start,
            ParseErrorKind.UNRECOGNIZED_NAME,
        )

    def _parse_function_call(
        self, scanner: Scanner, signature: FunctionSignature, start: int
    ) -> FunctionCall:
        """Parse the parenthesised argument list of a function call."""
        self._expect_open_paren(scanner)

        arguments: list[ExpressionNode] = []

        if scanner.peek() != ")":
            arguments.append(self._levels[0](scanner))

            while scanner.literal(","):
                arguments.append(self._levels[0](scanner))

        self._expect_close_paren(scanner)

        if len(arguments) != signature.arity:
            raise ParseError(
                f"Function '{signature.name}' expects {signature.arity} "
                f"argument(s), got {len(arguments)}.",
                start,
                ParseErrorKind.ARITY_MISMATCH,
                expected=signature.arity,
                actual=len(arguments),
            )

        return FunctionCall(signature.name, tuple(arguments), signature)

    def _expect_open_paren(self, scanner: Scanner) -> None:
        position = scanner.skip_whitespace()
        if scanner.literal("("):
            return
        if position >= len(scanner.source):
            raise ParseError(
                "Unexpected end of expression: '(' missing.",
                position,
                ParseErrorKind.OPEN_PAREN_MISSING,
            )
        raise ParseError("'(' expected.", position, ParseErrorKind.OPEN_PAREN_EXPECTED)

    def _expect_close_paren(self, scanner: Scanner) -> None:
        position = scanner.skip_whitespace()
        if scanner.literal(")"):
            return
        if position >= len(scanner.source):
            raise ParseError(
                "Unexpected end of expression: ')' missing.",
                position,
                ParseErrorKind.CLOSE_PAREN_MISSING,
            )
        raise ParseError(
            "Unrecognized operator.", position, ParseErrorKind.UNRECOGNIZED_OPERATOR
        )


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------


def build_parser(domain: NumericDomain, variables: Iterable[str] = ()) -> Parser:
    """Build a reusable parser for a domain and a set of variable names.

    Raises:
        ConfigurationError: If a variable collides with a constant or
            function name, or is not a valid identifier
    """
    return Parser(domain, variables)


@lru_cache(maxsize=64)
def _cached_parser(domain: NumericDomain, variables: tuple[str, ...]) -> Parser:
    return Parser(domain, variables)


def parse(
    source: str,
    domain: NumericDomain | None = None,
    variables: Iterable[str] = (),
) -> ExpressionNode:
    """Convenience function to parse an expression string.

    Args:
        source: The expression string
        domain: Numeric domain, float by default
        variables: Variable names the expression may reference

    Returns:
        The AST root node
    """
    if domain is None:
        from exprcalc.engine.domains import FLOAT_DOMAIN

        domain = FLOAT_DOMAIN
    return _cached_parser(domain, tuple(variables)).parse(source)


def format_expression(node: ExpressionNode) -> str:
    """Render a tree as source text with every operation parenthesised.

    The result parses back, with the same domain and variables, to a tree
    that evaluates to the same value.
    """
    if isinstance(node, Constant):
        return node.text
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, UnaryOp):
        return f"({node.operator}{format_expression(node.operand)})"
    if isinstance(node, BinaryOp):
        return (
            f"({format_expression(node.left)} {node.operator} "
            f"{format_expression(node.right)})"
        )
    if isinstance(node, FunctionCall):
        arguments = ", ".join(format_expression(arg) for arg in node.arguments)
        return f"{node.name}({arguments})"
    raise TypeError(f"Unknown node type: {type(node).__name__}")
