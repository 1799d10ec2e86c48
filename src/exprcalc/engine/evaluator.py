"""Evaluator for the exprcalc expression engine.

Walks the AST and reduces it to a single domain value, given a binding for
every variable. Arithmetic faults raised by a domain's operations are turned
into typed EvaluationErrors; nothing is coerced to inf or nan.
"""

from typing import Any, Callable, Mapping

from exprcalc.engine.domain import NumericDomain
from exprcalc.engine.parser import (
    BinaryOp,
    Constant,
    ExpressionNode,
    FunctionCall,
    UnaryOp,
    Variable,
    parse,
)


class EvaluationError(Exception):
    """Error during expression evaluation."""
    pass


class UnboundVariableError(EvaluationError):
    """A variable in the tree has no value in the bindings."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No value bound for variable '{name}'")


class DivisionByZeroError(EvaluationError):
    """Division, remainder or modular reduction by zero."""
    pass


class InvalidArgumentError(EvaluationError):
    """An operand outside the domain of an operation (sqrt(-1), 1 << -1, ...)."""
    pass


class Evaluator:
    """Evaluates an expression AST against variable bindings.

    Usage:
        evaluator = Evaluator({"x": 5.0})
        result = evaluator.evaluate(parse("x * x", variables=["x"]))
    """

    def __init__(self, bindings: Mapping[str, Any]):
        self.bindings = bindings

    def evaluate(self, node: ExpressionNode) -> Any:
        """Evaluate an AST node and return the result."""
        method_name = f"_eval_{type(node).__name__.lower()}"
        method = getattr(self, method_name, None)

        if method is None:
            raise EvaluationError(f"Unknown node type: {type(node).__name__}")

        return method(node)

    # -------------------------------------------------------------------------
    # Node type evaluators
    # -------------------------------------------------------------------------

    def _eval_constant(self, node: Constant) -> Any:
        return node.value

    def _eval_variable(self, node: Variable) -> Any:
        try:
            return self.bindings[node.name]
        except KeyError:
            raise UnboundVariableError(node.name) from None

    def _eval_unaryop(self, node: UnaryOp) -> Any:
        operand = self.evaluate(node.operand)
        return self._apply(node.operator, node.operation, operand)

    def _eval_binaryop(self, node: BinaryOp) -> Any:
        # Both sides always, left first
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return self._apply(node.operator, node.operation, left, right)

    def _eval_functioncall(self, node: FunctionCall) -> Any:
        args = [self.evaluate(arg) for arg in node.arguments]
        return self._apply(node.name, node.function.operation, *args)

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _apply(self, name: str, operation: Callable[..., Any], *args: Any) -> Any:
        """Call a domain operation, translating arithmetic faults."""
        try:
            return operation(*args)
        except ZeroDivisionError as e:
            raise DivisionByZeroError(f"Error evaluating '{name}': {e}") from e
        except (ValueError, OverflowError) as e:
            raise InvalidArgumentError(f"Error evaluating '{name}': {e}") from e


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------


def evaluate(
    expression: str,
    bindings: Mapping[str, Any] | None = None,
    domain: NumericDomain | None = None,
) -> Any:
    """Parse and evaluate an expression string.

    This is the main entry point for one-off evaluation. Every key of
    bindings is declared as a variable for the parse.

    Args:
        expression: The expression string to evaluate
        bindings: Variable values
        domain: NumericDomain to use, float by default

    Returns:
        The result of evaluating the expression

    Example:
        result = evaluate("2 ^ 3 ^ 2")
        # result = 512.0
    """
    bindings = bindings or {}
    ast = parse(expression, domain, sorted(bindings))
    return ast.evaluate(bindings)
