"""Arithmetic expression engine for exprcalc.

This module provides:
- NumericDomain: Descriptor of a numeric type (literals, operators, functions)
- Parser: Grammar built from a domain and a set of variable names
- ExpressionNode: AST produced by the parser, evaluable against bindings
- Evaluator: Reduces an AST to a value
- FLOAT_DOMAIN / INTEGER_DOMAIN: The built-in domains
"""

from exprcalc.engine.domain import (
    BinaryGroup,
    ConfigurationError,
    FunctionSignature,
    NumericDomain,
    OperatorEntry,
    OperatorGroup,
    UnaryGroup,
)
from exprcalc.engine.domains import (
    DOMAINS,
    FLOAT_DOMAIN,
    INTEGER_DOMAIN,
    get_domain,
)
from exprcalc.engine.evaluator import (
    DivisionByZeroError,
    EvaluationError,
    Evaluator,
    InvalidArgumentError,
    UnboundVariableError,
    evaluate,
)
from exprcalc.engine.parser import (
    BinaryOp,
    Constant,
    ExpressionNode,
    FunctionCall,
    ParseError,
    ParseErrorKind,
    Parser,
    UnaryOp,
    Variable,
    build_parser,
    format_expression,
    parse,
)
from exprcalc.engine.scanner import Scanner

__all__ = [
    # Domain
    "BinaryGroup",
    "ConfigurationError",
    "FunctionSignature",
    "NumericDomain",
    "OperatorEntry",
    "OperatorGroup",
    "UnaryGroup",
    # Built-in domains
    "DOMAINS",
    "FLOAT_DOMAIN",
    "INTEGER_DOMAIN",
    "get_domain",
    # Evaluator
    "DivisionByZeroError",
    "EvaluationError",
    "Evaluator",
    "InvalidArgumentError",
    "UnboundVariableError",
    "evaluate",
    # Parser
    "BinaryOp",
    "Constant",
    "ExpressionNode",
    "FunctionCall",
    "ParseError",
    "ParseErrorKind",
    "Parser",
    "UnaryOp",
    "Variable",
    "build_parser",
    "format_expression",
    "parse",
    # Scanner
    "Scanner",
]
