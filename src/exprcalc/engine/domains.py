"""Built-in numeric domains for the exprcalc expression engine.

Two descriptors ship with the engine:
- FLOAT_DOMAIN: 64-bit floating point with trigonometric and transcendental
  functions and the constants pi, tau and e
- INTEGER_DOMAIN: arbitrary-precision integers with bitwise and shift
  operators, exact exponentiation, factorial and modular exponentiation

Operations raise ZeroDivisionError, ValueError or OverflowError for invalid
operands; the evaluator reports those as typed evaluation errors.
"""

import math
import operator

from exprcalc.engine.domain import (
    BinaryGroup,
    ConfigurationError,
    FunctionSignature,
    NumericDomain,
    OperatorEntry,
    UnaryGroup,
)

# Shift counts and exponents must fit a signed 32-bit integer
MAX_MAGNITUDE = 2**31 - 1

# Long numerals are converted this many digits at a time
LITERAL_CHUNK_DIGITS = 1000


def _signatures(*signatures: FunctionSignature) -> dict[str, FunctionSignature]:
    return {signature.name: signature for signature in signatures}


# -----------------------------------------------------------------------------
# Floating point
# -----------------------------------------------------------------------------


def _convert_float(text: str) -> float:
    return float(text)


def _float_remainder(a: float, b: float) -> float:
    """Remainder with the sign of the dividend, like C's fmod."""
    if b == 0:
        raise ZeroDivisionError("float remainder by zero")
    return math.fmod(a, b)


def _float_power(a: float, b: float) -> float:
    """Real power; negative bases with fractional exponents are rejected."""
    return math.pow(a, b)


def _sqr(x):
    return x * x


FLOAT_DOMAIN = NumericDomain(
    name="float",
    convert_literal=_convert_float,
    operator_groups=(
        BinaryGroup((
            OperatorEntry("+", operator.add),
            OperatorEntry("-", operator.sub),
        )),
        BinaryGroup((
            OperatorEntry("*", operator.mul),
            OperatorEntry("/", operator.truediv),
            OperatorEntry("%", _float_remainder),
        )),
        UnaryGroup((
            OperatorEntry("+", operator.pos),
            OperatorEntry("-", operator.neg),
        )),
        BinaryGroup(
            (
                OperatorEntry("^", _float_power),
                OperatorEntry("**", _float_power),
            ),
            right_associative=True,
        ),
    ),
    constants={
        "pi": math.pi,
        "tau": math.tau,
        "e": math.e,
    },
    functions=_signatures(
        FunctionSignature("sin", 1, math.sin, "Sine of an angle in radians"),
        FunctionSignature("cos", 1, math.cos, "Cosine of an angle in radians"),
        FunctionSignature("tan", 1, math.tan, "Tangent of an angle in radians"),
        FunctionSignature("asin", 1, math.asin, "Arc sine, in radians"),
        FunctionSignature("acos", 1, math.acos, "Arc cosine, in radians"),
        FunctionSignature("atan", 1, math.atan, "Arc tangent, in radians"),
        FunctionSignature("sinh", 1, math.sinh, "Hyperbolic sine"),
        FunctionSignature("cosh", 1, math.cosh, "Hyperbolic cosine"),
        FunctionSignature("tanh", 1, math.tanh, "Hyperbolic tangent"),
        FunctionSignature("sqrt", 1, math.sqrt, "Square root"),
        FunctionSignature("sqr", 1, _sqr, "Square"),
        FunctionSignature("exp", 1, math.exp, "e raised to the argument"),
        FunctionSignature("ln", 1, math.log, "Natural logarithm"),
        FunctionSignature("log10", 1, math.log10, "Base-10 logarithm"),
        FunctionSignature("log2", 1, math.log2, "Base-2 logarithm"),
        FunctionSignature("abs", 1, math.fabs, "Absolute value"),
        FunctionSignature("floor", 1, lambda x: float(math.floor(x)), "Round down"),
        FunctionSignature("ceil", 1, lambda x: float(math.ceil(x)), "Round up"),
        FunctionSignature("round", 1, lambda x: float(round(x)), "Round half to even"),
        FunctionSignature("pow", 2, _float_power, "First argument raised to the second"),
        FunctionSignature("atan2", 2, math.atan2, "Arc tangent of y / x, in radians"),
        FunctionSignature("log", 2, math.log, "Logarithm of the first argument to a base"),
        FunctionSignature("hypot", 2, math.hypot, "Euclidean norm"),
        FunctionSignature("min", 2, min, "Smaller of two values"),
        FunctionSignature("max", 2, max, "Larger of two values"),
    ),
)


# -----------------------------------------------------------------------------
# Arbitrary-precision integer
# -----------------------------------------------------------------------------


def _convert_integer(text: str) -> int:
    """Convert a numeral of any length, staying under the int-from-str digit limit."""
    if "." in text:
        raise ValueError("integer literals cannot contain a decimal point")
    if len(text) <= LITERAL_CHUNK_DIGITS:
        return int(text)

    digits = text.lstrip("+-")
    head = len(digits) % LITERAL_CHUNK_DIGITS or LITERAL_CHUNK_DIGITS
    value = int(digits[:head])
    scale = 10**LITERAL_CHUNK_DIGITS
    for start in range(head, len(digits), LITERAL_CHUNK_DIGITS):
        value = value * scale + int(digits[start:start + LITERAL_CHUNK_DIGITS])
    return -value if text.startswith("-") else value


def _magnitude(value: int, what: str) -> int:
    """Check a shift count or exponent is usable."""
    if value < 0:
        raise ValueError(f"negative {what} {value}")
    if value > MAX_MAGNITUDE:
        raise OverflowError(f"{what} {value} is too large")
    return value


def _shift_left(a: int, b: int) -> int:
    return a << _magnitude(b, "shift count")


def _shift_right(a: int, b: int) -> int:
    return a >> _magnitude(b, "shift count")


def _integer_power(a: int, b: int) -> int:
    return a ** _magnitude(b, "exponent")


def _factorial(n: int) -> int:
    return math.factorial(_magnitude(n, "factorial argument"))


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _modpow(base: int, exponent: int, modulus: int) -> int:
    """base ** exponent % modulus; a negative exponent uses the modular inverse."""
    if modulus == 0:
        raise ZeroDivisionError("modpow modulus is zero")
    return pow(base, exponent, modulus)


INTEGER_DOMAIN = NumericDomain(
    name="integer",
    convert_literal=_convert_integer,
    operator_groups=(
        BinaryGroup((OperatorEntry("|", operator.or_),)),
        BinaryGroup((OperatorEntry("&", operator.and_),)),
        BinaryGroup((
            OperatorEntry("<<", _shift_left),
            OperatorEntry(">>", _shift_right),
        )),
        BinaryGroup((
            OperatorEntry("+", operator.add),
            OperatorEntry("-", operator.sub),
        )),
        BinaryGroup((
            OperatorEntry("*", operator.mul),
            OperatorEntry("/", operator.floordiv),
            OperatorEntry("%", operator.mod),
        )),
        UnaryGroup((
            OperatorEntry("+", operator.pos),
            OperatorEntry("-", operator.neg),
            OperatorEntry("~", operator.invert),
        )),
        BinaryGroup(
            (
                OperatorEntry("**", _integer_power),
                OperatorEntry("^", _integer_power),
            ),
            right_associative=True,
        ),
    ),
    functions=_signatures(
        FunctionSignature("abs", 1, abs, "Absolute value"),
        FunctionSignature("sqr", 1, _sqr, "Square"),
        FunctionSignature("isqrt", 1, math.isqrt, "Integer square root, rounded down"),
        FunctionSignature("fact", 1, _factorial, "Factorial"),
        FunctionSignature("sign", 1, _sign, "-1, 0 or 1 by the sign of the argument"),
        FunctionSignature("gcd", 2, math.gcd, "Greatest common divisor"),
        FunctionSignature("lcm", 2, math.lcm, "Least common multiple"),
        FunctionSignature("min", 2, min, "Smaller of two values"),
        FunctionSignature("max", 2, max, "Larger of two values"),
        FunctionSignature("xor", 2, operator.xor, "Bitwise exclusive or"),
        FunctionSignature("modpow", 3, _modpow, "Modular exponentiation"),
    ),
)


DOMAINS: dict[str, NumericDomain] = {
    FLOAT_DOMAIN.name: FLOAT_DOMAIN,
    INTEGER_DOMAIN.name: INTEGER_DOMAIN,
}


def get_domain(name: str) -> NumericDomain:
    """Look up a built-in domain by name.

    Raises:
        ConfigurationError: If no built-in domain has that name
    """
    try:
        return DOMAINS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown numeric domain '{name}'. Expected one of: "
            + ", ".join(sorted(DOMAINS))
        ) from None
