"""Tests for the built-in numeric domains."""

import math

import pytest

from exprcalc.engine import (
    DOMAINS,
    FLOAT_DOMAIN,
    INTEGER_DOMAIN,
    ConfigurationError,
    DivisionByZeroError,
    InvalidArgumentError,
    get_domain,
    parse,
)


def calc_float(source: str):
    return parse(source, FLOAT_DOMAIN).evaluate()


def calc_int(source: str):
    return parse(source, INTEGER_DOMAIN).evaluate()


# =============================================================================
# Float Domain Tests
# =============================================================================


class TestFloatDomain:
    """Tests for the floating point domain."""

    def test_constants(self):
        assert calc_float("pi") == math.pi
        assert calc_float("tau") == math.tau
        assert calc_float("e") == math.e

    def test_trigonometry(self):
        assert calc_float("sin(pi / 2)") == pytest.approx(1.0)
        assert calc_float("cos(0)") == 1.0
        assert calc_float("atan2(1, 1)") == pytest.approx(math.pi / 4)
        assert calc_float("tanh(0)") == 0.0

    def test_logarithms(self):
        assert calc_float("ln(e)") == pytest.approx(1.0)
        assert calc_float("log10(1000)") == pytest.approx(3.0)
        assert calc_float("log2(8)") == 3.0
        assert calc_float("log(8, 2)") == pytest.approx(3.0)

    def test_rounding_functions_return_floats(self):
        assert calc_float("floor(2.7)") == 2.0
        assert isinstance(calc_float("floor(2.7)"), float)
        assert calc_float("ceil(2.1)") == 3.0
        assert calc_float("round(2.5)") == 2.0
        assert calc_float("abs(-3)") == 3.0

    def test_remainder_keeps_dividend_sign(self):
        assert calc_float("7 % 3") == 1.0
        assert calc_float("-7 % 3") == -1.0

    def test_min_max_hypot(self):
        assert calc_float("min(3, 4)") == 3.0
        assert calc_float("max(3, 4)") == 4.0
        assert calc_float("hypot(3, 4)") == 5.0

    def test_log_of_zero_is_invalid(self):
        with pytest.raises(InvalidArgumentError):
            calc_float("ln(0)")


# =============================================================================
# Integer Domain Tests
# =============================================================================


class TestIntegerDomain:
    """Tests for the arbitrary-precision integer domain."""

    def test_exact_power(self):
        assert calc_int("2 ** 100") == 2**100
        assert calc_int("2 ^ 3 ^ 2") == 512

    def test_floor_division_and_modulo(self):
        assert calc_int("7 / 2") == 3
        assert calc_int("-7 / 2") == -4
        assert calc_int("-7 % 3") == 2

    def test_bitwise_precedence(self):
        assert calc_int("1 | 2 & 3") == 3
        assert calc_int("6 & 3") == 2
        assert calc_int("1 + 2 << 1") == 6
        assert calc_int("~0") == -1
        assert calc_int("xor(6, 3)") == 5

    def test_shifts(self):
        assert calc_int("1 << 10") == 1024
        assert calc_int("1024 >> 3") == 128

    def test_negative_shift_is_invalid(self):
        with pytest.raises(InvalidArgumentError):
            calc_int("1 << -1")

    def test_huge_shift_is_invalid(self):
        with pytest.raises(InvalidArgumentError):
            calc_int("1 << 3000000000")

    def test_negative_exponent_is_invalid(self):
        with pytest.raises(InvalidArgumentError):
            calc_int("2 ** -1")

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            calc_int("1 / 0")
        with pytest.raises(DivisionByZeroError):
            calc_int("1 % 0")

    def test_factorial(self):
        assert calc_int("fact(0)") == 1
        assert calc_int("fact(20)") == 2432902008176640000
        assert calc_int("fact(30)") == math.factorial(30)

    def test_negative_factorial_is_invalid(self):
        with pytest.raises(InvalidArgumentError):
            calc_int("fact(-1)")

    def test_modpow(self):
        assert calc_int("modpow(4, 13, 497)") == 445
        assert calc_int("modpow(2, 100, 1000000007)") == pow(2, 100, 1000000007)

    def test_modpow_zero_modulus(self):
        with pytest.raises(DivisionByZeroError):
            calc_int("modpow(2, 3, 0)")

    def test_number_theory(self):
        assert calc_int("gcd(12, 18)") == 6
        assert calc_int("lcm(4, 6)") == 12
        assert calc_int("isqrt(99)") == 9
        assert calc_int("sign(-5)") == -1
        assert calc_int("abs(-5)") == 5

    def test_literal_beyond_int_string_limit(self):
        assert calc_int("1" * 5000) == (10**5000 - 1) // 9
        assert calc_int("1" + "0" * 4999) == 10**4999
        assert calc_int("9" * 2001 + " + 1") == 10**2001
        assert INTEGER_DOMAIN.convert_literal("-" + "1" * 5000) == -(10**5000 - 1) // 9

    def test_no_constants(self):
        assert INTEGER_DOMAIN.constants == {}


# =============================================================================
# Lookup Tests
# =============================================================================


class TestGetDomain:
    def test_get_builtin(self):
        assert get_domain("float") is FLOAT_DOMAIN
        assert get_domain("integer") is INTEGER_DOMAIN
        assert sorted(DOMAINS) == ["float", "integer"]

    def test_unknown_domain(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_domain("complex")
        assert "float" in str(exc_info.value)
