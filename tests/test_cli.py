"""Tests for exprcalc CLI commands."""

import pytest
from click.testing import CliRunner

from exprcalc.cli.main import cli
from exprcalc.cli.output import format_value


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("EXPRCALC_DOMAIN", "EXPRCALC_ROUND", "EXPRCALC_INTEGERS_ONLY"):
        monkeypatch.delenv(name, raising=False)


class TestFormatValue:
    def test_integral_float_prints_without_point(self):
        assert format_value(14.0) == "14"

    def test_fraction_prints_repr(self):
        assert format_value(0.1) == "0.1"

    def test_round_drops_trailing_zeros(self):
        assert format_value(1 / 3, 2) == "0.33"
        assert format_value(2.5, 3) == "2.5"
        assert format_value(2.0, 3) == "2"
        assert format_value(-0.0001, 2) == "0"

    def test_integers_print_exactly(self):
        assert format_value(2**100, 2) == str(2**100)


class TestCalc:
    def test_evaluates_argument(self, runner):
        result = runner.invoke(cli, ["calc", "2 + 3 * 4"])
        assert result.exit_code == 0
        assert result.output == "14\n"

    def test_reads_stdin(self, runner):
        result = runner.invoke(cli, ["calc"], input="6 * 7\n")
        assert result.exit_code == 0
        assert result.output == "42\n"

    def test_round(self, runner):
        result = runner.invoke(cli, ["calc", "2 ^ 0.5", "--round", "3"])
        assert result.exit_code == 0
        assert result.output == "1.414\n"

    def test_integer_domain(self, runner):
        result = runner.invoke(cli, ["calc", "--domain", "integer", "2 ** 100"])
        assert result.exit_code == 0
        assert result.output == f"{2**100}\n"

    def test_parse_error_shows_caret(self, runner):
        result = runner.invoke(cli, ["calc", "2 +"])
        assert result.exit_code == 2
        assert "   ^" in result.output
        assert "operand missing" in result.output

    def test_evaluation_error(self, runner):
        result = runner.invoke(cli, ["calc", "1 / 0"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_integer_result_beyond_int_string_limit(self, runner):
        result = runner.invoke(cli, ["calc", "-d", "integer", "fact(2000)"])
        assert result.exit_code == 0
        digits = result.output.strip()
        assert digits.isdigit()
        assert len(digits) == 5736

    def test_deep_nesting_is_a_parse_error(self, runner):
        result = runner.invoke(cli, ["calc", "(" * 5000 + "1" + ")" * 5000])
        assert result.exit_code == 2
        assert "nested too deeply" in result.output

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "exprcalc.yaml"
        path.write_text("domain: integer\n")
        result = runner.invoke(cli, ["calc", "--config", str(path), "7 / 2"])
        assert result.exit_code == 0
        assert result.output == "3\n"

    def test_invalid_config_file(self, runner, tmp_path):
        path = tmp_path / "exprcalc.yaml"
        path.write_text("domain: complex\n")
        result = runner.invoke(cli, ["calc", "--config", str(path), "1"])
        assert result.exit_code == 1
        assert "complex" in result.output


class TestNums:
    def test_applies_to_every_number(self, runner):
        result = runner.invoke(cli, ["nums", "x * 2"], input="a 1 b 2.5 c -3\n")
        assert result.exit_code == 0
        assert result.output == "a 2 b 5 c -6\n"

    def test_integers_only(self, runner):
        result = runner.invoke(cli, ["nums", "x * 2", "-i"], input="v2.5\n")
        assert result.exit_code == 0
        assert result.output == "v4.10\n"

    def test_round(self, runner):
        result = runner.invoke(cli, ["nums", "x / 3", "-r", "2"], input="1 and 2\n")
        assert result.exit_code == 0
        assert result.output == "0.33 and 0.67\n"

    def test_integer_domain(self, runner):
        result = runner.invoke(
            cli, ["nums", "x ** 2", "--domain", "integer"], input="3 and 4\n"
        )
        assert result.exit_code == 0
        assert result.output == "9 and 16\n"

    def test_long_integer_input(self, runner):
        result = runner.invoke(
            cli, ["nums", "x + 1", "-d", "integer"], input="9" * 5000 + "\n"
        )
        assert result.exit_code == 0
        assert result.output == "1" + "0" * 5000 + "\n"

    def test_long_negative_integer_input(self, runner):
        result = runner.invoke(
            cli, ["nums", "x - 1", "-d", "integer"], input="n=-" + "9" * 5000 + "\n"
        )
        assert result.exit_code == 0
        assert result.output == "n=-1" + "0" * 5000 + "\n"

    def test_parse_error(self, runner):
        result = runner.invoke(cli, ["nums", "x +"], input="1\n")
        assert result.exit_code == 2
        assert "operand missing" in result.output

    def test_evaluation_error(self, runner):
        result = runner.invoke(cli, ["nums", "1 / x"], input="0\n")
        assert result.exit_code == 1


class TestFunctions:
    def test_lists_float_functions_and_constants(self, runner):
        result = runner.invoke(cli, ["functions"])
        assert result.exit_code == 0
        assert "Functions (float):" in result.output
        assert "  sqrt/1  Square root\n" in result.output
        assert "  atan2/2  Arc tangent of y / x, in radians\n" in result.output
        assert "  pi = 3.141592653589793\n" in result.output

    def test_integer_domain_has_no_constants(self, runner):
        result = runner.invoke(cli, ["functions", "--domain", "integer"])
        assert result.exit_code == 0
        assert "  modpow/3  Modular exponentiation\n" in result.output
        assert "  sqrt/" not in result.output
        assert "Constants" not in result.output

    def test_domain_from_config_file(self, runner, tmp_path):
        path = tmp_path / "exprcalc.yaml"
        path.write_text("domain: integer\n")
        result = runner.invoke(cli, ["functions", "--config", str(path)])
        assert result.exit_code == 0
        assert "Functions (integer):" in result.output


class TestCLIEntryPoint:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "exprcalc" in result.output
        assert "calc" in result.output
        assert "nums" in result.output
        assert "functions" in result.output
