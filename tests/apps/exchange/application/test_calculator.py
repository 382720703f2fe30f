import pytest
from decimal import Decimal

from apps.exchange.application.calculator import calculate, parse_number
from apps.exchange.domain.errors import InvalidOperationError


class TestCalculator:
    """Tests for the quick calculator."""

    @pytest.mark.parametrize("operator, expected, name", [
        ("+", Decimal("12.5"), "addition"),
        ("-", Decimal("7.5"), "subtraction"),
        ("*", Decimal("25.0"), "multiplication"),
        ("/", Decimal("4"), "division"),
    ])
    def test_operations(self, operator, expected, name):
        """Test each supported operator."""
        result = calculate(Decimal("10"), operator, Decimal("2.5"))

        assert result.value == expected
        assert result.operation_name == name
        assert result.operator == operator

    def test_division_by_zero(self):
        """Test division by zero raises InvalidOperationError."""
        with pytest.raises(InvalidOperationError):
            calculate(Decimal("1"), "/", Decimal("0"))

    @pytest.mark.parametrize("operator", ["*", "+"])
    def test_overflow(self, operator):
        """Test results beyond the decimal range raise InvalidOperationError."""
        with pytest.raises(InvalidOperationError):
            calculate(parse_number("9E+999999"), operator, parse_number("9E+999999"))

    @pytest.mark.parametrize("operator", ["%", "", "**", "x"])
    def test_unknown_operator(self, operator):
        """Test unsupported operators raise InvalidOperationError."""
        with pytest.raises(InvalidOperationError):
            calculate(Decimal("1"), operator, Decimal("2"))

    def test_parse_number(self):
        """Test numbers are parsed into Decimals."""
        assert parse_number(" -3.25 ") == Decimal("-3.25")

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity"])
    def test_parse_number_invalid(self, value):
        """Test non-numbers are rejected."""
        with pytest.raises(InvalidOperationError):
            parse_number(value)
