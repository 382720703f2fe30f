"""
Quick calculator offered next to the converter.
"""

from decimal import Decimal, InvalidOperation

from apps.exchange.application.dto import CalculationResultDTO
from apps.exchange.domain.errors import InvalidOperationError


OPERATIONS = {
    "+": ("addition", lambda left, right: left + right),
    "-": ("subtraction", lambda left, right: left - right),
    "*": ("multiplication", lambda left, right: left * right),
    "/": ("division", lambda left, right: left / right),
}


def parse_number(value: str | Decimal | int) -> Decimal:
    """Parse user input into a finite Decimal or raise InvalidOperationError."""
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidOperationError(f"Invalid number: '{value}'") from None
    if not number.is_finite():
        raise InvalidOperationError(f"Invalid number: '{value}'")
    return number


def calculate(left: Decimal, operator: str, right: Decimal) -> CalculationResultDTO:
    """
    Apply one arithmetic operator to two decimals.

    Args:
        left: First operand
        operator: One of + - * /
        right: Second operand

    Returns:
        CalculationResultDTO with the value and the operation name

    Raises:
        InvalidOperationError: unknown operator, division by zero or overflow
    """
    operator = (operator or "").strip()
    if operator not in OPERATIONS:
        raise InvalidOperationError(f"Invalid operation: '{operator}'")
    if operator == "/" and right == 0:
        raise InvalidOperationError("Cannot divide by zero")

    operation_name, apply = OPERATIONS[operator]

    try:
        value = apply(left, right)
    except ArithmeticError as e:
        raise InvalidOperationError("Result is out of range") from e

    return CalculationResultDTO(
        left=left,
        operator=operator,
        right=right,
        value=value,
        operation_name=operation_name,
    )
