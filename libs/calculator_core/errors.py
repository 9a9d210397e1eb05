from __future__ import annotations


class CalculatorError(Exception):
    """Base class for the failures the engine reports to its caller."""

    error_type = "calculator_error"


class InvalidArgument(CalculatorError, ValueError):
    error_type = "invalid_argument"


class UnsupportedOperation(CalculatorError, NotImplementedError):
    error_type = "unsupported_operation"


class ArithmeticInvalid(CalculatorError, ArithmeticError):
    error_type = "arithmetic_invalid"
