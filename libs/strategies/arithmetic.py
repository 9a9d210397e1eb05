from __future__ import annotations

from libs.calculator_core.errors import ArithmeticInvalid
from libs.calculator_core.strategy_registry import OperationStrategy


class AdditionStrategy(OperationStrategy):
    def execute(self, left: float, right: float) -> float:
        return left + right


class SubtractionStrategy(OperationStrategy):
    def execute(self, left: float, right: float) -> float:
        return left - right


class MultiplicationStrategy(OperationStrategy):
    def execute(self, left: float, right: float) -> float:
        return left * right


class DivisionStrategy(OperationStrategy):
    def execute(self, left: float, right: float) -> float:
        # 0.0 == -0.0, so both signed zeros are rejected
        if right == 0.0:
            raise ArithmeticInvalid("Division by zero is not allowed")
        return left / right
