from __future__ import annotations

from libs.calculator_core.operations import Operation

from .arithmetic import AdditionStrategy, DivisionStrategy, MultiplicationStrategy, SubtractionStrategy


def register_default_strategies(registry) -> None:
    registry.register(Operation.ADD, AdditionStrategy())
    registry.register(Operation.SUBTRACT, SubtractionStrategy())
    registry.register(Operation.MULTIPLY, MultiplicationStrategy())
    registry.register(Operation.DIVIDE, DivisionStrategy())


__all__ = [
    "AdditionStrategy",
    "DivisionStrategy",
    "MultiplicationStrategy",
    "SubtractionStrategy",
    "register_default_strategies",
]
