from __future__ import annotations

import logging
import math
import numbers
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from .errors import CalculatorError, InvalidArgument
from .metrics import MetricsEmitter
from .operations import Operation
from .strategy_registry import StrategyRegistry


def _as_float(value, message: str) -> float:
    if value is None:
        raise InvalidArgument(message)
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        raise InvalidArgument(f"Expected a number, got {type(value).__name__}")
    if isinstance(value, Decimal) and value.is_snan():
        raise InvalidArgument("Signaling NaN is not a usable operand")
    try:
        return float(value)
    except OverflowError:
        # ints and fractions beyond double range saturate to infinity
        return math.inf if value > 0 else -math.inf


class Evaluator:
    """Entry point for single and chained evaluations.

    Owns a private default registry unless one is injected. Evaluation only reads
    the registry, so one evaluator may serve concurrent callers as long as nobody
    registers strategies at the same time.
    """

    def __init__(
        self,
        registry: Optional[StrategyRegistry] = None,
        *,
        metrics: Optional[MetricsEmitter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry if registry is not None else StrategyRegistry()
        self.metrics = metrics
        self.logger = logger or logging.getLogger("calculator.evaluator")

    def evaluate(self, operation: Operation, left, right) -> float:
        if operation is None:
            raise InvalidArgument("Operation cannot be None")
        if left is None or right is None:
            raise InvalidArgument("Numbers cannot be None")
        a = _as_float(left, "Numbers cannot be None")
        b = _as_float(right, "Numbers cannot be None")
        try:
            strategy = self.registry.resolve(operation)
            result = strategy(a, b)
        except CalculatorError as exc:
            self.logger.debug("Evaluation %s(%s, %s) failed: %s", operation, a, b, exc)
            self._count(f"calculator_errors_{exc.error_type}")
            raise
        self._count("calculator_evaluations")
        self._count(f"calculator_operation_{str(operation).lower()}")
        return result

    def start_chain(self, initial) -> "Chain":
        return Chain(self, _as_float(initial, "Initial value cannot be None"))

    def _count(self, name: str) -> None:
        if self.metrics is not None:
            self.metrics.incr(name)


class Chain:
    """Single-owner accumulator folding operations over a running value.

    Every mutator returns the chain itself. A step that raises leaves the
    accumulator as it was, so the chain stays usable after a failure.
    Not synchronized; do not share one chain between threads.
    """

    def __init__(self, evaluator: Evaluator, initial: float) -> None:
        self._evaluator = evaluator
        self._value = initial

    def apply(self, operation: Operation, operand) -> "Chain":
        if operation is None:
            raise InvalidArgument("Operation cannot be None")
        if operand is None:
            raise InvalidArgument("Operand cannot be None")
        self._value = self._evaluator.evaluate(operation, self._value, operand)
        return self

    def apply_all(self, steps: Iterable[Tuple[Operation, object]]) -> "Chain":
        for operation, operand in steps:
            self.apply(operation, operand)
        return self

    def result(self) -> float:
        return self._value

    def reset(self, value) -> "Chain":
        self._value = _as_float(value, "Value cannot be None")
        return self

    def __repr__(self) -> str:
        return f"Chain(value={self._value!r})"
