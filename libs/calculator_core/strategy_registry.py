from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from .errors import InvalidArgument, UnsupportedOperation
from .operations import Operation

logger = logging.getLogger("calculator.registry")


class OperationStrategy:
    """Base protocol for binary operation strategies."""

    def execute(self, left: float, right: float) -> float:  # pragma: no cover - interface
        raise NotImplementedError

    def __call__(self, left: float, right: float) -> float:
        return self.execute(left, right)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


Strategy = Callable[[float, float], float]


class StrategyRegistry:
    """Maps operation identifiers to strategies.

    Built with the reference strategies unless an explicit mapping is given, in
    which case only that mapping is bound. The registry does no locking: callers
    sharing one instance between threads must serialize ``register`` themselves.
    """

    def __init__(self, strategies: Optional[Mapping[Operation, Strategy]] = None) -> None:
        self._strategies: Dict[Operation, Strategy] = {}
        if strategies is None:
            from libs.strategies import register_default_strategies  # local import avoid cycle

            register_default_strategies(self)
        else:
            for operation, strategy in strategies.items():
                self.register(operation, strategy)

    def register(self, operation: Operation, strategy: Strategy) -> None:
        if operation is None or strategy is None:
            raise InvalidArgument("Operation and strategy cannot be None")
        if not isinstance(operation, Operation):
            # the catalog is closed; new identifiers need a new Operation member
            raise InvalidArgument(f"{operation!r} is not a catalog operation")
        if not callable(strategy):
            raise InvalidArgument(f"Strategy for {operation} must be callable")
        previous = self._strategies.get(operation)
        self._strategies[operation] = strategy
        if previous is not None:
            logger.info("Rebound %s: %r -> %r", operation, previous, strategy)
        else:
            logger.debug("Registered %s -> %r", operation, strategy)

    def resolve(self, operation: Operation) -> Strategy:
        strategy = self._strategies.get(operation) if operation is not None else None
        if strategy is None:
            raise UnsupportedOperation(f"Operation {operation} is not supported")
        return strategy

    def available(self) -> Dict[Operation, Strategy]:
        return dict(self._strategies)

    def supported(self) -> List[Operation]:
        return [operation for operation in Operation if operation in self._strategies]

    def __contains__(self, operation: object) -> bool:
        return operation in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)
