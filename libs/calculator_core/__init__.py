from .config_loader import load_chain_program
from .errors import ArithmeticInvalid, CalculatorError, InvalidArgument, UnsupportedOperation
from .evaluator import Chain, Evaluator
from .metrics import MetricsEmitter
from .models import ChainProgram, ChainStep
from .operations import Operation
from .strategy_registry import OperationStrategy, StrategyRegistry

__all__ = [
    "load_chain_program",
    "ArithmeticInvalid",
    "CalculatorError",
    "InvalidArgument",
    "UnsupportedOperation",
    "Chain",
    "Evaluator",
    "MetricsEmitter",
    "ChainProgram",
    "ChainStep",
    "Operation",
    "OperationStrategy",
    "StrategyRegistry",
]
