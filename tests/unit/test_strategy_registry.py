import pytest

from libs.calculator_core import (
    ArithmeticInvalid,
    InvalidArgument,
    Operation,
    OperationStrategy,
    StrategyRegistry,
    UnsupportedOperation,
)
from libs.strategies import AdditionStrategy, DivisionStrategy


def test_default_registry_binds_whole_catalog():
    registry = StrategyRegistry()

    assert registry.supported() == list(Operation)
    for operation in Operation:
        assert callable(registry.resolve(operation))


def test_reference_strategies_compute_expected_values():
    registry = StrategyRegistry()

    assert registry.resolve(Operation.ADD)(5.0, 3.0) == 8.0
    assert registry.resolve(Operation.SUBTRACT)(10.0, 4.0) == 6.0
    assert registry.resolve(Operation.MULTIPLY)(7.0, 3.0) == 21.0
    assert registry.resolve(Operation.DIVIDE)(15.0, 3.0) == 5.0


@pytest.mark.parametrize("dividend", [10.0, 0.0, -3.5, float("inf")])
@pytest.mark.parametrize("divisor", [0.0, -0.0])
def test_division_by_exact_zero_is_rejected(dividend, divisor):
    with pytest.raises(ArithmeticInvalid, match="Division by zero"):
        DivisionStrategy()(dividend, divisor)


def test_resolve_none_is_unsupported():
    with pytest.raises(UnsupportedOperation):
        StrategyRegistry().resolve(None)


def test_partial_registry_reports_missing_operation():
    registry = StrategyRegistry(strategies={Operation.ADD: AdditionStrategy()})

    assert registry.supported() == [Operation.ADD]
    with pytest.raises(UnsupportedOperation, match="DIVIDE"):
        registry.resolve(Operation.DIVIDE)


def test_empty_registry_is_allowed_but_resolves_nothing():
    registry = StrategyRegistry(strategies={})

    assert len(registry) == 0
    with pytest.raises(UnsupportedOperation):
        registry.resolve(Operation.ADD)


def test_register_overrides_previous_binding():
    registry = StrategyRegistry()
    registry.register(Operation.ADD, lambda a, b: a + b + 1)

    assert registry.resolve(Operation.ADD)(2.0, 2.0) == 5.0


def test_register_accepts_strategy_subclass():
    class ModuloStrategy(OperationStrategy):
        def execute(self, left, right):
            return left % right

    registry = StrategyRegistry()
    registry.register(Operation.DIVIDE, ModuloStrategy())

    assert registry.resolve(Operation.DIVIDE)(7.0, 3.0) == 1.0


@pytest.mark.parametrize(
    "operation, strategy",
    [(None, lambda a, b: a % b), (Operation.ADD, None), (Operation.ADD, 42)],
)
def test_register_rejects_missing_or_invalid_arguments(operation, strategy):
    registry = StrategyRegistry()

    with pytest.raises(InvalidArgument):
        registry.register(operation, strategy)
    assert isinstance(registry.resolve(Operation.ADD), AdditionStrategy)


def test_available_returns_a_copy():
    registry = StrategyRegistry()
    snapshot = registry.available()
    snapshot.pop(Operation.ADD)

    assert Operation.ADD in registry


def test_operation_parse_accepts_names_case_insensitively():
    assert Operation.parse("add") is Operation.ADD
    assert Operation.parse(" Divide ") is Operation.DIVIDE
    assert Operation.parse(Operation.MULTIPLY) is Operation.MULTIPLY
    assert Operation.names() == ["ADD", "SUBTRACT", "MULTIPLY", "DIVIDE"]


def test_operation_parse_rejects_unknown_and_missing():
    with pytest.raises(UnsupportedOperation):
        Operation.parse("POWER")
    with pytest.raises(InvalidArgument):
        Operation.parse(None)


@pytest.mark.parametrize("operation", ["POWER", "ADD", "add"])
def test_register_rejects_identifiers_outside_catalog(operation):
    registry = StrategyRegistry()

    with pytest.raises(InvalidArgument, match="not a catalog operation"):
        registry.register(operation, lambda a, b: a**b)
    assert "POWER" not in registry
    assert isinstance(registry.resolve(Operation.ADD), AdditionStrategy)


def test_constructor_mapping_must_use_catalog_keys():
    with pytest.raises(InvalidArgument):
        StrategyRegistry(strategies={"POWER": lambda a, b: a**b})


def test_unregistered_name_cannot_be_evaluated():
    from libs.calculator_core import Evaluator

    evaluator = Evaluator()
    with pytest.raises(InvalidArgument):
        evaluator.registry.register("POWER", lambda a, b: a**b)
    with pytest.raises(UnsupportedOperation):
        evaluator.evaluate("POWER", 2, 10)
