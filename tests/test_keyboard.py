"""Tests for keyboard and button dispatch."""

import pytest

from calculator_app.engine import CalculatorEngine, Operation
from calculator_app.keyboard import (
    UnknownActionError,
    dispatch_action,
    dispatch_key,
    is_calculator_key,
)


def press(engine, *keys):
    return [dispatch_key(engine, key) for key in keys]


def test_keys_drive_engine():
    engine = CalculatorEngine()
    handled = press(engine, "7", "*", "8", "Enter")
    assert handled == [True, True, True, True]
    assert engine.state.current_operand == "56"


def test_equals_key_and_chaining():
    engine = CalculatorEngine()
    press(engine, "3", "+", "4", "*", "2", "=")
    assert engine.state.current_operand == "14"


@pytest.mark.parametrize("key", ["Escape", "Delete"])
def test_clear_keys(key):
    engine = CalculatorEngine()
    press(engine, "9", "/")
    assert dispatch_key(engine, key) is True
    assert engine.state.current_operand == "0"
    assert engine.state.pending_operation is None


def test_backspace_and_percent_keys():
    engine = CalculatorEngine()
    press(engine, "5", "0", "0", "Backspace", "%")
    assert engine.state.current_operand == "0.5"


def test_decimal_key():
    engine = CalculatorEngine()
    press(engine, ".", "5")
    assert engine.state.current_operand == "0.5"


@pytest.mark.parametrize("key", ["a", "F5", "Shift", "Tab", "", "12", "x"])
def test_other_keys_are_ignored(key):
    engine = CalculatorEngine()
    assert dispatch_key(engine, key) is False
    assert is_calculator_key(key) is False
    assert engine.state.current_operand == "0"


def test_actions_drive_engine():
    engine = CalculatorEngine()
    dispatch_action(engine, "digit", "1")
    dispatch_action(engine, "decimal")
    dispatch_action(engine, "digit", "5")
    dispatch_action(engine, "sign")
    dispatch_action(engine, "multiply")
    dispatch_action(engine, "digit", "4")
    dispatch_action(engine, "equals")
    assert engine.state.current_operand == "-6"


@pytest.mark.parametrize(
    "action, op",
    [
        ("add", Operation.ADD),
        ("−", Operation.SUBTRACT),
        ("×", Operation.MULTIPLY),
        ("x", Operation.MULTIPLY),
        ("÷", Operation.DIVIDE),
        ("/", Operation.DIVIDE),
    ],
)
def test_operator_action_aliases(action, op):
    engine = CalculatorEngine()
    dispatch_action(engine, action)
    assert engine.state.pending_operation is op


def test_percentage_backspace_clear_actions():
    engine = CalculatorEngine()
    for digit in "250":
        dispatch_action(engine, "digit", digit)
    dispatch_action(engine, "backspace")
    dispatch_action(engine, "percentage")
    assert engine.state.current_operand == "0.25"
    dispatch_action(engine, "clear")
    assert engine.state.current_operand == "0"


@pytest.mark.parametrize(
    "action, value",
    [("digit", None), ("digit", "12"), ("digit", "."), ("digit", 7), ("power", None), ("", None)],
)
def test_unknown_actions_raise(action, value):
    engine = CalculatorEngine()
    with pytest.raises(UnknownActionError):
        dispatch_action(engine, action, value)
