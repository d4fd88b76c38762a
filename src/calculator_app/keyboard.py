"""
Input adapter.

Translates keyboard keys and page button actions into engine calls.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .engine import DIGITS, POINT, CalculatorEngine, Operation


class UnknownActionError(ValueError):
    """Raised for actions or values the calculator has no button for."""


OPERATOR_ALIASES: Dict[str, Operation] = {
    "+": Operation.ADD,
    "add": Operation.ADD,
    "-": Operation.SUBTRACT,
    "−": Operation.SUBTRACT,
    "subtract": Operation.SUBTRACT,
    "*": Operation.MULTIPLY,
    "×": Operation.MULTIPLY,
    "x": Operation.MULTIPLY,
    "multiply": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "÷": Operation.DIVIDE,
    "divide": Operation.DIVIDE,
}

_KEY_COMMANDS: Dict[str, Callable[[CalculatorEngine], None]] = {
    "=": CalculatorEngine.evaluate,
    "Enter": CalculatorEngine.evaluate,
    "Escape": CalculatorEngine.clear,
    "Delete": CalculatorEngine.clear,
    "Backspace": CalculatorEngine.backspace,
    "%": CalculatorEngine.toggle_percentage,
}

_KEY_OPERATORS = {"+", "-", "*", "/"}

CALCULATOR_KEYS = frozenset(DIGITS + POINT) | _KEY_OPERATORS | set(_KEY_COMMANDS)

_ACTION_COMMANDS: Dict[str, Callable[[CalculatorEngine], None]] = {
    "equals": CalculatorEngine.evaluate,
    "clear": CalculatorEngine.clear,
    "backspace": CalculatorEngine.backspace,
    "sign": CalculatorEngine.toggle_sign,
    "percentage": CalculatorEngine.toggle_percentage,
}


def is_calculator_key(key: str) -> bool:
    """True when the page should suppress the browser's default for key."""
    return key in CALCULATOR_KEYS


def dispatch_key(engine: CalculatorEngine, key: str) -> bool:
    """
    Apply a keyboard event key to the engine.

    Args:
        engine: Calculator to drive
        key: KeyboardEvent.key value, e.g. "7", "*", "Enter", "Backspace"

    Returns:
        True if the key belongs to the calculator, False if it was ignored
    """
    if not is_calculator_key(key):
        return False

    if key in _KEY_OPERATORS:
        engine.choose_operation(OPERATOR_ALIASES[key])
    elif key in _KEY_COMMANDS:
        _KEY_COMMANDS[key](engine)
    else:
        engine.append_digit_or_point(key)
    return True


def dispatch_action(engine: CalculatorEngine, action: str, value: Optional[str] = None) -> None:
    """
    Apply a page button action to the engine.

    Args:
        engine: Calculator to drive
        action: "digit", "decimal", an operator name or glyph, "equals",
            "clear", "backspace", "sign" or "percentage"
        value: The digit for "digit" actions

    Raises:
        UnknownActionError: If the action or digit value is not recognised
    """
    if action == "digit":
        if not isinstance(value, str) or len(value) != 1 or value not in DIGITS:
            raise UnknownActionError(f"Invalid digit: {value!r}")
        engine.append_digit_or_point(value)
    elif action == "decimal":
        engine.append_digit_or_point(POINT)
    elif action in OPERATOR_ALIASES:
        engine.choose_operation(OPERATOR_ALIASES[action])
    elif action in _ACTION_COMMANDS:
        _ACTION_COMMANDS[action](engine)
    else:
        raise UnknownActionError(f"Unknown action: {action}")
