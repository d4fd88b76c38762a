"""
Calculator engine.

Holds operand/operator state and runs the evaluation state machine behind the
calculator page:
- Digit and decimal point entry with leading-zero handling
- Addition, subtraction, multiplication, division (chained left to right)
- Sign toggle, percentage, backspace, clear
- Result formatting that hides binary floating point noise

Errors are never raised to callers: division by zero or a non-finite result
leaves the literal "Error" on the display until the next entry.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

ERROR = "Error"
DIGITS = "0123456789"
POINT = "."

_ROUND_FACTOR = 10 ** 10
_MAX_PLAIN_LENGTH = 15
_EXPONENT_DIGITS = 8


class Operation(str, Enum):
    """Binary operations with their display glyph and button action name."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def action(self) -> str:
        return self.name.lower()


_GLYPHS: Dict[Operation, str] = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "−",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}

_APPLY: Dict[Operation, Callable[[float, float], float]] = {
    Operation.ADD: lambda x, y: x + y,
    Operation.SUBTRACT: lambda x, y: x - y,
    Operation.MULTIPLY: lambda x, y: x * y,
    Operation.DIVIDE: lambda x, y: x / y,
}


@dataclass(slots=True)
class CalculatorState:
    """Everything the calculator remembers between two key presses."""

    current_operand: str = "0"
    previous_operand: str = ""
    pending_operation: Optional[Operation] = None
    awaiting_reset: bool = False

    @property
    def is_error(self) -> bool:
        return self.current_operand == ERROR


class EngineListener:
    """
    Receives the visual side effects of engine operations.

    The page highlights the active operator button and briefly marks pressed
    buttons; subclasses translate these notifications for their UI. The
    default implementation ignores them.
    """

    def operator_highlighted(self, op: Operation) -> None:
        pass

    def operator_cleared(self) -> None:
        pass

    def button_pressed(self, kind: str) -> None:
        pass


def parse_operand(text: str) -> Optional[float]:
    """
    Parse a display operand.

    Args:
        text: Operand as shown, possibly with thousands separators

    Returns:
        The finite value, or None when the text is not a finite number
    """
    try:
        value = float(text.replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_result(value: float) -> str:
    """
    Format a computed value for the display.

    Rounds to 10 decimal places, writes the number out positionally without
    trailing zeros, and falls back to exponential notation with 8 fractional
    digits once the plain text is longer than 15 characters.

    Args:
        value: Result of an arithmetic operation

    Returns:
        Display text, or "Error" when the value is not finite
    """
    if not math.isfinite(value):
        return ERROR

    scaled = value * _ROUND_FACTOR
    if math.isfinite(scaled):
        # half-up, like a pocket calculator
        rounded = math.floor(scaled + 0.5) / _ROUND_FACTOR
    else:
        rounded = value

    result = format(Decimal(repr(rounded)), "f")
    if POINT in result:
        result = result.rstrip("0").rstrip(POINT)

    if len(result) > _MAX_PLAIN_LENGTH:
        mantissa, exponent = f"{rounded:.{_EXPONENT_DIGITS}e}".split("e")
        return f"{mantissa}e{int(exponent):+d}"

    return result


class CalculatorEngine:
    """
    Four-function calculator state machine.

    The engine is in one of three logical states: entering a number, waiting
    for the right operand of a pending operation, or showing a result (or
    "Error") that the next digit replaces.
    """

    def __init__(self, listener: Optional[EngineListener] = None):
        """
        Initialize the engine with startup state.

        Args:
            listener: Optional receiver of highlight and pressed-button
                notifications
        """
        self.listener = listener or EngineListener()
        self.state = CalculatorState()

    def clear(self) -> None:
        """Reset all state to the startup values."""
        self.state = CalculatorState()
        self.listener.operator_cleared()
        self.listener.button_pressed("clear")

    def append_digit_or_point(self, token: str) -> None:
        """
        Append a digit or the decimal point to the current operand.

        Args:
            token: Single character, "0"-"9" or "."

        Raises:
            ValueError: If token is neither a digit nor the decimal point
        """
        if len(token) != 1 or token not in DIGITS + POINT:
            raise ValueError(f"Not a digit or decimal point: {token!r}")

        state = self.state
        if state.awaiting_reset:
            state.current_operand = ""
            state.awaiting_reset = False

        current = state.current_operand
        if token == POINT:
            if POINT in current:
                return
            if current in ("", "-"):
                state.current_operand = current + "0."
            else:
                state.current_operand = current + POINT
            self.listener.button_pressed("decimal")
            return

        if current in ("0", "-0"):
            if token == "0":
                return
            state.current_operand = current[:-1] + token
        else:
            state.current_operand = current + token
        self.listener.button_pressed(token)

    def choose_operation(self, op: Operation) -> None:
        """
        Install a pending operation, evaluating an earlier one first.

        Args:
            op: Operation to apply between the current and next operand
        """
        state = self.state
        if state.current_operand in ("", "-"):
            state.current_operand = "0"

        if state.pending_operation is not None and not state.awaiting_reset:
            self.evaluate()

        state = self.state
        state.pending_operation = op
        state.previous_operand = state.current_operand
        state.current_operand = ""
        state.awaiting_reset = False
        self.listener.operator_highlighted(op)

    def evaluate(self) -> None:
        """Apply the pending operation to the previous and current operand."""
        state = self.state
        op = state.pending_operation
        if op is None or state.previous_operand == "":
            return

        left = parse_operand(state.previous_operand)
        right = parse_operand(state.current_operand)

        if left is None or right is None:
            logger.debug(
                "Cannot evaluate %r %s %r", state.previous_operand, op.value, state.current_operand
            )
            self._show_error()
            return

        if op is Operation.DIVIDE and right == 0:
            logger.debug("Division by zero: %r / %r", state.previous_operand, state.current_operand)
            self._show_error()
            return

        self._finish(format_result(_APPLY[op](left, right)))
        self.listener.button_pressed("equals")

    def toggle_percentage(self) -> None:
        """Divide the current operand by 100."""
        current = self.state.current_operand
        if current in ("", "-"):
            return

        value = parse_operand(current)
        if value is None:
            self.state.current_operand = ERROR
        else:
            self.state.current_operand = format_result(value / 100)
        self.listener.button_pressed("percentage")

    def toggle_sign(self) -> None:
        """Negate the current operand (textually, so "0" becomes "-0")."""
        state = self.state
        current = state.current_operand
        if current == ERROR:
            return

        if current in ("0", ""):
            state.current_operand = "-0"
        elif current.startswith("-"):
            state.current_operand = current[1:]
        else:
            state.current_operand = "-" + current
        self.listener.button_pressed("sign")

    def backspace(self) -> None:
        """Remove the last character of the current operand."""
        state = self.state
        if len(state.current_operand) > 1 and not state.is_error:
            state.current_operand = state.current_operand[:-1]
        else:
            state.current_operand = "0"

    def _show_error(self) -> None:
        self._finish(ERROR)

    def _finish(self, display: str) -> None:
        state = self.state
        state.current_operand = display
        state.previous_operand = ""
        state.pending_operation = None
        state.awaiting_reset = True
        self.listener.operator_cleared()
