"""
=============================================================================
MODULE NAME: display.py
=============================================================================

INPUT:
- CalculatorState snapshots produced by the engine.

OUTPUT:
- DisplayState values consumed by the page and the JSON API.

NOTES:
- Pure functions of the engine state; nothing here feeds back into it.
- Thousands separators are presentation only; the engine ignores them when
  parsing operands.
- Long numbers shrink the primary line instead of overflowing it.
=============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .engine import CalculatorState

_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")

MAX_UNSCALED_LENGTH = 9
BASE_FONT_REM = 5.0
MIN_FONT_REM = 2.0
MIN_SCALE = 0.7


@dataclass(slots=True)
class DisplayState:
    """What the two display lines show after an engine operation."""

    previous: str
    current: str
    font_size_rem: float
    active_operator: Optional[str] = None

    @property
    def font_size(self) -> str:
        return f"{self.font_size_rem:g}rem"

    def to_dict(self) -> Dict:
        return {
            "previous": self.previous,
            "current": self.current,
            "font_size": self.font_size,
            "active_operator": self.active_operator,
        }


def group_thousands(operand: str) -> str:
    """Insert "," separators into the integer part of an operand."""
    if operand in ("", "-"):
        return operand
    whole, point, fraction = operand.partition(".")
    return _THOUSANDS.sub(",", whole) + point + fraction


def font_size_for(text: str) -> float:
    """
    Pick the primary line font size in rem.

    Args:
        text: Display text, separators included or not

    Returns:
        Base size for short text, otherwise a size shrinking with length
    """
    length = len(text.replace(",", ""))
    if length <= MAX_UNSCALED_LENGTH:
        return BASE_FONT_REM
    scale = max(MIN_SCALE, MAX_UNSCALED_LENGTH / length)
    return max(MIN_FONT_REM, BASE_FONT_REM * scale)


def render_display(state: CalculatorState) -> DisplayState:
    op = state.pending_operation
    previous = state.previous_operand
    if op is not None:
        previous = f"{previous} {op.glyph}"

    current = group_thousands(state.current_operand)
    return DisplayState(
        previous=previous,
        current=current,
        font_size_rem=font_size_for(current),
        active_operator=op.action if op is not None else None,
    )


def display_payload(state: CalculatorState, pressed: Optional[Iterable[str]] = None) -> Dict:
    """
    Build the JSON payload shown to clients after an operation.

    Args:
        state: Engine state to display
        pressed: Buttons to flash as pressed for this operation

    Returns:
        The rendered display plus "pressed" and "error"
    """
    payload = render_display(state).to_dict()
    payload["pressed"] = list(pressed or [])
    payload["error"] = state.is_error
    return payload
