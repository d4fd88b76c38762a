"""
Four-function calculator engine and its web front-end.
"""

from .display import DisplayState, render_display
from .engine import CalculatorEngine, CalculatorState, EngineListener, Operation, format_result

__all__ = [
    "CalculatorEngine",
    "CalculatorState",
    "DisplayState",
    "EngineListener",
    "Operation",
    "format_result",
    "render_display",
]
