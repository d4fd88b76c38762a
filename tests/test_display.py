"""Tests for display formatting."""

import pytest

from calculator_app.display import display_payload, font_size_for, group_thousands, render_display
from calculator_app.engine import CalculatorEngine, CalculatorState, Operation


@pytest.mark.parametrize(
    "operand, expected",
    [
        ("0", "0"),
        ("999", "999"),
        ("1000", "1,000"),
        ("1234567", "1,234,567"),
        ("-1234567.891", "-1,234,567.891"),
        ("1234.56789", "1,234.56789"),
        ("0.0001", "0.0001"),
        ("1.23456789e+20", "1.23456789e+20"),
        ("Error", "Error"),
        ("", ""),
        ("-", "-"),
    ],
)
def test_group_thousands(operand, expected):
    assert group_thousands(operand) == expected


def test_font_size_short_text_is_base():
    assert font_size_for("123,456,789") == 5.0


def test_font_size_scales_with_length():
    assert font_size_for("1234567890") == pytest.approx(4.5)
    assert font_size_for("12345678901") == pytest.approx(5 * 9 / 11)
    # long text stops shrinking at 70% of the base size
    assert font_size_for("1.23456789e+20") == pytest.approx(3.5)
    assert font_size_for("123456789012345") == pytest.approx(3.5)


def test_render_idle_display():
    display = render_display(CalculatorState())
    assert display.previous == ""
    assert display.current == "0"
    assert display.font_size == "5rem"
    assert display.active_operator is None


def test_render_pending_operation():
    state = CalculatorState(current_operand="4", previous_operand="12", pending_operation=Operation.SUBTRACT)
    display = render_display(state)
    assert display.previous == "12 −"
    assert display.active_operator == "subtract"
    assert display.to_dict() == {
        "previous": "12 −",
        "current": "4",
        "font_size": "5rem",
        "active_operator": "subtract",
    }


def test_render_typed_number_with_separators():
    engine = CalculatorEngine()
    for ch in "1234567":
        engine.append_digit_or_point(ch)
    display = render_display(engine.state)
    assert display.current == "1,234,567"
    # render does not touch the engine
    assert engine.state.current_operand == "1234567"


def test_render_glyphs():
    glyphs = {
        Operation.ADD: "+",
        Operation.SUBTRACT: "−",
        Operation.MULTIPLY: "×",
        Operation.DIVIDE: "÷",
    }
    for op, glyph in glyphs.items():
        state = CalculatorState(current_operand="", previous_operand="3", pending_operation=op)
        assert render_display(state).previous == f"3 {glyph}"


def test_display_payload():
    state = CalculatorState(current_operand="Error", awaiting_reset=True)
    assert display_payload(state, ["equals"]) == {
        "previous": "",
        "current": "Error",
        "font_size": "5rem",
        "active_operator": None,
        "pressed": ["equals"],
        "error": True,
    }
    assert display_payload(CalculatorState())["pressed"] == []
