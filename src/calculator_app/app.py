"""
Flask Calculator Application

Serves the calculator page and a small JSON API driving one calculator
engine per browser session:
- Digit, decimal point and operator buttons
- Keyboard support (keys are forwarded as KeyboardEvent.key values)
- Display lines with thousands separators and font scaling
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, List, Optional

from flask import Flask, jsonify, render_template, request, session

from .config import Settings
from .display import display_payload
from .engine import CalculatorEngine, EngineListener
from .keyboard import CALCULATOR_KEYS, UnknownActionError, dispatch_action, dispatch_key
from .sessions import SessionStore

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Configuration
settings = Settings.from_env()
app.config["SECRET_KEY"] = settings.secret_key
store = SessionStore(max_sessions=settings.max_sessions)

_SESSION_KEY = "calculator_id"


class FeedbackRecorder(EngineListener):
    """Collects the buttons to flash as pressed in the response to one request."""

    def __init__(self):
        self.pressed: List[str] = []

    def button_pressed(self, kind: str) -> None:
        self.pressed.append(kind)


def configure(new_settings: Settings) -> None:
    """
    Apply settings to the module-level app and reset the session store.

    Args:
        new_settings: Settings to use from now on
    """
    global settings, store

    settings = new_settings
    app.config["SECRET_KEY"] = settings.secret_key
    store = SessionStore(max_sessions=settings.max_sessions)


@contextmanager
def _session_engine(recorder: Optional[EngineListener] = None) -> Iterator[CalculatorEngine]:
    """Hold the caller's engine for one request, reporting to recorder meanwhile."""
    session_id = session.get(_SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        session[_SESSION_KEY] = session_id

    with store.acquire(session_id) as engine:
        engine.listener = recorder or EngineListener()
        try:
            yield engine
        finally:
            engine.listener = EngineListener()


def _bad_request(message: str):
    logger.info("Rejected calculator request: %s", message)
    return jsonify({"error": message}), 400


@app.route("/")
def index():
    """Render the calculator page."""
    return render_template("index.html", calculator_keys=sorted(CALCULATOR_KEYS))


@app.route("/api/state", methods=["GET"])
def get_state():
    """Return the display of the caller's calculator without changing it."""
    with _session_engine() as engine:
        return jsonify(display_payload(engine.state))


@app.route("/api/calculate", methods=["POST"])
def calculate():
    """
    Handle a calculator button press.

    Expected JSON payload:
        {
            "action": "digit|decimal|add|subtract|multiply|divide|equals|clear|backspace|sign|percentage",
            "value": "7"  // only for "digit"
        }

    Returns:
        {
            "previous": "12 +",
            "current": "1,234",
            "font_size": "5rem",
            "active_operator": "add",
            "pressed": ["4"],
            "error": false
        }
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        return _bad_request("No data provided")

    recorder = FeedbackRecorder()
    with _session_engine(recorder) as engine:
        try:
            dispatch_action(engine, str(data.get("action", "")), data.get("value"))
        except UnknownActionError as e:
            return _bad_request(str(e))
        return jsonify(display_payload(engine.state, recorder.pressed))


@app.route("/api/key", methods=["POST"])
def press_key():
    """
    Handle a keyboard event forwarded by the page.

    Expected JSON payload:
        {"key": "Enter"}

    Returns:
        The display payload plus "handled", which tells the page whether to
        suppress the browser's default handling of the key.
    """
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not isinstance(data.get("key"), str):
        return _bad_request("key is required")

    recorder = FeedbackRecorder()
    with _session_engine(recorder) as engine:
        handled = dispatch_key(engine, data["key"])
        payload = display_payload(engine.state, recorder.pressed)

    payload["handled"] = handled
    return jsonify(payload)


@app.route("/api/reset", methods=["POST"])
def reset():
    """Reset the caller's calculator to its initial state."""
    recorder = FeedbackRecorder()
    with _session_engine(recorder) as engine:
        engine.clear()
        return jsonify(display_payload(engine.state, recorder.pressed))
