import json
import logging
from typing import Tuple

import click

from .config import Settings
from .display import display_payload
from .engine import CalculatorEngine
from .keyboard import dispatch_key


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def replay_keys(keys: Tuple[str, ...]) -> CalculatorEngine:
    """Feed keyboard keys to a fresh engine; unknown keys are skipped."""
    engine = CalculatorEngine()
    for key in keys:
        dispatch_key(engine, key)
    return engine


@click.group()
def main() -> None:
    """Four-function calculator served as a web page."""


@main.command()
@click.option("--host", default=None, help="Host to bind to [env CALCULATOR_HOST]")
@click.option("--port", type=int, default=None, help="Port to bind to [env CALCULATOR_PORT]")
@click.option("--debug", is_flag=True, default=False, help="Run Flask in debug mode")
def serve(host: str, port: int, debug: bool) -> None:
    """Run the calculator web server."""
    from .app import app, configure

    settings = Settings.from_env()
    if host:
        settings.host = host
    if port:
        settings.port = port
    _setup_logging(settings.log_level)
    configure(settings)

    click.echo("Starting calculator web server...")
    click.echo(f"Access at: http://{settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port, debug=debug)


@main.command()
@click.argument("keys", nargs=-1, required=True)
def press(keys: Tuple[str, ...]) -> None:
    """Replay KEYS (e.g. 7 '*' 8 Enter) and print the display as JSON."""
    _setup_logging(Settings.from_env().log_level)
    engine = replay_keys(keys)
    click.echo(json.dumps(display_payload(engine.state), ensure_ascii=False))


if __name__ == "__main__":  # pragma: no cover
    main()
