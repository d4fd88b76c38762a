"""Runtime settings read from CALCULATOR_* environment variables."""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass, field
from typing import Mapping, Optional


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 5000
    secret_key: str = field(default_factory=lambda: secrets.token_hex(32))
    max_sessions: int = 1000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            env: Mapping to read instead of os.environ

        Returns:
            Settings with defaults for unset variables

        Raises:
            ValueError: If an integer variable cannot be parsed
        """
        env = os.environ if env is None else env
        settings = cls(
            host=env.get("CALCULATOR_HOST", cls.host),
            port=_int_env(env, "CALCULATOR_PORT", cls.port),
            max_sessions=_int_env(env, "CALCULATOR_MAX_SESSIONS", cls.max_sessions),
            log_level=env.get("CALCULATOR_LOG_LEVEL", cls.log_level).upper(),
        )
        if env.get("CALCULATOR_SECRET_KEY"):
            settings.secret_key = env["CALCULATOR_SECRET_KEY"]
        if settings.max_sessions < 1:
            raise ValueError("CALCULATOR_MAX_SESSIONS must be at least 1")
        return settings
