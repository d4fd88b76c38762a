"""
In-memory store of calculator engines, one per browser session.

The store lock guards the mapping, which Flask's threaded server shares
between requests. Each session also has its own lock so that its requests
reach the engine one at a time.
"""

import logging
import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from .engine import CalculatorEngine

logger = logging.getLogger(__name__)


class SessionStore:
    """Bounded mapping of session id to CalculatorEngine, evicting least recently used."""

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._engines: "OrderedDict[str, Tuple[CalculatorEngine, threading.Lock]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._engines)

    def get(self, session_id: str) -> Optional[CalculatorEngine]:
        """
        Look up the engine of a session.

        Args:
            session_id: Session identifier

        Returns:
            The engine, or None if the session has none
        """
        with self._lock:
            entry = self._engines.get(session_id)
            if entry is None:
                return None
            self._engines.move_to_end(session_id)
            return entry[0]

    def get_or_create(self, session_id: str) -> CalculatorEngine:
        """
        Return the engine of a session, creating a fresh one if needed.

        Args:
            session_id: Session identifier

        Returns:
            The session's engine
        """
        return self._entry(session_id)[0]

    @contextmanager
    def acquire(self, session_id: str) -> Iterator[CalculatorEngine]:
        """
        Hold a session's engine exclusively, creating it if needed.

        Requests of the same session block here until the previous one is
        done with the engine.

        Args:
            session_id: Session identifier

        Yields:
            The session's engine
        """
        engine, lock = self._entry(session_id)
        with lock:
            yield engine

    def drop(self, session_id: str) -> bool:
        """Forget a session. Returns True if it existed."""
        with self._lock:
            return self._engines.pop(session_id, None) is not None

    def _entry(self, session_id: str) -> Tuple[CalculatorEngine, threading.Lock]:
        with self._lock:
            entry = self._engines.get(session_id)
            if entry is not None:
                self._engines.move_to_end(session_id)
                return entry

            entry = (CalculatorEngine(), threading.Lock())
            self._engines[session_id] = entry
            logger.debug("Created calculator for session %s", session_id)

            while len(self._engines) > self.max_sessions:
                evicted, _ = self._engines.popitem(last=False)
                logger.debug("Evicted calculator for session %s", evicted)
            return entry
