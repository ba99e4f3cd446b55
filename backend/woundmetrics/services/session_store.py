"""
Simple in‑memory registry of measurement sessions.

Each capture session owns one :class:`MetricsCalculator`, which keeps
the calibration scale and the last emitted metrics between requests.
Sessions are identified by a random hex string handed out on creation.

The registry is implemented as an ``OrderedDict`` to provide
least‑recently‑used (LRU) eviction.  When the number of live sessions
exceeds ``MAX_SESSIONS`` the oldest one is dropped.  A reentrant lock
protects the dictionary itself, and every entry carries its own lock
that callers must hold while using the calculator, since the calculator
does no synchronisation of its own.

Usage::

    from .session_store import create_session, get_session
    session = create_session(smoothing_iterations=1)
    with session.lock:
        result = session.calculator.calculate_metrics()
"""

from __future__ import annotations

import logging
import os
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from threading import Lock, RLock
from typing import Optional

from .constants import DEFAULT_SMOOTHING_ITERATIONS
from .metrics_calculator import MetricsCalculator

logger = logging.getLogger(__name__)


@dataclass
class MeasurementSession:
    """A calculator plus the lock that serialises access to it."""

    session_id: str
    calculator: MetricsCalculator
    lock: Lock = field(default_factory=Lock, repr=False)


_sessions: "OrderedDict[str, MeasurementSession]" = OrderedDict()
_lock = RLock()
# Upper bound on live sessions.  Can be raised through the environment
# for hosts that keep many captures open at once.
MAX_SESSIONS: int = int(os.getenv("WOUNDMETRICS_MAX_SESSIONS", "64"))


def create_session(
    smoothing_iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
) -> MeasurementSession:
    """Register a new session with a fresh calculator.

    If the registry exceeds its configured capacity after insertion the
    least recently used session is removed.
    """
    session = MeasurementSession(
        session_id=uuid.uuid4().hex,
        calculator=MetricsCalculator(smoothing_iterations=smoothing_iterations),
    )
    with _lock:
        _sessions[session.session_id] = session
        _sessions.move_to_end(session.session_id)
        if len(_sessions) > MAX_SESSIONS:
            evicted_id, _ = _sessions.popitem(last=False)
            logger.info("Evicted least recently used session %s", evicted_id)
    return session


def get_session(session_id: str) -> Optional[MeasurementSession]:
    """Look up a session and mark it as recently used.

    Returns:
        The session, or ``None`` if it does not exist or was evicted.
    """
    with _lock:
        session = _sessions.get(session_id)
        if session is not None:
            _sessions.move_to_end(session_id)
        return session


def delete_session(session_id: str) -> bool:
    """Remove a session.  Returns False if it was not registered."""
    with _lock:
        return _sessions.pop(session_id, None) is not None


def clear_sessions() -> None:
    """Drop every session."""
    with _lock:
        _sessions.clear()
