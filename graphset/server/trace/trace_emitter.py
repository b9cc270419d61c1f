"""
TraceEmitter — fan-out of graphset trace events to registered listeners
(Socket.IO, loggers, tests).
"""
from __future__ import annotations

import logging
import time
from typing import Callable, List

from .trace_types import TraceEvent

logger = logging.getLogger(__name__)


class TraceEmitter:
    def __init__(self) -> None:
        self._listeners: List[Callable[[TraceEvent], None]] = []

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def on_trace(self, callback: Callable[[TraceEvent], None]) -> None:
        """Register a callback that receives every emitted trace event."""
        self._listeners.append(callback)

    def off_trace(self, callback: Callable[[TraceEvent], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Emit
    # ------------------------------------------------------------------

    def fire(self, payload: TraceEvent) -> None:
        """Stamp the payload with a millisecond timestamp and broadcast it."""
        if "ts" not in payload:
            payload["ts"] = _now_ms()
        for cb in self._listeners:
            try:
                cb(payload)
            except Exception:
                # a broken listener must not undo a transition that already happened
                logger.exception(f"Trace listener failed on {payload.get('type')}")


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

global_tracer = TraceEmitter()


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _now_ms() -> int:
    return int(time.time() * 1000)
