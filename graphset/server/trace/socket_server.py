"""
Socket.IO server for the graphset trace stream.

Uses python-socketio in ASGI mode so it can wrap FastAPI.
`create_socket_app(fastapi_app)` returns the composite ASGI application to
pass to uvicorn. Every event fired on `global_tracer` is broadcast as a
"trace" message; a freshly connected client receives the current snapshot
as a "graphset" message.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Set

import socketio

from graphset.server.state import graph_state
from .trace_emitter import global_tracer
from .trace_types import TraceEvent

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Socket.IO instance (async, ASGI mode)
# ---------------------------------------------------------------------------

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
)


# ---------------------------------------------------------------------------
# Trace fan-out: wire global_tracer → Socket.IO emit
# ---------------------------------------------------------------------------

# Pending emit tasks; the loop only holds weak references to tasks.
_pending: Set[asyncio.Task] = set()


def _emit_done(task: asyncio.Task) -> None:
    _pending.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.error("Socket.IO trace emit failed", exc_info=task.exception())


def _on_trace(event: TraceEvent) -> None:
    """
    Called synchronously by TraceEmitter.fire().
    We schedule an async emit on the running event loop.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # fired outside the server loop (tests, scripts): nobody to notify
        return
    task = loop.create_task(sio.emit("trace", event))
    _pending.add(task)
    task.add_done_callback(_emit_done)


global_tracer.on_trace(_on_trace)


# ---------------------------------------------------------------------------
# Socket.IO lifecycle events
# ---------------------------------------------------------------------------

@sio.event
async def connect(sid: str, environ: dict) -> None:
    logger.debug(f"socket {sid} connected")
    await sio.emit("graphset", graph_state.snapshot(), to=sid)


@sio.event
async def disconnect(sid: str) -> None:
    logger.debug(f"socket {sid} disconnected")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_socket_app(fastapi_app: Any) -> socketio.ASGIApp:
    """Wrap *fastapi_app* inside a Socket.IO ASGI application."""
    return socketio.ASGIApp(sio, other_asgi_app=fastapi_app)
