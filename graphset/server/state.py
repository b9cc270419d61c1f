"""
GraphSetState — server-side owner of the placement model.

Wraps a single SessionController and fires a trace event after every
transition so connected UIs can follow along over Socket.IO.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from graphset.core.Config import GraphSetConfig
from graphset.core.GraphPrimitives import Point
from graphset.core.SessionController import SessionController
from graphset.core.Types import DropOutcome
from graphset.server.serializers.graph_serializer import (
    serialize_connection,
    serialize_graphset,
    serialize_node,
    serialize_point,
    serialize_zone,
)
from graphset.server.trace.trace_emitter import TraceEmitter, global_tracer
from graphset.server.trace.trace_types import (
    DragStartEvent,
    GraphResetEvent,
    ItemMovedEvent,
    ItemRevertedEvent,
    NodeCommittedEvent,
)


class GraphSetState:
    """Holds the SessionController and translates transitions into trace events."""

    def __init__(self,
                 config: Optional[GraphSetConfig] = None,
                 tracer: Optional[TraceEmitter] = None) -> None:
        self.config = config or GraphSetConfig()
        self.tracer = tracer or global_tracer
        self.controller = SessionController(self.config)

    # ── Views ────────────────────────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        return serialize_graphset(self.controller.snapshot(), self.config)

    # ── Pointer events ───────────────────────────────────────────────────────

    def pointer_down(self, item_id: str, x: float, y: float) -> bool:
        started = self.controller.pointer_down(item_id, Point(x, y))
        if started:
            drag = self.controller.drag_session
            event: DragStartEvent = {
                "type": "DRAG_START",
                "itemId": drag.item_id,
                "pointerOffset": serialize_point(drag.pointer_offset),
            }
            self.tracer.fire(event)
        return started

    def pointer_move(self, x: float, y: float) -> None:
        item_id = self.controller.dragging_item_id
        self.controller.pointer_move(Point(x, y))
        if item_id is not None:
            item = self.controller.registry.get(item_id)
            event: ItemMovedEvent = {
                "type": "ITEM_MOVED",
                "itemId": item_id,
                "position": serialize_point(item.current_position),
            }
            self.tracer.fire(event)

    def pointer_up(self) -> DropOutcome:
        item_id = self.controller.dragging_item_id
        outcome = self.controller.pointer_up()

        if outcome == DropOutcome.COMMITTED:
            builder = self.controller.builder
            node = builder.last_node()
            connection = builder.connections()[-1] if builder.connections() else None
            committed: NodeCommittedEvent = {
                "type": "NODE_COMMITTED",
                "itemId": item_id,
                "node": serialize_node(node),
                "connection": serialize_connection(connection),
                "openZone": serialize_zone(self.controller.frontier.open_zone()),
            }
            self.tracer.fire(committed)
        elif outcome == DropOutcome.REVERTED:
            item = self.controller.registry.get(item_id)
            reverted: ItemRevertedEvent = {
                "type": "ITEM_REVERTED",
                "itemId": item_id,
                "position": serialize_point(item.current_position),
            }
            self.tracer.fire(reverted)
        return outcome

    # ── Commands ─────────────────────────────────────────────────────────────

    def reset(self) -> None:
        self.controller.reset()
        event: GraphResetEvent = {"type": "GRAPH_RESET"}
        self.tracer.fire(event)


# ---------------------------------------------------------------------------
# Module-level singleton — created once when this module is first imported.
# ---------------------------------------------------------------------------

graph_state = GraphSetState()
