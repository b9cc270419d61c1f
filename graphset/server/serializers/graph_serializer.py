"""
Graphset serializer.

Converts the core model records (Node, Connection, DraggableItem, DropZone,
GraphSetSnapshot) into JSON-safe camelCase dicts for the browser UI.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from graphset.core.Config import GraphSetConfig
from graphset.core.GraphPrimitives import (
    Connection,
    DraggableItem,
    DragSession,
    DropZone,
    GraphSetSnapshot,
    Node,
    Point,
)

# ── Wire shapes ───────────────────────────────────────────────────────────────
# SerializedNode keys:       id, label, position, sourceItemId, fixed
# SerializedConnection keys: id, from, to, label
# SerializedItem keys:       id, label, position, origin, placed, dragging
# SerializedZone keys:       id, targetNodeId, position, occupied
# SerializedGraphSet keys:   nodes, connections, returnPath, items, openZone,
#                            dragging


# ── Helpers ───────────────────────────────────────────────────────────────────

def serialize_point(p: Point) -> Dict[str, float]:
    return {"x": p[0], "y": p[1]}


def serialize_node(node: Node) -> Dict[str, Any]:
    return {
        "id": node.id,
        "label": node.label,
        "position": serialize_point(node.position),
        "sourceItemId": node.source_item_id,
        "fixed": node.fixed,
    }


def serialize_connection(connection: Optional[Connection]) -> Optional[Dict[str, Any]]:
    if connection is None:
        return None
    return {
        "id": f"{connection.from_node_id}→{connection.to_node_id}",
        "from": connection.from_node_id,
        "to": connection.to_node_id,
        "label": connection.label,
    }


def serialize_item(item: DraggableItem, drag: Optional[DragSession] = None) -> Dict[str, Any]:
    return {
        "id": item.id,
        "label": item.label,
        "position": serialize_point(item.current_position),
        "origin": serialize_point(item.origin_position),
        "placed": item.placed,
        "dragging": drag is not None and drag.item_id == item.id,
    }


def serialize_zone(zone: DropZone) -> Dict[str, Any]:
    return {
        "id": zone.id,
        "targetNodeId": zone.target_node_id,
        "position": serialize_point(zone.position),
        "occupied": zone.occupied,
    }


def return_path(nodes: Sequence[Node], config: Optional[GraphSetConfig] = None) -> List[Dict[str, float]]:
    """
    Rectangular path closing the chain: from just below the last node, out to
    a lane on the right, up to just above the root, and back to the root.

    Derived purely from the first and last node positions; empty while the
    chain holds only the root.
    """
    if len(nodes) < 2:
        return []
    config = config or GraphSetConfig()
    first, last = nodes[0].position, nodes[-1].position
    margin, lane = config.return_path_margin, config.return_path_lane
    return [
        {"x": last.x, "y": last.y + margin},
        {"x": last.x + lane, "y": last.y + margin},
        {"x": last.x + lane, "y": first.y - margin},
        {"x": first.x, "y": first.y - margin},
    ]


# ── Public API ─────────────────────────────────────────────────────────────────

def serialize_graphset(
    snapshot: GraphSetSnapshot,
    config: Optional[GraphSetConfig] = None,
) -> Dict[str, Any]:
    """
    Serialize a full GraphSetSnapshot.

    :param snapshot: Snapshot taken from SessionController.snapshot().
    :param config:   Layout config used for the derived return path.
    """
    return {
        "nodes": [serialize_node(n) for n in snapshot.nodes],
        "connections": [serialize_connection(c) for c in snapshot.connections],
        "returnPath": return_path(snapshot.nodes, config),
        "items": [serialize_item(i, snapshot.drag) for i in snapshot.items],
        "openZone": serialize_zone(snapshot.open_zone),
        "dragging": snapshot.drag.item_id if snapshot.drag else None,
    }
