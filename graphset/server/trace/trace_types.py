"""
Authoritative TraceEvent type definitions for the graphset event stream.
All events are plain dicts so they can be emitted over Socket.IO without Pydantic overhead.
"""
from typing import Any, Dict, Literal, Optional, TypedDict, Union


class PointDict(TypedDict):
    x: float
    y: float


class _Stamped(TypedDict, total=False):
    ts: int   # added by TraceEmitter.fire()


class DragStartEvent(_Stamped):
    type: Literal["DRAG_START"]
    itemId: str
    pointerOffset: PointDict


class ItemMovedEvent(_Stamped):
    type: Literal["ITEM_MOVED"]
    itemId: str
    position: PointDict


class NodeCommittedEvent(_Stamped):
    type: Literal["NODE_COMMITTED"]
    itemId: str
    node: Dict[str, Any]
    connection: Optional[Dict[str, Any]]
    openZone: Dict[str, Any]


class ItemRevertedEvent(_Stamped):
    type: Literal["ITEM_REVERTED"]
    itemId: str
    position: PointDict


class GraphResetEvent(_Stamped):
    type: Literal["GRAPH_RESET"]


TraceEvent = Union[
    DragStartEvent,
    ItemMovedEvent,
    NodeCommittedEvent,
    ItemRevertedEvent,
    GraphResetEvent,
]
