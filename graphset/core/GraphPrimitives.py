from typing import NamedTuple, Optional, Tuple


# All model records are NamedTuples: immutable, cheap to copy with _replace(),
# and safe to hand out as read-only snapshots to the presentation layer.

class Point(NamedTuple):
    x: float
    y: float

    # Accepts any (x, y) pair, not just another Point
    def __sub__(self, other) -> "Point":
        return Point(self.x - other[0], self.y - other[1])

    def __add__(self, other) -> "Point":
        return Point(self.x + other[0], self.y + other[1])

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


class Node(NamedTuple):
    id: int
    position: Point
    label: str
    source_item_id: Optional[str] = None
    fixed: bool = False

    def __repr__(self):
        return f"Node({self.id}, '{self.label}')"


class Connection(NamedTuple):
    from_node_id: int
    to_node_id: int
    label: str

    def __repr__(self):
        return f"Connection({self.from_node_id} -> {self.to_node_id}, '{self.label}')"


class DraggableItem(NamedTuple):
    id: str
    label: str
    ordinal: int                 # index in the palette catalog
    origin_position: Point       # idle slot in the palette, fixed at init
    current_position: Point
    placed: bool = False


class DropZone(NamedTuple):
    id: str
    target_node_id: int
    position: Point
    occupied: bool = False


class DragSession(NamedTuple):
    item_id: str
    pointer_offset: Point        # pointer position minus item corner at pointer-down


class GraphSetSnapshot(NamedTuple):
    """Everything a renderer needs, captured at a single point in time."""
    nodes: Tuple[Node, ...]
    connections: Tuple[Connection, ...]
    items: Tuple[DraggableItem, ...]
    zones: Tuple[DropZone, ...]
    open_zone: DropZone
    drag: Optional[DragSession] = None
