import logging
from typing import Optional, Tuple

from .Config import GraphSetConfig
from .DropZoneFrontier import DropZoneFrontier
from .Errors import InvariantViolation
from .Geometry import within_radius
from .GraphPrimitives import Connection, DraggableItem, DropZone, Node
from .ItemRegistry import ItemRegistry

# Get a logger for this module
logger = logging.getLogger(__name__)


def connection_label(node_id: int) -> str:
    return f"L{node_id}"


class GraphBuilder:
    """
    Owns the committed graphset: a single chain of nodes 0..N and the
    connections (i-1 -> i) between them.

    `commit` is the only mutation point for the chain. It also places the
    item and advances the frontier, so the builder holds references to the
    ItemRegistry and the DropZoneFrontier it commits against.
    """

    def __init__(self,
                 registry: ItemRegistry,
                 frontier: DropZoneFrontier,
                 config: Optional[GraphSetConfig] = None):
        self.config = config or GraphSetConfig()
        self.registry = registry
        self.frontier = frontier
        self._nodes: Tuple[Node, ...] = (self._root_node(),)
        self._connections: Tuple[Connection, ...] = ()

    def _root_node(self) -> Node:
        return Node(0, self.config.root_position, self.config.root_label, None, True)

    # --- Read-only views ---

    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    def connections(self) -> Tuple[Connection, ...]:
        return self._connections

    def root_node(self) -> Node:
        return self._nodes[0]

    def last_node(self) -> Node:
        return self._nodes[-1]

    def next_node_id(self) -> int:
        return self._nodes[-1].id + 1

    def get_node_by_id(self, node_id: int) -> Optional[Node]:
        # the chain is dense: node i sits at index i
        if 0 <= node_id < len(self._nodes):
            return self._nodes[node_id]
        return None

    # --- Transitions ---

    def _check_preconditions(self, item: DraggableItem, zone: DropZone) -> None:
        problem = None
        if zone.occupied:
            problem = f"zone '{zone.id}' is occupied"
        elif zone.id != self.frontier.open_zone().id:
            problem = f"zone '{zone.id}' is not the open zone"
        elif item.placed:
            problem = f"item '{item.id}' is already placed"
        elif not within_radius(item.current_position, zone.position, self.config.hit_radius):
            problem = f"item '{item.id}' at {item.current_position} is outside zone '{zone.id}'"
        elif zone.target_node_id != self.next_node_id():
            problem = f"zone '{zone.id}' targets node {zone.target_node_id}, expected {self.next_node_id()}"

        if problem:
            logger.error(f"commit rejected: {problem}")
            raise InvariantViolation(f"Cannot commit: {problem}")

    def commit(self, item: DraggableItem, zone: DropZone) -> Tuple[Node, Optional[Connection]]:
        """
        Turn a successful drop into a new node (+ connection from the previous
        node), mark the item placed and advance the frontier.

        All successor collections are computed first and applied together;
        if any staging step raises, nothing has changed.
        """
        self._check_preconditions(item, zone)

        node = Node(zone.target_node_id, zone.position, item.label, item.id, False)
        connection = None
        if node.id > 0:
            connection = Connection(node.id - 1, node.id, connection_label(node.id))

        # Stage
        nodes = self._nodes + (node,)
        connections = self._connections + ((connection,) if connection else ())
        items = self.registry.with_placed(item.id)
        zones = self.frontier.with_advance(zone.id)

        # Apply
        self._nodes = nodes
        self._connections = connections
        self.registry.apply(items)
        self.frontier.apply(zones)

        logger.info(f"Committed {node} from item '{item.id}' via {connection}")
        return node, connection

    def reset(self) -> None:
        self._nodes = (self._root_node(),)
        self._connections = ()
