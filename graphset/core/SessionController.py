import logging
from typing import Optional

from .Config import GraphSetConfig
from .DropZoneFrontier import DropZoneFrontier
from .Geometry import within_radius
from .GraphBuilder import GraphBuilder
from .GraphPrimitives import DragSession, GraphSetSnapshot, Point
from .ItemRegistry import ItemRegistry
from .Types import DragState, DropOutcome

logger = logging.getLogger(__name__)


class SessionController:
    """
    Pointer-driven state machine: IDLE <-> DRAGGING(item_id).

    pointer_down opens a DragSession, pointer_move moves the dragged item,
    pointer_up either commits the item onto the open drop zone or reverts
    it to its palette slot. Every handler runs to completion; at most one
    DragSession exists at a time.
    """

    def __init__(self, config: Optional[GraphSetConfig] = None):
        self.config = config or GraphSetConfig()
        self.registry = ItemRegistry(self.config)
        self.frontier = DropZoneFrontier(self.config)
        self.builder = GraphBuilder(self.registry, self.frontier, self.config)
        self._drag: Optional[DragSession] = None

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._drag else DragState.IDLE

    @property
    def dragging_item_id(self) -> Optional[str]:
        return self._drag.item_id if self._drag else None

    @property
    def drag_session(self) -> Optional[DragSession]:
        return self._drag

    # --- Pointer events ---

    def pointer_down(self, item_id: str, pointer_pos: Point) -> bool:
        """
        Returns True if a drag was started. Raises UnknownItemError for an id
        outside the catalog, whether or not a drag is active.
        """
        self.registry.get(item_id)
        if self._drag is not None:
            logger.debug(f"pointer_down on '{item_id}' ignored: '{self._drag.item_id}' is being dragged")
            return False

        pointer_offset = self.registry.begin_drag(item_id, Point(*pointer_pos))
        if pointer_offset is None:
            return False

        self._drag = DragSession(item_id, pointer_offset)
        logger.debug(f"Drag started: {self._drag}")
        return True

    def pointer_move(self, pointer_pos: Point) -> None:
        if self._drag is None:
            return
        new_position = Point(*pointer_pos) - self._drag.pointer_offset
        self.registry.update_position(self._drag.item_id, new_position)

    def pointer_up(self) -> DropOutcome:
        if self._drag is None:
            return DropOutcome.IGNORED

        item_id = self._drag.item_id
        try:
            item = self.registry.get(item_id)
            zone = self.frontier.open_zone()

            if not item.placed and within_radius(item.current_position, zone.position, self.config.hit_radius):
                self.builder.commit(item, zone)
                return DropOutcome.COMMITTED

            self.registry.revert_to_origin(item_id)
            logger.debug(f"Item '{item_id}' dropped outside '{zone.id}', reverted")
            return DropOutcome.REVERTED
        finally:
            self._drag = None
            self.registry.end_drag()

    # --- Commands ---

    def reset(self) -> None:
        self._drag = None
        self.builder.reset()
        self.registry.reset()
        self.frontier.reset()
        logger.info("Graphset reset")

    # --- Views ---

    def snapshot(self) -> GraphSetSnapshot:
        return GraphSetSnapshot(
            nodes=self.builder.nodes(),
            connections=self.builder.connections(),
            items=self.registry.items(),
            zones=self.frontier.zones(),
            open_zone=self.frontier.open_zone(),
            drag=self._drag,
        )
