import logging
from typing import Dict, Optional, Tuple

from .Config import GraphSetConfig
from .Errors import InvariantViolation, UnknownItemError
from .GraphPrimitives import DraggableItem, Point

# Get a logger for this module
logger = logging.getLogger(__name__)


class ItemRegistry:
    """
    Fixed catalog of draggable palette items.

    Items are never added or removed after construction. The collection is an
    immutable tuple that is replaced wholesale on every change, so a snapshot
    handed to a renderer never changes underneath it.
    """

    def __init__(self, config: Optional[GraphSetConfig] = None):
        self.config = config or GraphSetConfig()
        self._items: Tuple[DraggableItem, ...] = self._build_catalog()
        self._index: Dict[str, int] = {item.id: i for i, item in enumerate(self._items)}
        self._active_item_id: Optional[str] = None

    def _build_catalog(self) -> Tuple[DraggableItem, ...]:
        items = []
        for ordinal, (item_id, label) in enumerate(self.config.catalog):
            origin = self.config.origin_for(ordinal)
            items.append(DraggableItem(item_id, label, ordinal, origin, origin))
        return tuple(items)

    # --- Lookups ---

    def items(self) -> Tuple[DraggableItem, ...]:
        return self._items

    def get(self, item_id: str) -> DraggableItem:
        i = self._index.get(item_id)
        if i is None:
            raise UnknownItemError(item_id)
        return self._items[i]

    def placed_items(self) -> Tuple[DraggableItem, ...]:
        return tuple(item for item in self._items if item.placed)

    @property
    def active_item_id(self) -> Optional[str]:
        return self._active_item_id

    # --- Staging ---
    # with_* methods compute a successor collection without touching the
    # registry. GraphBuilder uses them to stage a commit before applying it.

    def _with_item(self, item: DraggableItem) -> Tuple[DraggableItem, ...]:
        items = list(self._items)
        items[self._index[item.id]] = item
        return tuple(items)

    def with_placed(self, item_id: str) -> Tuple[DraggableItem, ...]:
        item = self.get(item_id)
        if item.placed:
            logger.error(f"mark_placed called twice for item '{item_id}'")
            raise InvariantViolation(f"Item '{item_id}' is already placed")
        return self._with_item(item._replace(placed=True))

    def apply(self, items: Tuple[DraggableItem, ...]) -> None:
        assert len(items) == len(self._items), "Catalog size is fixed"
        self._items = items

    # --- Operations ---

    def begin_drag(self, item_id: str, pointer_pos: Point) -> Optional[Point]:
        """
        Start dragging `item_id`. Returns the pointer-to-item-corner offset,
        or None if the item is already placed.
        """
        item = self.get(item_id)
        if item.placed:
            logger.debug(f"begin_drag refused: item '{item_id}' is already placed")
            return None
        self._active_item_id = item_id
        return Point(pointer_pos[0], pointer_pos[1]) - item.current_position

    def update_position(self, item_id: str, new_position: Point) -> None:
        if self._active_item_id != item_id:
            return
        item = self.get(item_id)
        self._items = self._with_item(item._replace(current_position=Point(*new_position)))

    def end_drag(self) -> None:
        self._active_item_id = None

    def mark_placed(self, item_id: str) -> None:
        self.apply(self.with_placed(item_id))
        logger.debug(f"Item '{item_id}' marked placed")

    def revert_to_origin(self, item_id: str) -> None:
        item = self.get(item_id)
        self._items = self._with_item(item._replace(current_position=item.origin_position))
        logger.debug(f"Item '{item_id}' reverted to origin {item.origin_position}")

    def reset(self) -> None:
        self._items = tuple(
            item._replace(placed=False, current_position=item.origin_position)
            for item in self._items
        )
        self._active_item_id = None
