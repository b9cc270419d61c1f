import logging
from typing import Optional, Tuple

from .Config import GraphSetConfig
from .Errors import InvariantViolation
from .Geometry import offset
from .GraphPrimitives import DropZone

logger = logging.getLogger(__name__)


class DropZoneFrontier:
    """
    Ordered, growing list of drop zones.

    Exactly one zone is unoccupied and it is always the last one, so the open
    zone is a direct lookup. Zones are never removed or reused; the list only
    grows by one per commit until reset.
    """

    def __init__(self, config: Optional[GraphSetConfig] = None):
        self.config = config or GraphSetConfig()
        self._zones: Tuple[DropZone, ...] = (self._initial_zone(),)

    def _initial_zone(self) -> DropZone:
        # Anchored one zone_spacing below the root node; the first commit
        # creates node 1.
        position = offset(self.config.root_position, dy=self.config.zone_spacing)
        return DropZone("drop0", 1, position, False)

    def zones(self) -> Tuple[DropZone, ...]:
        return self._zones

    def occupied_zones(self) -> Tuple[DropZone, ...]:
        return tuple(z for z in self._zones if z.occupied)

    def open_zone(self) -> DropZone:
        last = self._zones[-1] if self._zones else None
        if last is None or last.occupied:
            logger.error(f"No open drop zone among {len(self._zones)} zones")
            raise InvariantViolation("Drop-zone frontier has no open zone")
        return last

    def with_advance(self, committed_zone_id: str) -> Tuple[DropZone, ...]:
        zone = self.open_zone()
        if zone.id != committed_zone_id:
            logger.error(f"advance('{committed_zone_id}') but the open zone is '{zone.id}'")
            raise InvariantViolation(f"Zone '{committed_zone_id}' is not the open zone")

        next_zone = DropZone(
            f"drop{len(self._zones)}",
            zone.target_node_id + 1,
            offset(zone.position, dy=self.config.zone_spacing),
            False,
        )
        return self._zones[:-1] + (zone._replace(occupied=True), next_zone)

    def apply(self, zones: Tuple[DropZone, ...]) -> None:
        self._zones = zones

    def advance(self, committed_zone_id: str) -> None:
        self.apply(self.with_advance(committed_zone_id))

    def reset(self) -> None:
        self._zones = (self._initial_zone(),)
