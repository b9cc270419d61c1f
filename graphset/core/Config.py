"""
GraphSetConfig — layout constants and the default palette catalog.

Defaults reproduce the reference layout: root node at (100, 70), first drop
zone 90 units below it, palette items stacked 70 units apart starting at
(400, 50), and a 60 unit hit radius.

Configuration is loaded from:
1. Environment variables (prefixed with GRAPHSET_, e.g. GRAPHSET_HIT_RADIUS)
2. a `.env` file in the working directory
"""
from __future__ import annotations

import logging
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .GraphPrimitives import Point

logger = logging.getLogger(__name__)


DEFAULT_CATALOG: Tuple[Tuple[str, str], ...] = (
    ("func1", "Function A"),
    ("func2", "Function B"),
    ("func3", "Function C"),
    ("func4", "Function D"),
)


class GraphSetConfig(BaseSettings):
    """Graphset layout settings."""

    # Distances must be finite and positive: a nan or negative radius would
    # make every drop miss.
    hit_radius: float = Field(60.0, gt=0, allow_inf_nan=False)
    zone_spacing: float = Field(90.0, gt=0, allow_inf_nan=False)
    palette_spacing: float = Field(70.0, gt=0, allow_inf_nan=False)

    root_x: float = Field(100.0, allow_inf_nan=False)
    root_y: float = Field(70.0, allow_inf_nan=False)
    root_label: str = "Node 0"
    palette_x: float = Field(400.0, allow_inf_nan=False)
    palette_y: float = Field(50.0, allow_inf_nan=False)

    # Return path geometry, consumed by the serializer only
    return_path_margin: float = 32.0
    return_path_lane: float = 80.0

    catalog: Tuple[Tuple[str, str], ...] = DEFAULT_CATALOG

    model_config = SettingsConfigDict(
        env_prefix="GRAPHSET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @property
    def root_position(self) -> Point:
        return Point(self.root_x, self.root_y)

    @property
    def palette_origin(self) -> Point:
        return Point(self.palette_x, self.palette_y)

    def origin_for(self, ordinal: int) -> Point:
        """Idle palette slot of the item at position `ordinal` in the catalog."""
        return Point(self.palette_x, self.palette_y + ordinal * self.palette_spacing)
