"""Tile resolution and autotiling."""

from .autotile import (
    GroundMarker,
    Side,
    Corner,
    TilingInfo,
    TiledCell,
    TILING_MARGIN,
    tiling_info,
    compute_tiling,
)
from .resolver import (
    Layer,
    LayeredTile,
    TileStack,
    TileGrid,
    resolve_feature,
    get_tile,
    render_level,
)

__all__ = [
    "GroundMarker",
    "Side",
    "Corner",
    "TilingInfo",
    "TiledCell",
    "TILING_MARGIN",
    "tiling_info",
    "compute_tiling",
    "Layer",
    "LayeredTile",
    "TileStack",
    "TileGrid",
    "resolve_feature",
    "get_tile",
    "render_level",
]
