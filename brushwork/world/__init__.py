"""Level features, tiles and the feature index."""

from .tiles import (
    Terrain,
    GroundCover,
    MushroomStyle,
    TileKind,
    Tile,
    AIR,
    AIR_INDEX,
    atlas_index,
)
from .feature import (
    ZoneTag,
    CrateKind,
    BaseFeature,
    GroundBlock,
    HillBlock,
    Igloo,
    TileFeature,
    CrateRect,
    SurfaceWater,
    SurfaceLava,
    BigMushroomTop,
    BigMushroomStem,
    SlopedGround,
    FlatGround,
    Zone,
    Offscreen,
    Feature,
)
from .schema import Schema

__all__ = [
    "Terrain",
    "GroundCover",
    "MushroomStyle",
    "TileKind",
    "Tile",
    "AIR",
    "AIR_INDEX",
    "atlas_index",
    "ZoneTag",
    "CrateKind",
    "BaseFeature",
    "GroundBlock",
    "HillBlock",
    "Igloo",
    "TileFeature",
    "CrateRect",
    "SurfaceWater",
    "SurfaceLava",
    "BigMushroomTop",
    "BigMushroomStem",
    "SlopedGround",
    "FlatGround",
    "Zone",
    "Offscreen",
    "Feature",
    "Schema",
]
