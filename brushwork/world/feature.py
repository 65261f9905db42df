"""Level features.

A feature is a typed, geometrically bounded record describing one element
of a generated level: ground, hills, liquids, decorations and zone markers.
Features are frozen pydantic models; each knows its bounding Box2 and the
derived markers (FlatGround, SlopedGround) that must be indexed with it.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from brushwork.core.interval import Box1, Box2
from brushwork.core.types import LR, Place
from .tiles import GroundCover, Terrain, Tile


class ZoneTag(Enum):
    """Named level zones.

    Nine standalone zones, then the Grass/Desert/Candy themes, each in
    plains, hills, lake and sky variants.
    """

    MUSHROOM = "mushroom"
    CAVERNS = "caverns"
    FOREST = "forest"
    SNOW_FOREST = "snow_forest"
    STONE_MOUNTAIN = "stone_mountain"
    STONE_CLIFF = "stone_cliff"
    LAVA_PLAINS = "lava_plains"
    LAVA_HILLS = "lava_hills"
    CASTLE = "castle"
    GRASS_PLAINS = "grass_plains"
    GRASS_HILLS = "grass_hills"
    GRASS_LAKE = "grass_lake"
    GRASS_SKY = "grass_sky"
    DESERT_PLAINS = "desert_plains"
    DESERT_HILLS = "desert_hills"
    DESERT_LAKE = "desert_lake"
    DESERT_SKY = "desert_sky"
    CANDY_PLAINS = "candy_plains"
    CANDY_HILLS = "candy_hills"
    CANDY_LAKE = "candy_lake"
    CANDY_SKY = "candy_sky"

    @property
    def is_lake(self) -> bool:
        return self.value.endswith("_lake")

    @property
    def is_sky(self) -> bool:
        return self.value.endswith("_sky")

    @property
    def is_lava(self) -> bool:
        return self in (ZoneTag.LAVA_PLAINS, ZoneTag.LAVA_HILLS)


class CrateKind(Enum):
    """Crate fill: all cross-braced, or a random mix per cell."""

    CROSS = "cross"
    RANDOM = "random"


class BaseFeature(BaseModel):
    """Base for all level features."""

    model_config = ConfigDict(frozen=True)

    def bounds(self) -> Box2:
        """Covering box of every cell this feature touches."""
        raise NotImplementedError

    def derived(self) -> tuple[BaseFeature, ...]:
        """Secondary markers indexed alongside this feature."""
        return ()

    def describe(self) -> str:
        raise NotImplementedError


class GroundBlock(BaseFeature):
    """A solid rectangle of terrain."""

    kind: Literal["ground_block"] = "ground_block"
    cover: GroundCover
    terrain: Terrain
    box: Box2

    def bounds(self) -> Box2:
        return self.box

    def derived(self) -> tuple[BaseFeature, ...]:
        top = Place(self.box.x.lo, self.box.y.hi - 1)
        return (FlatGround(place=top, length=self.box.x.size),)

    def describe(self) -> str:
        return f"{self.terrain.value} ground ({self.cover.value}) {_fmt_box(self.box)}"


class HillBlock(BaseFeature):
    """A diagonal slope joining two ground heights.

    The slope covers `height.size` columns from start_x; L rises to the
    right, R falls to the right. Below the diagonal the hill is either
    solid down to `base`, or a bridge `bridge_thickness` rows deep whose
    underside is capped with rock slopes.
    """

    kind: Literal["hill_block"] = "hill_block"
    terrain: Terrain
    start_x: int
    height: Box1
    bridge_thickness: int | None = None
    lr: LR
    base: int

    def top_at(self, x: int) -> int:
        """Row of the slope tile in column x."""
        dx = x - self.start_x
        if self.lr is LR.L:
            return self.height.lo + dx
        return self.height.hi - 1 - dx

    def bounds(self) -> Box2:
        if self.bridge_thickness is not None:
            lo = self.height.lo - self.bridge_thickness
        else:
            lo = min(self.base, self.height.lo)
        return Box2(
            Box1(self.start_x, self.start_x + self.height.size),
            Box1(lo, self.height.hi),
        )

    def derived(self) -> tuple[BaseFeature, ...]:
        if self.lr is LR.L:
            start = Place(self.start_x, self.height.lo)
        else:
            start = Place(self.start_x, self.height.hi - 1)
        return (SlopedGround(start=start, height=-self.lr.sign * self.height.size),)

    def describe(self) -> str:
        bridge = f", bridge {self.bridge_thickness}" if self.bridge_thickness else ""
        return (
            f"{self.terrain.value} hill rising {self.lr.value} at x={self.start_x} "
            f"y={self.height.lo}..{self.height.hi}{bridge}"
        )


class Igloo(BaseFeature):
    """An igloo drawn in the background; door is the x offset of the door column."""

    kind: Literal["igloo"] = "igloo"
    box: Box2
    door: int

    def bounds(self) -> Box2:
        return self.box

    def describe(self) -> str:
        return f"igloo {_fmt_box(self.box)} door +{self.door}"


class TileFeature(BaseFeature):
    """A single concrete tile placed in the foreground."""

    kind: Literal["tile"] = "tile"
    place: Place
    tile: Tile

    def bounds(self) -> Box2:
        return Box2.from_point(self.place)

    def describe(self) -> str:
        return f"tile {self.tile} at ({self.place.x}, {self.place.y})"


class CrateRect(BaseFeature):
    """A stack of crates filling a rectangle."""

    kind: Literal["crate_rect"] = "crate_rect"
    crate: CrateKind
    box: Box2

    def bounds(self) -> Box2:
        return self.box

    def describe(self) -> str:
        return f"{self.crate.value} crates {_fmt_box(self.box)}"


class SurfaceWater(BaseFeature):
    """A body of water; its top row is drawn as waves."""

    kind: Literal["surface_water"] = "surface_water"
    box: Box2

    def bounds(self) -> Box2:
        return self.box

    def describe(self) -> str:
        return f"water {_fmt_box(self.box)}"


class SurfaceLava(BaseFeature):
    """A body of lava; its top row is drawn as waves."""

    kind: Literal["surface_lava"] = "surface_lava"
    box: Box2

    def bounds(self) -> Box2:
        return self.box

    def describe(self) -> str:
        return f"lava {_fmt_box(self.box)}"


class BigMushroomTop(BaseFeature):
    """A mushroom cap spanning width cells either side of center."""

    kind: Literal["big_mushroom_top"] = "big_mushroom_top"
    center: Place
    width: int

    def bounds(self) -> Box2:
        return Box2(
            Box1(self.center.x - self.width, self.center.x + self.width + 1),
            Box1.from_point(self.center.y),
        )

    def derived(self) -> tuple[BaseFeature, ...]:
        left = Place(self.center.x - self.width, self.center.y)
        return (FlatGround(place=left, length=2 * self.width + 1),)

    def describe(self) -> str:
        return f"mushroom cap at ({self.center.x}, {self.center.y}) half-width {self.width}"


class BigMushroomStem(BaseFeature):
    """A mushroom stem rising height cells from base."""

    kind: Literal["big_mushroom_stem"] = "big_mushroom_stem"
    base: Place
    height: int

    def bounds(self) -> Box2:
        return Box2(
            Box1.from_point(self.base.x),
            Box1(self.base.y, self.base.y + self.height),
        )

    def describe(self) -> str:
        return f"mushroom stem at ({self.base.x}, {self.base.y}) height {self.height}"


class SlopedGround(BaseFeature):
    """Walkable diagonal surface derived from a hill.

    Positive height rises to the right from start, negative falls.
    """

    kind: Literal["sloped_ground"] = "sloped_ground"
    start: Place
    height: int

    @property
    def low_y(self) -> int:
        """Lowest walkable row of the slope."""
        if self.height >= 0:
            return self.start.y
        return self.start.y + self.height + 1

    def bounds(self) -> Box2:
        span = abs(self.height)
        return Box2(
            Box1(self.start.x, self.start.x + span),
            Box1(self.low_y, self.low_y + span),
        )

    def describe(self) -> str:
        return f"slope from ({self.start.x}, {self.start.y}) height {self.height:+d}"


class FlatGround(BaseFeature):
    """Walkable flat surface: the top row of a ground block or mushroom cap."""

    kind: Literal["flat_ground"] = "flat_ground"
    place: Place
    length: int

    @property
    def span(self) -> Box1:
        return Box1(self.place.x, self.place.x + self.length)

    def bounds(self) -> Box2:
        return Box2(self.span, Box1.from_point(self.place.y))

    def describe(self) -> str:
        return f"flat ground at ({self.place.x}, {self.place.y}) length {self.length}"


class Zone(BaseFeature):
    """Marks the extent of one zone."""

    kind: Literal["zone"] = "zone"
    zone: ZoneTag
    box: Box2

    def bounds(self) -> Box2:
        return self.box

    def describe(self) -> str:
        return f"zone {self.zone.value} x={self.box.x.lo}..{self.box.x.hi}"


class Offscreen(BaseFeature):
    """Space outside the playable level."""

    kind: Literal["offscreen"] = "offscreen"
    box: Box2

    def bounds(self) -> Box2:
        return self.box

    def describe(self) -> str:
        return f"offscreen {_fmt_box(self.box)}"


Feature = (
    GroundBlock
    | HillBlock
    | Igloo
    | TileFeature
    | CrateRect
    | SurfaceWater
    | SurfaceLava
    | BigMushroomTop
    | BigMushroomStem
    | SlopedGround
    | FlatGround
    | Zone
    | Offscreen
)

# Features that only mark space and never resolve to a tile
MARKER_FEATURES: tuple[type[BaseFeature], ...] = (Zone, FlatGround, SlopedGround, Offscreen)


def _fmt_box(box: Box2) -> str:
    return f"[{box.x.lo}, {box.x.hi}) x [{box.y.lo}, {box.y.hi})"
