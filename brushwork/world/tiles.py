"""Tile identifiers and the texture-atlas lookup.

A Tile is a small hashable value naming one piece of tile art. Terrain
tiles (block faces, slopes, caps...) carry the terrain whose 4-row block
of the atlas they are drawn from; the remaining tiles are standalone
decorations, liquids and structure parts.

atlas_index() maps a Tile to its (column, row) cell in the sprite sheet.
Air has a cell in the sheet but is never drawn; consumers get it as the
AIR sentinel.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from brushwork.core.types import LR, LMR, TB, TMB


class Terrain(Enum):
    """Ground materials. Each owns a 4-row block of terrain art."""

    CAKE = "cake"
    CHOCO = "choco"
    METAL = "metal"
    TUNDRA = "tundra"
    CASTLE = "castle"
    DIRT = "dirt"
    GRASS = "grass"
    STONE = "stone"
    SAND = "sand"
    SNOW = "snow"
    INDUSTRIAL = "industrial"

    @property
    def atlas_row(self) -> int:
        return _TERRAIN_ORDER.index(self) * 4


_TERRAIN_ORDER: list[Terrain] = list(Terrain)


class GroundCover(Enum):
    """Which sides of a ground region must show an exterior face.

    FULLY_COVERED: every open side gets a face, even between blocks
    TOP_COVERED: top and bottom faces; same-terrain neighbors merge sideways
    BARE: no top face (buried floor look)
    """

    FULLY_COVERED = "fully_covered"
    TOP_COVERED = "top_covered"
    BARE = "bare"


class MushroomStyle(Enum):
    """Palette of a big mushroom cap."""

    CARAMEL = "caramel"
    BROWN = "brown"
    RED = "red"
    WHITE = "white"


class TileKind(Enum):
    """Every tile shape the generator can emit."""

    # Terrain shapes (need a terrain)
    BLOCK_FACE = "block_face"
    SLOPE = "slope"
    SLOPE_INT = "slope_int"
    FACE_INT = "face_int"
    CAP = "cap"
    ROCK_SLOPE = "rock_slope"
    BLOCK = "block"
    BARE_BLOCK = "bare_block"
    SINGLE = "single"
    SINGLE_BARE = "single_bare"
    JAGGED = "jagged"

    # Liquids
    AIR = "air"
    WATER = "water"
    WATER_WAVE = "water_wave"
    LAVA = "lava"
    LAVA_WAVE = "lava_wave"

    # Structures
    IGLOO_TOP = "igloo_top"
    IGLOO_INTERIOR = "igloo_interior"
    IGLOO_DOOR = "igloo_door"
    CRATE_BLANK = "crate_blank"
    CRATE_SLASH = "crate_slash"
    CRATE_CROSS = "crate_cross"

    # Big mushrooms
    MUSHROOM_BLOCK = "mushroom_block"
    MUSHROOM_STEM_BLOCK = "mushroom_stem_block"
    MUSHROOM_STEM_TOP = "mushroom_stem_top"
    MUSHROOM_STEM_LEAF = "mushroom_stem_leaf"
    MUSHROOM_STEM_RING = "mushroom_stem_ring"
    MUSHROOM_STEM = "mushroom_stem"
    MUSHROOM_STEM_BASE = "mushroom_stem_base"

    # Decorations
    MUSHROOM_RED = "mushroom_red"
    MUSHROOM_WHITE = "mushroom_white"
    MUSHROOM_BROWN = "mushroom_brown"
    PINE_TOP = "pine_top"
    PINE_BRANCH = "pine_branch"
    PINE_TRUNK = "pine_trunk"
    TRUNK_BASE = "trunk_base"
    TRUNK_BASE_SNOW = "trunk_base_snow"
    GRASS_TUFT = "grass_tuft"
    CACTUS = "cactus"
    SAPLING = "sapling"
    ROCK = "rock"
    MOSS = "moss"
    STONE_SPIKE = "stone_spike"
    SNOW_PILE = "snow_pile"
    COIN_GOLD = "coin_gold"
    STAR = "star"


TERRAIN_KINDS: frozenset[TileKind] = frozenset({
    TileKind.BLOCK_FACE,
    TileKind.SLOPE,
    TileKind.SLOPE_INT,
    TileKind.FACE_INT,
    TileKind.CAP,
    TileKind.ROCK_SLOPE,
    TileKind.BLOCK,
    TileKind.BARE_BLOCK,
    TileKind.SINGLE,
    TileKind.SINGLE_BARE,
    TileKind.JAGGED,
})


class Tile(NamedTuple):
    """A concrete tile.

    Attributes:
        kind: Tile shape
        terrain: Terrain block for terrain shapes, None otherwise
        h: Horizontal orientation (LR or LMR depending on kind)
        v: Vertical orientation (TB or TMB depending on kind)
        alt: Alternate art variant
        style: Mushroom cap palette
    """

    kind: TileKind
    terrain: Terrain | None = None
    h: LR | LMR | None = None
    v: TB | TMB | None = None
    alt: bool = False
    style: MushroomStyle | None = None

    @property
    def is_terrain(self) -> bool:
        return self.terrain is not None

    def __str__(self) -> str:
        parts = [p.value for p in (self.terrain, self.h, self.v, self.style) if p is not None]
        if self.alt:
            parts.append("alt")
        return f"{self.kind.value}({', '.join(parts)})" if parts else self.kind.value


AIR = Tile(TileKind.AIR)

# Sentinel atlas coordinate handed to renderers for air
AIR_INDEX: tuple[int, int] = (-1, -1)


# -----------------------------------------------------------------------------
# Constructors
# -----------------------------------------------------------------------------


def block_face(terrain: Terrain, lmr: LMR, tmb: TMB) -> Tile:
    return Tile(TileKind.BLOCK_FACE, terrain, h=lmr, v=tmb)


def slope(terrain: Terrain, lr: LR) -> Tile:
    return Tile(TileKind.SLOPE, terrain, h=lr)


def slope_int(terrain: Terrain, lr: LR) -> Tile:
    return Tile(TileKind.SLOPE_INT, terrain, h=lr)


def face_int(terrain: Terrain, lr: LR, tb: TB) -> Tile:
    return Tile(TileKind.FACE_INT, terrain, h=lr, v=tb)


def cap(terrain: Terrain, lr: LR) -> Tile:
    return Tile(TileKind.CAP, terrain, h=lr)


def rock_slope(terrain: Terrain, lr: LR, tb: TB) -> Tile:
    return Tile(TileKind.ROCK_SLOPE, terrain, h=lr, v=tb)


def simple(kind: TileKind, alt: bool = False) -> Tile:
    return Tile(kind, alt=alt)


# -----------------------------------------------------------------------------
# Atlas lookup
# -----------------------------------------------------------------------------


def _h(tile: Tile) -> int:
    return tile.h.index if tile.h is not None else 0


def _v(tile: Tile) -> int:
    return tile.v.index if tile.v is not None else 0


_MUSHROOM_ROWS: dict[MushroomStyle, int] = {
    MushroomStyle.CARAMEL: 20,
    MushroomStyle.BROWN: 22,
    MushroomStyle.RED: 24,
    MushroomStyle.WHITE: 26,
}

# Positions within a terrain's 4-row block
_TERRAIN_ATLAS: dict[TileKind, Callable[[Tile], tuple[int, int]]] = {
    TileKind.BLOCK_FACE: lambda t: (_h(t), 1 + _v(t)),
    TileKind.SLOPE: lambda t: (3 + _h(t), 1),
    TileKind.SLOPE_INT: lambda t: (3 + _h(t), 2),
    TileKind.FACE_INT: lambda t: (5 + _h(t), 2 - _v(t)),
    TileKind.CAP: lambda t: (6 + _h(t), 3),
    TileKind.ROCK_SLOPE: lambda t: (9 + _h(t), 2 + _v(t)),
    TileKind.BLOCK: lambda t: (8, 2),
    TileKind.BARE_BLOCK: lambda t: (3, 3),
    TileKind.SINGLE: lambda t: (4, 3),
    TileKind.SINGLE_BARE: lambda t: (5, 3),
    TileKind.JAGGED: lambda t: (8, 3),
}

_TILE_ATLAS: dict[TileKind, Callable[[Tile], tuple[int, int]]] = {
    TileKind.AIR: lambda t: (12, 32),
    TileKind.WATER: lambda t: (14, 17),
    TileKind.WATER_WAVE: lambda t: (12, 17),
    TileKind.LAVA: lambda t: (14, 16),
    TileKind.LAVA_WAVE: lambda t: (12, 16),
    TileKind.IGLOO_TOP: lambda t: (17 + _h(t), 34),
    TileKind.IGLOO_INTERIOR: lambda t: (17 + t.alt, 35),
    TileKind.IGLOO_DOOR: lambda t: (19, 35),
    TileKind.CRATE_BLANK: lambda t: (19, 22),
    TileKind.CRATE_SLASH: lambda t: (20, 22),
    TileKind.CRATE_CROSS: lambda t: (21, 22),
    TileKind.MUSHROOM_BLOCK: lambda t: (12 + _h(t), _MUSHROOM_ROWS[t.style] + t.alt),
    TileKind.MUSHROOM_STEM_BLOCK: lambda t: (15, _MUSHROOM_ROWS[t.style] + t.alt),
    TileKind.MUSHROOM_STEM_TOP: lambda t: (16, 20 + t.alt),
    TileKind.MUSHROOM_STEM_LEAF: lambda t: (16, 22),
    TileKind.MUSHROOM_STEM_RING: lambda t: (16, 23 + t.alt),
    TileKind.MUSHROOM_STEM: lambda t: (16, 25),
    TileKind.MUSHROOM_STEM_BASE: lambda t: (16, 26 + t.alt),
    TileKind.MUSHROOM_WHITE: lambda t: (17 + t.alt, 25),
    TileKind.MUSHROOM_RED: lambda t: (17 + t.alt, 26),
    TileKind.MUSHROOM_BROWN: lambda t: (17 + t.alt, 27),
    # alt selects the snowy variant of pine parts
    TileKind.PINE_TOP: lambda t: (17, 16 + t.alt),
    TileKind.PINE_BRANCH: lambda t: (20 + _h(t) - 2 * t.alt, 16),
    TileKind.PINE_TRUNK: lambda t: (22, 17),
    TileKind.TRUNK_BASE: lambda t: (17, 15),
    TileKind.TRUNK_BASE_SNOW: lambda t: (19, 15),
    TileKind.GRASS_TUFT: lambda t: (14, 32),
    TileKind.CACTUS: lambda t: (15, 32),
    TileKind.SAPLING: lambda t: (16, 32),
    TileKind.ROCK: lambda t: (12, 33),
    TileKind.MOSS: lambda t: (15, 33),
    TileKind.STONE_SPIKE: lambda t: (15, 35),
    TileKind.SNOW_PILE: lambda t: (15, 28),
    TileKind.COIN_GOLD: lambda t: (23, 41),
    TileKind.STAR: lambda t: (23, 35),
}


def atlas_index(tile: Tile) -> tuple[int, int]:
    """Get the (column, row) sprite-sheet cell for a tile.

    Args:
        tile: Any concrete tile

    Returns:
        Atlas coordinate. Terrain shapes are offset into their terrain's block.

    Raises:
        ValueError: If a terrain shape has no terrain
    """
    if tile.kind in TERRAIN_KINDS:
        if tile.terrain is None:
            raise ValueError(f"terrain tile {tile.kind.value} has no terrain")
        col, row = _TERRAIN_ATLAS[tile.kind](tile)
        return (col, row + tile.terrain.atlas_row)
    return _TILE_ATLAS[tile.kind](tile)
