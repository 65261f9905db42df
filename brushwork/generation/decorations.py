"""
Zone decoration brushes.

These follow one pattern: find the walkable ground (or open air) already in
the schema, carve it into slots, let noise decide whether each slot gets a
decoration and where it fits, and only place it if the target space is
still unoccupied.
"""

from __future__ import annotations

import logging

from brushwork.core.interval import (
    Box1,
    Box2,
    n_to_bool,
    n_to_box1,
    n_to_fitted_box1,
    n_to_range,
)
from brushwork.core.types import LR, Place
from brushwork.world.feature import (
    MARKER_FEATURES,
    CrateKind,
    CrateRect,
    FlatGround,
    GroundBlock,
    HillBlock,
    Igloo,
    TileFeature,
    ZoneTag,
)
from brushwork.world.tiles import GroundCover, Tile, TileKind
from .brushes import Run, run_length_encode
from .noise import spread
from .pipeline import BaseBrush, BrushContext

logger = logging.getLogger(__name__)

# Noise channels, kept clear of the ones used by the floor brush
CH_SCATTER = 6.0
CH_TREE = 7.0
CH_IGLOO = 8.0
CH_BONUS = 9.0
CH_BONUS_FIT = 10.0
CH_ROOF = 11.0
CH_LEDGE = 12.0
CH_TOWER = 13.0


def is_free(ctx: BrushContext, box: Box2) -> bool:
    """True if box lies inside the zone's rows and overlaps nothing solid."""
    if not ctx.box.y.contains_box(box.y):
        return False
    return all(isinstance(f, MARKER_FEATURES) for f in ctx.schema.intersecting(box))


def flat_runs(ctx: BrushContext, min_length: int = 1) -> list[FlatGround]:
    """Walkable flat ground fully inside the zone, left to right."""
    runs = [
        f for f in ctx.schema.of_kind(ctx.box, FlatGround)
        if f.length >= min_length and ctx.box.x.contains_box(f.span)
    ]
    return sorted(runs, key=lambda f: (f.place.x, f.place.y))


def slots(span: Box1, width: int) -> list[Box1]:
    """Cut span into consecutive slots of width; the last may be shorter."""
    return [Box1(lo, min(lo + width, span.hi)) for lo in range(span.lo, span.hi, width)]


# -----------------------------------------------------------------------------
# Scatter
# -----------------------------------------------------------------------------

SCATTER_SLOT = 5
SCATTER_CHANCE = 0.45

_PLANTS = (Tile(TileKind.GRASS_TUFT), Tile(TileKind.SAPLING))
_DESERT = (Tile(TileKind.CACTUS), Tile(TileKind.ROCK))
_CANDY = (Tile(TileKind.STAR), Tile(TileKind.COIN_GOLD))
_ROCKS = (Tile(TileKind.ROCK), Tile(TileKind.STONE_SPIKE), Tile(TileKind.MOSS))
_MUSHROOMS = (
    Tile(TileKind.MUSHROOM_RED),
    Tile(TileKind.MUSHROOM_RED, alt=True),
    Tile(TileKind.MUSHROOM_WHITE),
    Tile(TileKind.MUSHROOM_WHITE, alt=True),
    Tile(TileKind.MUSHROOM_BROWN),
    Tile(TileKind.MUSHROOM_BROWN, alt=True),
)

SCATTER_TILES: dict[ZoneTag, tuple[Tile, ...]] = {
    ZoneTag.GRASS_PLAINS: _PLANTS,
    ZoneTag.GRASS_HILLS: _PLANTS,
    ZoneTag.DESERT_PLAINS: _DESERT,
    ZoneTag.DESERT_HILLS: _DESERT,
    ZoneTag.CANDY_PLAINS: _CANDY,
    ZoneTag.CANDY_HILLS: _CANDY,
    ZoneTag.STONE_MOUNTAIN: _ROCKS,
    ZoneTag.STONE_CLIFF: _ROCKS,
    ZoneTag.MUSHROOM: _MUSHROOMS,
}


class ScatterBrush(BaseBrush):
    """Sprinkles single decoration tiles on top of flat ground."""

    zones = frozenset(SCATTER_TILES)

    def _paint(self, ctx: BrushContext) -> None:
        choices = SCATTER_TILES[ctx.zone]
        theme = ctx.gen.theme
        for run in flat_runs(ctx):
            y = run.place.y + 1
            for slot in slots(run.span, SCATTER_SLOT):
                n = theme.get(slot.lo, CH_SCATTER)
                if n >= SCATTER_CHANCE:
                    continue
                spot = n_to_fitted_box1(spread(n), 1, slot)
                place = Place(spot.lo, y)
                if not is_free(ctx, Box2.from_point(place)):
                    continue
                tile = choices[n_to_range(spread(n, 100), len(choices))]
                ctx.schema.add(TileFeature(place=place, tile=tile))


# -----------------------------------------------------------------------------
# Trees
# -----------------------------------------------------------------------------

TREE_SLOT = 7
TREE_CHANCE = 0.5


def pine_tree(trunk: Place, branch_rows: int, snow: bool) -> list[TileFeature]:
    """Tiles of a three-wide pine standing on the cell below trunk.

    Layout, bottom to top: trunk base, branch_rows rows of trunk with a
    branch either side, then the tree top.
    """
    base = TileKind.TRUNK_BASE_SNOW if snow else TileKind.TRUNK_BASE
    tiles = [TileFeature(place=trunk, tile=Tile(base))]
    for dy in range(1, branch_rows + 1):
        row = trunk + (0, dy)
        tiles.append(TileFeature(place=row, tile=Tile(TileKind.PINE_TRUNK)))
        tiles.append(TileFeature(place=row.left, tile=Tile(TileKind.PINE_BRANCH, h=LR.L, alt=snow)))
        tiles.append(TileFeature(place=row.right, tile=Tile(TileKind.PINE_BRANCH, h=LR.R, alt=snow)))
    top = trunk + (0, branch_rows + 1)
    tiles.append(TileFeature(place=top, tile=Tile(TileKind.PINE_TOP, alt=snow)))
    return tiles


class TreeBrush(BaseBrush):
    """Plants pine trees on flat ground in forests."""

    zones = frozenset({ZoneTag.FOREST, ZoneTag.SNOW_FOREST})

    def _paint(self, ctx: BrushContext) -> None:
        gen = ctx.gen
        snow = ctx.zone is ZoneTag.SNOW_FOREST
        for run in flat_runs(ctx, min_length=3):
            ground = run.place.y
            for slot in slots(run.span, TREE_SLOT):
                if gen.theme.get(slot.lo, CH_TREE) >= TREE_CHANCE:
                    continue
                span = n_to_fitted_box1(gen.terrain.get(slot.lo, CH_TREE), 3, slot)
                if span is None:
                    continue
                branch_rows = n_to_box1(spread(gen.zone.get(slot.lo, CH_TREE)), Box1(1, 4))
                box = Box2(span, Box1(ground + 1, ground + branch_rows + 3))
                if not is_free(ctx, box):
                    continue
                for tile in pine_tree(Place(span.lo + 1, ground + 1), branch_rows, snow):
                    ctx.schema.add(tile)


# -----------------------------------------------------------------------------
# Igloos
# -----------------------------------------------------------------------------

IGLOO_CHANCE = 0.35


class IglooBrush(BaseBrush):
    """Builds igloos, 2-4 wide and 2-3 tall, on snowy flat ground."""

    zones = frozenset({ZoneTag.SNOW_FOREST})

    def _paint(self, ctx: BrushContext) -> None:
        gen = ctx.gen
        for run in flat_runs(ctx, min_length=4):
            x = run.place.x
            if gen.zone.get(x, CH_IGLOO) >= IGLOO_CHANCE:
                continue
            width = n_to_box1(spread(gen.theme.get(x, CH_IGLOO)), Box1(2, 5))
            height = n_to_box1(spread(gen.terrain.get(x, CH_IGLOO), 100), Box1(2, 4))
            span = n_to_fitted_box1(gen.terrain.get(x, CH_IGLOO), width, run.span)
            if span is None:
                continue
            box = Box2(span, Box1(run.place.y + 1, run.place.y + 1 + height))
            if not is_free(ctx, box):
                continue
            door = n_to_range(spread(gen.theme.get(x, CH_IGLOO), 100), width)
            ctx.schema.add(Igloo(box=box, door=door))


# -----------------------------------------------------------------------------
# Caverns
# -----------------------------------------------------------------------------

# Rows kept open between a cavern roof and the ground below it
ROOF_HEADROOM = 3


class CavernRoofBrush(BaseBrush):
    """Hangs a ragged stone ceiling from the top of a cavern zone.

    Ceiling thickness per column comes from noise, clipped to leave
    headroom over whatever solid ground is already in that column.
    Equal-thickness columns are merged into one Bare GroundBlock.
    """

    zones = frozenset({ZoneTag.CAVERNS})

    def _paint(self, ctx: BrushContext) -> None:
        top = ctx.box.y.hi
        thickness = []
        for x in ctx.box.x:
            wanted = n_to_box1(ctx.gen.terrain.get(x, CH_ROOF), Box1(1, 4))
            column = Box2(Box1.from_point(x), ctx.box.y)
            solid = [f.bounds().y.hi for f in ctx.schema.of_kind(column, GroundBlock, HillBlock)]
            room = top - max(solid, default=ctx.floor) - ROOF_HEADROOM
            thickness.append(max(0, min(wanted, room)))

        for run in run_length_encode(thickness, ctx.box.x.lo):
            self.hang(ctx, run, top)

    def hang(self, ctx: BrushContext, run: Run, top: int) -> None:
        if run.height <= 0:
            return
        ctx.schema.add(GroundBlock(
            cover=GroundCover.BARE,
            terrain=ctx.info.terrain,
            box=Box2(run.span, Box1(top - run.height, top)),
        ))


LEDGE_SLOT = 12
LEDGE_CHANCE = 0.6


class LedgeBrush(BaseBrush):
    """Floats one-row ledges of the zone's alternate terrain in open air."""

    zones = frozenset({ZoneTag.CAVERNS} | {tag for tag in ZoneTag if tag.is_sky})

    def _paint(self, ctx: BrushContext) -> None:
        gen = ctx.gen
        lo, hi = ctx.floor + 3, ctx.box.y.hi - 2
        # Short zones have no rows clear of both floor and ceiling
        if hi <= lo:
            return
        rows = Box1(lo, hi)
        for slot in slots(ctx.box.x, LEDGE_SLOT):
            n = gen.zone.get(slot.lo, CH_LEDGE)
            if n >= LEDGE_CHANCE:
                continue
            length = n_to_box1(spread(n), Box1(3, 7))
            span = n_to_fitted_box1(gen.terrain.get(slot.lo, CH_LEDGE), length, slot)
            if span is None:
                continue
            y = n_to_box1(gen.theme.get(slot.lo, CH_LEDGE), rows)
            # Leave a free cell all around so ledges never touch other solids
            if not is_free(ctx, Box2(span, Box1(y, y + 1)).extend(1)):
                continue
            ctx.schema.add(GroundBlock(
                cover=GroundCover.FULLY_COVERED,
                terrain=ctx.info.secondary_terrain,
                box=Box2(span, Box1(y, y + 1)),
            ))


# -----------------------------------------------------------------------------
# Castle
# -----------------------------------------------------------------------------

TOWER_SLOT = 10
TOWER_CHANCE = 0.5


class TowerBrush(BaseBrush):
    """Raises FullyCovered castle pillars on flat ground."""

    zones = frozenset({ZoneTag.CASTLE})

    def _paint(self, ctx: BrushContext) -> None:
        gen = ctx.gen
        for run in flat_runs(ctx, min_length=2):
            ground = run.place.y
            for slot in slots(run.span, TOWER_SLOT):
                n = gen.zone.get(slot.lo, CH_TOWER)
                if n >= TOWER_CHANCE:
                    continue
                width = n_to_box1(spread(n), Box1(2, 4))
                height = n_to_box1(gen.theme.get(slot.lo, CH_TOWER), Box1(2, 5))
                span = n_to_fitted_box1(gen.terrain.get(slot.lo, CH_TOWER), width, slot)
                if span is None:
                    continue
                box = Box2(span, Box1(ground + 1, ground + 1 + height))
                if not is_free(ctx, box):
                    continue
                ctx.schema.add(GroundBlock(
                    cover=GroundCover.FULLY_COVERED,
                    terrain=ctx.info.terrain,
                    box=box,
                ))


# -----------------------------------------------------------------------------
# Bonus crates
# -----------------------------------------------------------------------------

BONUS_CHANCE = 0.3
BONUS_MIN_RUN = 4


class BonusBrush(BaseBrush):
    """Stacks crate rectangles on flat ground runs in every zone."""

    def _paint(self, ctx: BrushContext) -> None:
        gen = ctx.gen
        for run in flat_runs(ctx, min_length=BONUS_MIN_RUN):
            x = run.place.x
            n = gen.zone.get(x, CH_BONUS)
            if n >= BONUS_CHANCE:
                continue
            width = n_to_box1(gen.theme.get(x, CH_BONUS), Box1(1, 4))
            height = n_to_box1(spread(n), Box1(1, 3))
            span = n_to_fitted_box1(gen.terrain.get(x, CH_BONUS_FIT), width, run.span)
            if span is None:
                continue
            box = Box2(span, Box1(run.place.y + 1, run.place.y + 1 + height))
            if not is_free(ctx, box):
                continue
            crate = CrateKind.CROSS if n_to_bool(gen.zone.get(x, CH_BONUS_FIT)) else CrateKind.RANDOM
            ctx.schema.add(CrateRect(crate=crate, box=box))
