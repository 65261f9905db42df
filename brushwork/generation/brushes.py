"""
Core terrain brushes: the height-map floor, liquids and big mushrooms.

Every decision is a total function of a noise sample and the schema built
so far. Noise channels are separated by sampling the same x at different
y offsets; the channel constants below name them.
"""

from __future__ import annotations

import heapq
import logging
import math
from typing import NamedTuple, Sequence

from brushwork.core.interval import Box1, Box2, n_to_box1, n_to_fitted_box1, open_ranges
from brushwork.core.types import LR, Place
from brushwork.world.feature import (
    BaseFeature,
    BigMushroomStem,
    BigMushroomTop,
    FlatGround,
    GroundBlock,
    HillBlock,
    SlopedGround,
    SurfaceLava,
    SurfaceWater,
    ZoneTag,
)
from brushwork.world.tiles import GroundCover
from .pipeline import BaseBrush, BrushContext

logger = logging.getLogger(__name__)

# Noise channels (y coordinate of the sample)
CH_HEIGHT = 0.0  # terrain: column height; zone: gap draw
CH_HILL = 1.0  # zone: hill draw
CH_BRIDGE = 2.0  # zone: bridge thickness; terrain: mushroom half-width
CH_MUSHROOM_CAP = 3.0  # terrain: cap placement
CH_SLOPE = 5.0  # terrain: slope placement

# Thinnest bridge worth drawing; anything thinner is filled solid
MIN_BRIDGE_THICKNESS = 2

# Open ranges narrower than this get no more mushrooms
MIN_MUSHROOM_RANGE = 11


class Run(NamedTuple):
    """A maximal stretch of columns with equal ground height."""

    length: int
    x: int
    height: int

    @property
    def span(self) -> Box1:
        return Box1(self.x, self.x + self.length)


def run_length_encode(heights: Sequence[int], x_start: int) -> list[Run]:
    """Collapse per-column heights into maximal runs.

    Args:
        heights: Height of each column, left to right
        x_start: x of the first column

    Returns:
        Runs left to right; adjacent runs always differ in height
    """
    runs: list[Run] = []
    for i, h in enumerate(heights):
        if runs and runs[-1].height == h:
            runs[-1] = runs[-1]._replace(length=runs[-1].length + 1)
        else:
            runs.append(Run(1, x_start + i, h))
    return runs


def run_length_decode(runs: Sequence[Run]) -> list[int]:
    """Expand runs back into per-column heights."""
    return [run.height for run in runs for _ in range(run.length)]


def sample_heights(ctx: BrushContext) -> list[int]:
    """Target ground height of every column in the zone.

    A column whose gap draw succeeds drops to the zone floor.
    """
    gen = ctx.gen
    gap_chance = ctx.info.gap_chance
    heights = []
    for x in ctx.box.x:
        if gen.zone.get(x, CH_HEIGHT) < gap_chance:
            heights.append(ctx.floor)
        else:
            heights.append(n_to_box1(gen.terrain.get(x, CH_HEIGHT), ctx.box.y))
    return heights


def bridge_thickness(n: float, max_thickness: int) -> int | None:
    """Depth of the hollow bridge under a hill, or None for solid fill."""
    thickness = min(int(math.floor(max(0.0, n * 30 - 22))), max_thickness)
    if thickness < MIN_BRIDGE_THICKNESS:
        return None
    return thickness


class HeightMapFloorBrush(BaseBrush):
    """Lays the ground of a zone from the terrain height field.

    Heights are run-length encoded; each step between runs becomes either
    a plain ledge or, when the hill draw succeeds, a diagonal HillBlock
    fitted inside the left run.
    """

    def _paint(self, ctx: BrushContext) -> None:
        runs = run_length_encode(sample_heights(ctx), ctx.box.x.lo)
        for left, right in zip(runs, runs[1:]):
            self.paint_step(ctx, left, right)
        if runs:
            last = runs[-1]
            self.fill(ctx, last.span, last.height)

    def paint_step(self, ctx: BrushContext, left: Run, right: Run) -> None:
        """Join two adjacent runs of different height."""
        gen = ctx.gen
        x1, h1 = left.x, left.height
        x2, h2 = right.x, right.height

        is_hill = gen.zone.get(x1, CH_HILL) < ctx.info.hill_chance
        slope_span = n_to_fitted_box1(gen.terrain.get(x1, CH_SLOPE), abs(h2 - h1), Box1(x1, x2))

        if is_hill and h1 > ctx.floor and slope_span is not None:
            self.paint_hill(ctx, left, right, slope_span)
        else:
            self.fill(ctx, left.span, h1)

    def paint_hill(self, ctx: BrushContext, left: Run, right: Run, slope_span: Box1) -> None:
        """Emit a HillBlock over slope_span plus flat ground either side of it."""
        h1, h2 = left.height, right.height
        thickness = bridge_thickness(
            ctx.gen.zone.get(left.x, CH_BRIDGE),
            min(h1, h2) - ctx.floor,
        )
        if h1 < h2:
            lr, height = LR.L, Box1(h1, h2)
        else:
            lr, height = LR.R, Box1(h2, h1)

        ctx.schema.add(HillBlock(
            terrain=ctx.info.terrain,
            start_x=slope_span.lo,
            height=height,
            bridge_thickness=thickness,
            lr=lr,
            base=ctx.floor,
        ))
        self.fill(ctx, Box1(left.x, slope_span.lo), h1)
        self.fill(ctx, Box1(slope_span.hi, right.x), h2)

    def fill(self, ctx: BrushContext, span: Box1, height: int) -> None:
        """Flat TopCovered ground from the floor up to height."""
        if span.is_empty or height <= ctx.floor:
            return
        ctx.schema.add(GroundBlock(
            cover=GroundCover.TOP_COVERED,
            terrain=ctx.info.terrain,
            box=Box2(span, Box1(ctx.floor, height)),
        ))


def lowest_ground(ctx: BrushContext) -> int | None:
    """Lowest walkable row among the ground features in the zone."""
    rows = []
    for feature in ctx.schema.of_kind(ctx.box, FlatGround, SlopedGround):
        if isinstance(feature, FlatGround):
            rows.append(feature.place.y)
        else:
            rows.append(feature.low_y)
    return min(rows, default=None)


class LiquidBrush(BaseBrush):
    """Floods a zone from the floor to just above its lowest ground."""

    surface: type[SurfaceWater] | type[SurfaceLava] = SurfaceWater

    def _paint(self, ctx: BrushContext) -> None:
        ground = lowest_ground(ctx)
        if ground is None:
            ground = ctx.floor - 1
        # Surface row sits one or two rows above the lowest ground
        surface = n_to_box1(ctx.gen.terrain.get(ctx.box.x.lo, CH_HEIGHT), Box1(ground + 1, ground + 3))
        top = min(surface + 1, ctx.box.y.hi)
        if top <= ctx.floor or ctx.box.x.is_empty:
            return
        ctx.schema.add(self.surface(box=Box2(ctx.box.x, Box1(ctx.floor, top))))


class WaterBrush(LiquidBrush):
    surface = SurfaceWater
    zones = frozenset(tag for tag in ZoneTag if tag.is_lake)


class LavaBrush(LiquidBrush):
    surface = SurfaceLava
    zones = frozenset(tag for tag in ZoneTag if tag.is_lava)


def ground_spans(ctx: BrushContext) -> list[Box1]:
    """x-ranges already covered by walkable ground in the zone."""
    spans = []
    for feature in ctx.schema.of_kind(ctx.box, FlatGround, SlopedGround):
        if isinstance(feature, FlatGround):
            spans.append(feature.span)
        else:
            spans.append(Box1(feature.start.x, feature.start.x + abs(feature.height)))
    return spans


class BigMushroomBrush(BaseBrush):
    """Grows giant mushrooms in the gaps between ground.

    Open ranges are kept in a max-heap by width. The widest is split by a
    cap placed inside it and the two leftovers go back on the heap, so
    the total open length strictly shrinks and the loop terminates.
    """

    zones = frozenset({ZoneTag.MUSHROOM})

    def _paint(self, ctx: BrushContext) -> None:
        heap = [(-r.size, r.lo, r.hi) for r in open_ranges(ctx.box.x, ground_spans(ctx))]
        heapq.heapify(heap)

        while heap:
            _, lo, hi = heapq.heappop(heap)
            span = Box1(lo, hi)
            if span.size < MIN_MUSHROOM_RANGE:
                break
            for rest in self.grow(ctx, span):
                heapq.heappush(heap, (-rest.size, rest.lo, rest.hi))

    def grow(self, ctx: BrushContext, span: Box1) -> list[Box1]:
        """Place one mushroom inside span.

        Returns:
            The non-empty leftover ranges left and right of the cap
        """
        terrain = ctx.gen.terrain
        half_width = n_to_box1(terrain.get(span.lo, CH_BRIDGE), Box1(1, span.size // 2))
        cap = n_to_fitted_box1(terrain.get(span.lo, CH_MUSHROOM_CAP), 2 * half_width + 1, span)
        if cap is None:
            return []

        top_y = n_to_box1(terrain.get(span.lo, CH_HEIGHT), ctx.box.y)
        center_x = cap.lo + half_width
        features: list[BaseFeature] = [
            BigMushroomTop(center=Place(center_x, top_y), width=half_width),
            BigMushroomStem(base=Place(center_x, ctx.floor), height=top_y - ctx.floor),
        ]
        for feature in features:
            ctx.schema.add(feature)

        leftovers = [Box1(span.lo, cap.lo), Box1(cap.hi, span.hi)]
        return [rest for rest in leftovers if not rest.is_empty]
