"""
Level generation: zone partition followed by the brush pipeline.

The level spans [-W, W) horizontally and [-H, H + 1) vertically. It is
split into zones left to right; each zone is then painted by every brush
that applies to it.
"""

from __future__ import annotations

import logging

from brushwork.core.interval import Box1, Box2, n_to_box1, n_to_enum
from brushwork.world.feature import Offscreen, Zone, ZoneTag
from brushwork.world.schema import Schema
from .brushes import BigMushroomBrush, HeightMapFloorBrush, LavaBrush, WaterBrush
from .decorations import (
    BonusBrush,
    CavernRoofBrush,
    IglooBrush,
    LedgeBrush,
    ScatterBrush,
    TowerBrush,
    TreeBrush,
)
from .generator import Generator
from .noise import spread
from .pipeline import BrushContext, BrushPipeline

logger = logging.getLogger(__name__)

CH_ZONE_TAG = 0.0
CH_ZONE_WIDTH = 2.0

# Depth of the kill strip under the level floor
OFFSCREEN_DEPTH = 4


def partition_zones(gen: Generator) -> list[Zone]:
    """Split [-W, W) into consecutive zones.

    Zone tag and width are drawn from the zone field at the zone's left
    edge. The last zone is clipped at W so the zones tile the level
    exactly.
    """
    config = gen.config
    half_width = config.half_width
    rows = Box1(-config.half_height, config.half_height + 1)
    widths = Box1(config.min_zone_width, config.max_zone_width)

    zones = []
    x = -half_width
    while x < half_width:
        tag = n_to_enum(spread(gen.zone.get(x, CH_ZONE_TAG)), ZoneTag)
        width = n_to_box1(spread(gen.zone.get(x, CH_ZONE_WIDTH)), widths)
        hi = min(x + width, half_width)
        zones.append(Zone(zone=tag, box=Box2(Box1(x, hi), rows)))
        x = hi
    return zones


def default_pipeline() -> BrushPipeline:
    """The standard brush order: ground, liquids, structures, decorations, bonus."""
    return BrushPipeline([
        HeightMapFloorBrush(),
        WaterBrush(),
        LavaBrush(),
        BigMushroomBrush(),
        CavernRoofBrush(),
        LedgeBrush(),
        IglooBrush(),
        TreeBrush(),
        TowerBrush(),
        ScatterBrush(),
        BonusBrush(),
    ])


def generate_level(gen: Generator, pipeline: BrushPipeline | None = None) -> Schema:
    """Generate the whole level for a generator.

    Args:
        gen: Seeded generator
        pipeline: Brushes to run per zone (default_pipeline() if None)

    Returns:
        The frozen feature schema

    Raises:
        BrushError: If a brush fails
    """
    pipeline = pipeline or default_pipeline()
    config = gen.config
    schema = Schema(chunk_size=config.chunk_size)

    zones = partition_zones(gen)
    for zone in zones:
        schema.add(zone)
        pipeline.paint(BrushContext(gen=gen, schema=schema, zone=zone.zone, box=zone.box))

    floor = -config.half_height
    schema.add(Offscreen(box=Box2(
        Box1(-config.half_width, config.half_width),
        Box1(floor - OFFSCREEN_DEPTH, floor),
    )))
    schema.freeze()

    metrics = pipeline.get_metrics()
    logger.info(
        f"Level generated | seed={gen.seed} | zones={len(zones)} | "
        f"features={len(schema)} | duration={metrics.total_duration_ms:.1f}ms"
    )
    return schema
