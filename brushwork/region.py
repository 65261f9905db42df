"""
Region generation entry point.

generate_region() is what a scheduler calls for each visible region: it
builds the level from the seed, resolves the requested cells into tiles
and returns both the tile grid (for rendering) and the features touching
the region (for physics). Nothing is cached; the same (seed, region)
always reproduces the same output.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from brushwork.core.interval import Box2
from brushwork.generation.generator import Generator
from brushwork.generation.level import generate_level
from brushwork.logging_config import log_region
from brushwork.render.resolver import TileGrid, render_level
from brushwork.settings import LevelConfig
from brushwork.world.feature import BaseFeature
from brushwork.world.schema import Schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedRegion:
    """Result of one generation request.

    Attributes:
        seed: Session seed
        region: Requested cells
        schema: Feature index of the whole level (frozen)
        tiles: Five-layer tile grid over region
        features: Features intersecting region, in insertion order
    """

    seed: int
    region: Box2
    schema: Schema
    tiles: TileGrid
    features: tuple[BaseFeature, ...]


def generate_region(
    seed: int,
    region: Box2,
    config: LevelConfig | None = None,
    gen: Generator | None = None,
) -> GeneratedRegion:
    """Generate the level for a seed and resolve one region of it.

    Args:
        seed: Unsigned session seed
        region: Cells to resolve
        config: Level settings (defaults if None); ignored when gen is given
        gen: Prebuilt generator, e.g. with custom noise fields; must have
            been built for seed

    Returns:
        GeneratedRegion with the tile grid and intersecting features
    """
    start = time.perf_counter()
    if gen is None:
        gen = Generator.from_seed(seed, config)
    assert gen.seed == seed, f"generator built for seed {gen.seed}, not {seed}"

    schema = generate_level(gen)
    tiles = render_level(schema, gen, region)
    features = tuple(schema.intersecting(region))

    log_region(
        logger,
        seed,
        (region.x.lo, region.x.hi),
        (region.y.lo, region.y.hi),
        f"features={len(features)}",
        (time.perf_counter() - start) * 1000,
    )
    return GeneratedRegion(
        seed=seed,
        region=region,
        schema=schema,
        tiles=tiles,
        features=features,
    )
