"""
Tile resolution: features in, layered tile grid out.

get_tile() asks every feature covering a cell what it contributes and keeps
the most specific answer per layer. Ground regions answer with a
GroundMarker instead of a tile; render_level() then hands the midground to
compute_tiling() to turn markers into edge-correct terrain tiles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, NamedTuple

import numpy as np

from brushwork.core.interval import (
    Box2,
    lmr_of,
    n_to_bool,
    n_to_enum,
    n_to_range,
    tmb_of,
)
from brushwork.core.types import LMR, TB, TMB, Place
from brushwork.generation.generator import Generator
from brushwork.generation.noise import spread
from brushwork.world.feature import (
    BaseFeature,
    BigMushroomStem,
    BigMushroomTop,
    CrateKind,
    CrateRect,
    GroundBlock,
    HillBlock,
    Igloo,
    SurfaceLava,
    SurfaceWater,
    TileFeature,
)
from brushwork.world.schema import Schema
from brushwork.world.tiles import (
    AIR,
    AIR_INDEX,
    GroundCover,
    MushroomStyle,
    Tile,
    TileKind,
    atlas_index,
    rock_slope,
    slope,
)
from .autotile import TILING_MARGIN, GroundMarker, TilingTile, compute_tiling

logger = logging.getLogger(__name__)


class Layer(Enum):
    """Output layers, back to front."""

    BACKGROUND = 0
    MIDGROUND = 1
    FOREGROUND = 2
    LEFT_CAP = 3
    RIGHT_CAP = 4


class LayeredTile(NamedTuple):
    """Point-resolution result for one cell."""

    background: TilingTile = AIR
    midground: TilingTile = AIR
    foreground: TilingTile = AIR


class TileStack(NamedTuple):
    """Final tiles of one cell, one per output layer."""

    background: Tile = AIR
    midground: Tile = AIR
    foreground: Tile = AIR
    left_cap: Tile = AIR
    right_cap: Tile = AIR


_CRATES = (Tile(TileKind.CRATE_BLANK), Tile(TileKind.CRATE_SLASH), Tile(TileKind.CRATE_CROSS))
_STEM_BODIES = (
    Tile(TileKind.MUSHROOM_STEM),
    Tile(TileKind.MUSHROOM_STEM_LEAF),
    Tile(TileKind.MUSHROOM_STEM_RING),
    Tile(TileKind.MUSHROOM_STEM_RING, alt=True),
)


# -----------------------------------------------------------------------------
# Stage A: point resolution
# -----------------------------------------------------------------------------


def _specificity(result: TilingTile) -> int:
    """Exact tiles beat ground markers, which beat air."""
    if isinstance(result, GroundMarker):
        return 1
    return 0 if result.kind is TileKind.AIR else 2


def resolve_feature(
    feature: BaseFeature,
    place: Place,
    gen: Generator,
    alt_n: float,
) -> tuple[Layer, TilingTile] | None:
    """What one feature contributes at place.

    Args:
        feature: A feature whose bounds contain place
        place: The cell being resolved
        gen: Noise source for palette choices
        alt_n: Theme noise at place, used for per-cell art variation

    Returns:
        (layer, tile or marker), or None if the feature draws nothing here
    """
    if isinstance(feature, GroundBlock):
        return Layer.MIDGROUND, GroundMarker(feature.cover, feature.terrain)

    if isinstance(feature, HillBlock):
        return _resolve_hill(feature, place)

    if isinstance(feature, Igloo):
        box = feature.box
        tmb = tmb_of(box.y, place.y)
        if tmb is TMB.B and place.x == box.x.lo + feature.door:
            return Layer.BACKGROUND, Tile(TileKind.IGLOO_DOOR)
        if tmb is TMB.T:
            return Layer.BACKGROUND, Tile(TileKind.IGLOO_TOP, h=lmr_of(box.x, place.x))
        return Layer.BACKGROUND, Tile(TileKind.IGLOO_INTERIOR, alt=n_to_bool(alt_n))

    if isinstance(feature, TileFeature):
        return Layer.FOREGROUND, feature.tile

    if isinstance(feature, CrateRect):
        if feature.crate is CrateKind.CROSS:
            return Layer.MIDGROUND, Tile(TileKind.CRATE_CROSS)
        return Layer.MIDGROUND, _CRATES[n_to_range(alt_n, len(_CRATES))]

    if isinstance(feature, (SurfaceWater, SurfaceLava)):
        water = isinstance(feature, SurfaceWater)
        if place.y == feature.box.y.hi - 1:
            kind = TileKind.WATER_WAVE if water else TileKind.LAVA_WAVE
        else:
            kind = TileKind.WATER if water else TileKind.LAVA
        return Layer.BACKGROUND, Tile(kind)

    if isinstance(feature, BigMushroomTop):
        return Layer.MIDGROUND, _resolve_cap(feature, place, gen)

    if isinstance(feature, BigMushroomStem):
        alt = n_to_bool(alt_n)
        if place.y == feature.base.y + feature.height - 1:
            return Layer.BACKGROUND, Tile(TileKind.MUSHROOM_STEM_TOP, alt=alt)
        if place.y == feature.base.y:
            return Layer.BACKGROUND, Tile(TileKind.MUSHROOM_STEM_BASE, alt=alt)
        return Layer.BACKGROUND, _STEM_BODIES[n_to_range(alt_n, len(_STEM_BODIES))]

    # Zone, FlatGround, SlopedGround and Offscreen only mark space
    return None


def _resolve_hill(hill: HillBlock, place: Place) -> tuple[Layer, TilingTile] | None:
    top = hill.top_at(place.x)
    if place.y == top:
        return Layer.MIDGROUND, slope(hill.terrain, hill.lr)
    if place.y > top:
        return None
    fill = GroundMarker(GroundCover.TOP_COVERED, hill.terrain)
    if hill.bridge_thickness is None:
        return Layer.MIDGROUND, fill

    bottom = top - hill.bridge_thickness
    if place.y > bottom:
        return Layer.MIDGROUND, fill
    if place.y == bottom:
        return Layer.MIDGROUND, rock_slope(hill.terrain, hill.lr.flip(), TB.B)
    return None


def _resolve_cap(top: BigMushroomTop, place: Place, gen: Generator) -> Tile:
    # Palette is chosen once per mushroom so the whole cap matches
    n = gen.theme.get(top.center.x, top.center.y)
    style = n_to_enum(n, MushroomStyle)
    alt = n_to_bool(spread(n))
    if place.x == top.center.x:
        return Tile(TileKind.MUSHROOM_STEM_BLOCK, alt=alt, style=style)
    if place.x == top.center.x - top.width:
        lmr = LMR.L
    elif place.x == top.center.x + top.width:
        lmr = LMR.R
    else:
        lmr = LMR.M
    return Tile(TileKind.MUSHROOM_BLOCK, h=lmr, alt=alt, style=style)


def get_tile(schema: Schema, gen: Generator, place: Place) -> LayeredTile:
    """Resolve every feature at place into background/midground/foreground.

    Per layer the most specific result wins; between equally specific
    results the later-inserted feature wins.
    """
    alt_n = gen.theme.get(place.x, place.y)
    layers: dict[Layer, TilingTile] = {}
    for feature in schema.at_point(place):
        resolved = resolve_feature(feature, place, gen, alt_n)
        if resolved is None:
            continue
        layer, result = resolved
        current = layers.get(layer)
        if current is None or _specificity(result) >= _specificity(current):
            layers[layer] = result
    return LayeredTile(
        background=layers.get(Layer.BACKGROUND, AIR),
        midground=layers.get(Layer.MIDGROUND, AIR),
        foreground=layers.get(Layer.FOREGROUND, AIR),
    )


# -----------------------------------------------------------------------------
# Output grid
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TileGrid:
    """Five-layer tile grid covering a region.

    Attributes:
        region: The cells covered
        cells: TileStack for every place in region
    """

    region: Box2
    cells: Mapping[Place, TileStack]

    def at(self, place: Place) -> TileStack:
        return self.cells[place]

    def layer(self, layer: Layer) -> dict[Place, Tile]:
        """One layer as a place -> tile mapping."""
        return {p: stack[layer.value] for p, stack in self.cells.items()}

    def atlas_array(self) -> np.ndarray:
        """Atlas coordinates as an int16 array of shape (width, height, 5, 2).

        Index [i, j] is the cell (region.x.lo + i, region.y.lo + j). Air
        cells hold AIR_INDEX.
        """
        out = np.empty((self.region.x.size, self.region.y.size, len(Layer), 2), dtype=np.int16)
        for p, stack in self.cells.items():
            i = p.x - self.region.x.lo
            j = p.y - self.region.y.lo
            for k, tile in enumerate(stack):
                out[i, j, k] = AIR_INDEX if tile.kind is TileKind.AIR else atlas_index(tile)
        return out

    def __iter__(self) -> Iterator[tuple[Place, TileStack]]:
        return iter(self.cells.items())


def _exact(result: TilingTile) -> Tile:
    return AIR if isinstance(result, GroundMarker) else result


def render_level(schema: Schema, gen: Generator, region: Box2) -> TileGrid:
    """Resolve a region of a generated level into a TileGrid.

    Args:
        schema: Populated feature index (read only)
        gen: The generator that built the schema
        region: Cells to render

    Returns:
        TileGrid with every layer resolved
    """
    extended = region.extend(TILING_MARGIN)
    resolved = {p: get_tile(schema, gen, p) for p in extended.points()}
    tiled = compute_tiling({p: layered.midground for p, layered in resolved.items()}, region)

    cells: dict[Place, TileStack] = {}
    for p in region.points():
        layered = resolved[p]
        main = tiled[p]
        cells[p] = TileStack(
            background=_exact(layered.background),
            midground=main.tile,
            foreground=_exact(layered.foreground),
            left_cap=main.left_cap or AIR,
            right_cap=main.right_cap or AIR,
        )

    logger.debug(
        f"Rendered region | x={region.x.lo}..{region.x.hi} | "
        f"y={region.y.lo}..{region.y.hi} | cells={len(cells)}"
    )
    return TileGrid(region=region, cells=cells)
