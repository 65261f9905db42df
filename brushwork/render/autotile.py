"""
Neighbor-aware autotiling.

Point resolution leaves "this cell is ground of terrain X" markers on the
midground. compute_tiling turns those markers into edge- and corner-correct
terrain tiles by looking at how each neighbor classifies the shared side.

The algorithm is strictly staged so the result never depends on visiting
order:
1. Classify every exact tile (sides and corners) from its shape alone.
   Markers get a provisional all-interior classification.
2. Resolve markers in one batch, reading only the stage-1 table for
   sides, then the stage-1 table plus the new block faces for corners.
3. Compute cap overlays from the final table.

Cells near the edge of a window see the same neighbors they would in any
larger window, so rendering in pieces matches rendering in one go.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, NamedTuple

from brushwork.core.interval import Box2
from brushwork.core.types import LR, LMR, TB, TMB, Place
from brushwork.world.tiles import (
    AIR,
    GroundCover,
    Terrain,
    Tile,
    TileKind,
    block_face,
    cap,
    face_int,
    slope_int,
)

logger = logging.getLogger(__name__)

# Border of context cells compute_tiling needs around a region
TILING_MARGIN = 3


class GroundMarker(NamedTuple):
    """Abstract midground result: covered by terrain under a cover policy."""

    cover: GroundCover
    terrain: Terrain


TilingTile = Tile | GroundMarker


class Side(Enum):
    """Whether a tile edge shows a face (exterior) or continues (interior)."""

    EXTERIOR = "exterior"
    INTERIOR = "interior"


class Corner(Enum):
    """Diagonal detail at one end of a tile edge."""

    NONE = 0
    INNER = 1
    SLOPE = 2

    def merge(self, other: Corner) -> Corner:
        """Combine two contributions; slope beats inner beats none."""
        return self if self.value >= other.value else other


_I = Side.INTERIOR
_E = Side.EXTERIOR
_N = Corner.NONE


class TilingInfo(NamedTuple):
    """Side and corner classification of one cell.

    Corners are named edge-first: `rt` is the top end of the right edge,
    `tr` the right end of the top edge.
    """

    terrain: Terrain
    top: Side = _E
    left: Side = _E
    right: Side = _E
    bottom: Side = _E
    tl: Corner = _N
    tr: Corner = _N
    rt: Corner = _N
    rb: Corner = _N
    br: Corner = _N
    bl: Corner = _N
    lb: Corner = _N
    lt: Corner = _N


class TiledCell(NamedTuple):
    """Final midground tile plus optional cap overlays."""

    tile: Tile
    left_cap: Tile | None = None
    right_cap: Tile | None = None


# Which cover policies show a face on a side with nothing solid beyond it
_OPEN_EXTERIOR: dict[GroundCover, tuple[bool, bool, bool, bool]] = {
    # (top, left, right, bottom)
    GroundCover.FULLY_COVERED: (True, True, True, True),
    GroundCover.TOP_COVERED: (True, False, False, True),
    GroundCover.BARE: (False, True, True, True),
}


# -----------------------------------------------------------------------------
# Stage 1: classification of exact tiles
# -----------------------------------------------------------------------------


def _block_face_info(terrain: Terrain, lmr: LMR, tmb: TMB) -> TilingInfo:
    top = _E if tmb is TMB.T else _I
    left = _E if lmr is LMR.L else _I
    right = _E if lmr is LMR.R else _I
    bottom = _E if tmb is TMB.B else _I

    def inner(cond: bool) -> Corner:
        return Corner.INNER if cond else Corner.NONE

    return TilingInfo(
        terrain,
        top=top,
        left=left,
        right=right,
        bottom=bottom,
        tl=inner(top is _I and lmr is LMR.L),
        tr=inner(top is _I and lmr is LMR.R),
        rt=inner(right is _I and tmb is TMB.T),
        rb=inner(right is _I and tmb is TMB.B),
        br=inner(bottom is _I and lmr is LMR.R),
        bl=inner(bottom is _I and lmr is LMR.L),
        lb=inner(left is _I and tmb is TMB.B),
        lt=inner(left is _I and tmb is TMB.T),
    )


def _face_int_info(terrain: Terrain, lr: LR, tb: TB) -> TilingInfo:
    inner = Corner.INNER
    corners = {
        (LR.L, TB.T): {"bl": inner, "lb": inner},
        (LR.L, TB.B): {"tl": inner, "lt": inner},
        (LR.R, TB.T): {"br": inner, "rb": inner},
        (LR.R, TB.B): {"tr": inner, "rt": inner},
    }[(lr, tb)]
    return TilingInfo(terrain, top=_I, left=_I, right=_I, bottom=_I, **corners)


def tiling_info(tile: TilingTile) -> TilingInfo | None:
    """Stage-1 classification of a midground cell.

    Markers are provisionally interior on every side. Non-terrain tiles
    (air, crates, mushrooms...) have no classification.
    """
    if isinstance(tile, GroundMarker):
        return TilingInfo(tile.terrain, top=_I, left=_I, right=_I, bottom=_I)
    if tile.terrain is None:
        return None

    terrain = tile.terrain
    kind = tile.kind
    if kind is TileKind.BLOCK_FACE:
        return _block_face_info(terrain, tile.h, tile.v)
    if kind is TileKind.SLOPE:
        if tile.h is LR.L:
            return TilingInfo(terrain, bottom=_I, right=_I, rt=Corner.SLOPE, bl=Corner.SLOPE)
        return TilingInfo(terrain, bottom=_I, left=_I, lt=Corner.SLOPE, br=Corner.SLOPE)
    if kind is TileKind.SLOPE_INT:
        if tile.h is LR.L:
            return TilingInfo(terrain, top=_I, left=_I, right=_I, bottom=_I, tl=Corner.SLOPE, lt=Corner.SLOPE)
        return TilingInfo(terrain, top=_I, left=_I, right=_I, bottom=_I, tr=Corner.SLOPE, rt=Corner.SLOPE)
    if kind is TileKind.FACE_INT:
        return _face_int_info(terrain, tile.h, tile.v)
    if kind is TileKind.SINGLE:
        return TilingInfo(terrain, bottom=_I)
    if kind is TileKind.SINGLE_BARE:
        return TilingInfo(terrain, bottom=_I, left=_I, right=_I)
    if kind is TileKind.JAGGED:
        return TilingInfo(terrain, top=_I, left=_I, right=_I)
    return TilingInfo(terrain)


# -----------------------------------------------------------------------------
# Stage 2: marker resolution
# -----------------------------------------------------------------------------


def _is_exterior(neighbor: TilingInfo | None, facing: Side | None, terrain: Terrain, open_exterior: bool) -> bool:
    """Decide one side of a marker.

    A neighbor that continues across the boundary (interior on its facing
    side) merges only if it is the same terrain. Otherwise the side is
    open and the cover policy decides.
    """
    if neighbor is not None and facing is _I:
        return neighbor.terrain != terrain
    return open_exterior


def _resolve_sides(marker: GroundMarker, place: Place, table: Mapping[Place, TilingInfo | None]) -> Tile:
    terrain = marker.terrain
    open_top, open_left, open_right, open_bottom = _OPEN_EXTERIOR[marker.cover]

    left = table.get(place.left)
    right = table.get(place.right)
    top = table.get(place.above)
    bottom = table.get(place.below)

    left_ext = _is_exterior(left, left.right if left else None, terrain, open_left)
    right_ext = _is_exterior(right, right.left if right else None, terrain, open_right)
    top_ext = _is_exterior(top, top.bottom if top else None, terrain, open_top)
    bottom_ext = _is_exterior(bottom, bottom.top if bottom else None, terrain, open_bottom)

    lmr = LMR.L if left_ext else LMR.R if right_ext else LMR.M
    tmb = TMB.T if top_ext else TMB.B if bottom_ext else TMB.M
    return block_face(terrain, lmr, tmb)


def _corner(info: TilingInfo | None, terrain: Terrain, name: str) -> Corner:
    if info is None or info.terrain != terrain:
        return Corner.NONE
    return getattr(info, name)


def _resolve_corners(terrain: Terrain, place: Place, table: Mapping[Place, TilingInfo | None]) -> Tile:
    """Pick the tile for a marker that is interior on all four sides."""
    left = table.get(place.left)
    right = table.get(place.right)
    top = table.get(place.above)
    bottom = table.get(place.below)

    tl = _corner(left, terrain, "rt").merge(_corner(top, terrain, "bl"))
    tr = _corner(right, terrain, "lt").merge(_corner(top, terrain, "br"))
    bl = _corner(left, terrain, "rb").merge(_corner(bottom, terrain, "tl"))
    br = _corner(right, terrain, "lb").merge(_corner(bottom, terrain, "tr"))

    if tl is Corner.SLOPE:
        return slope_int(terrain, LR.L)
    if tr is Corner.SLOPE:
        return slope_int(terrain, LR.R)
    if tl is Corner.INNER:
        return face_int(terrain, LR.L, TB.T)
    if tr is Corner.INNER:
        return face_int(terrain, LR.R, TB.T)
    if bl is Corner.INNER:
        return face_int(terrain, LR.L, TB.B)
    if br is Corner.INNER:
        return face_int(terrain, LR.R, TB.B)
    return block_face(terrain, LMR.M, TMB.M)


# -----------------------------------------------------------------------------
# Stage 3: caps
# -----------------------------------------------------------------------------


def _caps(place: Place, table: Mapping[Place, TilingInfo | None]) -> tuple[Tile | None, Tile | None]:
    this = table.get(place)
    left = table.get(place.left)
    right = table.get(place.right)

    right_cap = None
    if left is not None and left.rt is not Corner.NONE and not (this is not None and this.lt is not Corner.NONE):
        right_cap = cap(left.terrain, LR.R)

    left_cap = None
    if right is not None and right.lt is not Corner.NONE and not (this is not None and this.rt is not Corner.NONE):
        left_cap = cap(right.terrain, LR.L)

    return left_cap, right_cap


def compute_tiling(cells: Mapping[Place, TilingTile], region: Box2) -> dict[Place, TiledCell]:
    """Resolve midground markers in region into concrete terrain tiles.

    A cell's caps read its neighbors' resolved corners, which read their
    neighbors' faces, which read stage-1 info one cell further out. So
    faces are resolved two cells beyond region, corners one cell beyond,
    and the result only depends on cells within TILING_MARGIN of region.

    Args:
        cells: Midground result for region and a TILING_MARGIN border
            around it. Places missing from the mapping count as empty.
        region: Cells to resolve; border cells only supply context

    Returns:
        Final tile and caps for every place in region
    """
    stage1: dict[Place, TilingInfo | None] = {p: tiling_info(t) for p, t in cells.items()}

    markers: dict[Place, GroundMarker] = {}
    for p in region.extend(2).points():
        cell = cells.get(p)
        if isinstance(cell, GroundMarker):
            markers[p] = cell

    # Sides from the stage-1 table only
    faces = {p: _resolve_sides(m, p, stage1) for p, m in markers.items()}

    combined = dict(stage1)
    combined.update({p: tiling_info(t) for p, t in faces.items()})

    resolved: dict[Place, Tile] = {}
    for p in region.extend(1).points():
        face = faces.get(p)
        if face is None:
            continue
        if face.h is LMR.M and face.v is TMB.M:
            resolved[p] = _resolve_corners(face.terrain, p, combined)
        else:
            resolved[p] = face

    final = dict(stage1)
    final.update({p: tiling_info(t) for p, t in resolved.items()})

    result: dict[Place, TiledCell] = {}
    for p in region.points():
        tile = resolved.get(p)
        if tile is None:
            given = cells.get(p)
            tile = given if isinstance(given, Tile) else AIR
        left_cap, right_cap = _caps(p, final)
        result[p] = TiledCell(tile, left_cap, right_cap)

    logger.debug(f"Tiling complete | cells={len(result)} | markers={len(markers)}")
    return result
