"""Tests for neighbor-aware autotiling."""

from brushwork.core.interval import Box2
from brushwork.core.types import LMR, LR, TB, TMB, Place
from brushwork.generation.generator import Generator
from brushwork.generation.level import generate_level
from brushwork.render.autotile import (
    TILING_MARGIN,
    Corner,
    GroundMarker,
    Side,
    TiledCell,
    compute_tiling,
    tiling_info,
)
from brushwork.render.resolver import get_tile
from brushwork.world.tiles import (
    AIR,
    GroundCover,
    Terrain,
    Tile,
    TileKind,
    block_face,
    cap,
    face_int,
    simple,
    slope,
    slope_int,
)

GRASS = GroundMarker(GroundCover.TOP_COVERED, Terrain.GRASS)
STONE = GroundMarker(GroundCover.TOP_COVERED, Terrain.STONE)


def block(x0: int, y0: int, x1: int, y1: int, marker: GroundMarker) -> dict[Place, GroundMarker]:
    return {p: marker for p in Box2.from_corners(x0, y0, x1, y1).points()}


class TestTilingInfo:
    """Stage-1 classification of single tiles."""

    def test_marker_is_provisionally_interior(self):
        info = tiling_info(GRASS)
        assert (info.top, info.left, info.right, info.bottom) == (Side.INTERIOR,) * 4
        assert info.terrain is Terrain.GRASS

    def test_non_terrain_tiles_have_no_info(self):
        assert tiling_info(AIR) is None
        assert tiling_info(simple(TileKind.CRATE_CROSS)) is None

    def test_block_face(self):
        info = tiling_info(block_face(Terrain.GRASS, LMR.L, TMB.T))
        assert info.top is Side.EXTERIOR
        assert info.left is Side.EXTERIOR
        assert info.right is Side.INTERIOR
        assert info.bottom is Side.INTERIOR
        assert info.rt is Corner.INNER
        assert info.bl is Corner.INNER
        assert info.tl is Corner.NONE

    def test_slope(self):
        info = tiling_info(slope(Terrain.SAND, LR.L))
        assert info.bottom is Side.INTERIOR
        assert info.right is Side.INTERIOR
        assert info.top is Side.EXTERIOR
        assert info.left is Side.EXTERIOR
        assert info.rt is Corner.SLOPE
        assert info.bl is Corner.SLOPE

    def test_face_int(self):
        info = tiling_info(face_int(Terrain.SAND, LR.R, TB.B))
        assert info.tr is Corner.INNER
        assert info.rt is Corner.INNER
        assert info.bl is Corner.NONE


class TestCornerMerge:
    """Corner contributions merge by precedence."""

    def test_precedence(self):
        assert Corner.NONE.merge(Corner.INNER) is Corner.INNER
        assert Corner.SLOPE.merge(Corner.INNER) is Corner.SLOPE
        assert Corner.INNER.merge(Corner.SLOPE) is Corner.SLOPE
        assert Corner.NONE.merge(Corner.NONE) is Corner.NONE


class TestBlockFaces:
    """Marker resolution for simple blocks."""

    def test_top_covered_block(self):
        cells = block(0, 0, 3, 2, GRASS)
        tiled = compute_tiling(cells, Box2.from_corners(-1, -1, 4, 3))

        assert tiled[Place(0, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)
        assert tiled[Place(2, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)
        assert tiled[Place(1, 0)].tile == block_face(Terrain.GRASS, LMR.M, TMB.B)
        assert tiled[Place(1, 2)] == TiledCell(AIR)

    def test_top_covered_block_gets_caps(self):
        cells = block(0, 0, 3, 2, GRASS)
        tiled = compute_tiling(cells, Box2.from_corners(-1, -1, 4, 3))

        assert tiled[Place(-1, 1)] == TiledCell(AIR, left_cap=cap(Terrain.GRASS, LR.L))
        assert tiled[Place(3, 1)] == TiledCell(AIR, right_cap=cap(Terrain.GRASS, LR.R))
        assert tiled[Place(1, 1)].left_cap is None
        assert tiled[Place(1, 1)].right_cap is None
        assert tiled[Place(-1, 0)] == TiledCell(AIR)

    def test_fully_covered_block(self):
        marker = GroundMarker(GroundCover.FULLY_COVERED, Terrain.CASTLE)
        tiled = compute_tiling(block(0, 0, 3, 3, marker), Box2.from_corners(0, 0, 3, 3))

        assert tiled[Place(0, 2)].tile == block_face(Terrain.CASTLE, LMR.L, TMB.T)
        assert tiled[Place(1, 1)].tile == block_face(Terrain.CASTLE, LMR.M, TMB.M)
        assert tiled[Place(2, 0)].tile == block_face(Terrain.CASTLE, LMR.R, TMB.B)
        assert tiled[Place(2, 1)].tile == block_face(Terrain.CASTLE, LMR.R, TMB.M)

    def test_bare_block_has_no_top_face(self):
        marker = GroundMarker(GroundCover.BARE, Terrain.STONE)
        tiled = compute_tiling(block(0, 0, 3, 2, marker), Box2.from_corners(0, 0, 3, 2))

        assert tiled[Place(1, 1)].tile == block_face(Terrain.STONE, LMR.M, TMB.M)
        assert tiled[Place(0, 1)].tile == block_face(Terrain.STONE, LMR.L, TMB.M)
        assert tiled[Place(1, 0)].tile == block_face(Terrain.STONE, LMR.M, TMB.B)


class TestTerrainBoundaries:
    """Different terrains never merge across a shared side."""

    def test_side_by_side(self):
        cells = {**block(0, 0, 2, 2, GRASS), **block(2, 0, 4, 2, STONE)}
        tiled = compute_tiling(cells, Box2.from_corners(0, 0, 4, 2))

        assert tiled[Place(1, 1)].tile == block_face(Terrain.GRASS, LMR.R, TMB.T)
        assert tiled[Place(2, 1)].tile == block_face(Terrain.STONE, LMR.L, TMB.T)
        assert tiled[Place(1, 0)].tile == block_face(Terrain.GRASS, LMR.R, TMB.B)
        assert tiled[Place(2, 0)].tile == block_face(Terrain.STONE, LMR.L, TMB.B)
        assert tiled[Place(0, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)

    def test_stacked(self):
        cells = {**block(0, 0, 3, 2, GRASS), **block(0, 2, 3, 4, STONE)}
        tiled = compute_tiling(cells, Box2.from_corners(0, 0, 3, 4))

        assert tiled[Place(1, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)
        assert tiled[Place(1, 2)].tile == block_face(Terrain.STONE, LMR.M, TMB.B)
        assert tiled[Place(1, 3)].tile == block_face(Terrain.STONE, LMR.M, TMB.T)

    def test_slope_of_other_terrain_does_not_join(self):
        cells = {
            Place(0, 0): GRASS,
            Place(2, 0): GRASS,
            Place(1, -1): GRASS,
            Place(1, 0): GRASS,
            Place(1, 1): slope(Terrain.STONE, LR.L),
        }
        tiled = compute_tiling(cells, Box2.from_corners(1, 0, 2, 1))
        assert tiled[Place(1, 0)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)


class TestInteriorCorners:
    """Interior markers pick up diagonal detail from their neighbors."""

    def test_slope_interior(self):
        cells = {
            Place(0, 0): GRASS,
            Place(2, 0): GRASS,
            Place(1, -1): GRASS,
            Place(1, 0): GRASS,
            Place(1, 1): slope(Terrain.GRASS, LR.L),
        }
        tiled = compute_tiling(cells, Box2.from_corners(1, 0, 2, 2))
        assert tiled[Place(1, 0)].tile == slope_int(Terrain.GRASS, LR.L)
        assert tiled[Place(1, 1)].tile == slope(Terrain.GRASS, LR.L)

    def test_step_gives_face_interior_and_cap(self):
        # Ground three high, stepping down one row at the left column
        cells = {
            **block(0, 0, 3, 2, GRASS),
            Place(1, 2): GRASS,
            Place(2, 2): GRASS,
        }
        tiled = compute_tiling(cells, Box2.from_corners(0, 0, 3, 3))

        assert tiled[Place(0, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)
        assert tiled[Place(1, 2)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)
        assert tiled[Place(1, 1)].tile == face_int(Terrain.GRASS, LR.L, TB.T)
        assert tiled[Place(2, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.M)
        assert tiled[Place(0, 2)] == TiledCell(AIR, left_cap=cap(Terrain.GRASS, LR.L))


class TestStaging:
    """The result is a function of the input mapping only."""

    def test_exact_tiles_pass_through(self):
        cells = {Place(0, 0): simple(TileKind.CRATE_CROSS), Place(1, 0): slope(Terrain.SAND, LR.R)}
        tiled = compute_tiling(cells, Box2.from_corners(0, 0, 2, 1))
        assert tiled[Place(0, 0)].tile == simple(TileKind.CRATE_CROSS)
        assert tiled[Place(1, 0)].tile == slope(Terrain.SAND, LR.R)

    def test_only_region_is_returned(self):
        cells = block(0, 0, 4, 2, GRASS)
        tiled = compute_tiling(cells, Box2.from_corners(1, 0, 3, 2))
        assert set(tiled) == set(Box2.from_corners(1, 0, 3, 2).points())
        assert tiled[Place(1, 1)].tile == block_face(Terrain.GRASS, LMR.M, TMB.T)

    def test_cap_from_border_cell(self):
        # Raised column at x=0..1; the cap right of it needs the resolved face at x=1
        cells = {**block(0, 0, 6, 2, GRASS), Place(0, 2): GRASS, Place(1, 2): GRASS}
        whole = compute_tiling(cells, Box2.from_corners(-1, -1, 7, 4))
        edge = compute_tiling(cells, Box2.from_corners(2, 2, 3, 3))
        assert whole[Place(2, 2)] == TiledCell(AIR, right_cap=cap(Terrain.GRASS, LR.R))
        assert edge[Place(2, 2)] == whole[Place(2, 2)]

    def test_insertion_order_irrelevant(self):
        cells = {**block(0, 0, 3, 2, GRASS), **block(3, 0, 5, 3, STONE), Place(1, 2): GRASS}
        region = Box2.from_corners(-1, -1, 6, 4)
        forward = compute_tiling(cells, region)
        backward = compute_tiling(dict(reversed(list(cells.items()))), region)
        assert forward == backward

    def test_idempotent_on_hand_layout(self):
        cells = {**block(0, 0, 3, 2, GRASS), Place(1, 2): GRASS, Place(2, 2): GRASS}
        region = Box2.from_corners(-1, -1, 4, 4)
        first = compute_tiling(cells, region)
        again = {**cells, **{p: cell.tile for p, cell in first.items()}}
        assert compute_tiling(again, region) == first

    def test_idempotent_on_generated_level(self, small_config):
        gen = Generator.from_seed(3, small_config)
        schema = generate_level(gen)
        region = Box2.from_corners(-40, -11, 40, 12)
        wide = region.extend(TILING_MARGIN)
        cells = {p: get_tile(schema, gen, p).midground for p in wide.extend(TILING_MARGIN).points()}

        first = compute_tiling(cells, wide)
        assert all(isinstance(cell.tile, Tile) and not isinstance(cell.tile, GroundMarker) for cell in first.values())

        # Everything within the margin of region is now concrete
        again = {**cells, **{p: cell.tile for p, cell in first.items()}}
        second = compute_tiling(again, region)
        assert all(second[p] == first[p] for p in region.points())
