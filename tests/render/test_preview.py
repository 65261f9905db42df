"""Tests for the terminal preview."""

from rich.text import Text

from brushwork.core.interval import Box2
from brushwork.core.types import LR, Place
from brushwork.render.preview import get_tile_render, render_preview
from brushwork.render.resolver import render_level
from brushwork.world.feature import GroundBlock, SurfaceWater, TileFeature
from brushwork.world.schema import Schema
from brushwork.world.tiles import AIR, GroundCover, Terrain, Tile, TileKind, simple, slope


class TestGetTileRender:
    """Tests for symbol lookup."""

    def test_terrain_uses_terrain_color(self):
        assert get_tile_render(slope(Terrain.GRASS, LR.L)) == ("/", "green")
        assert get_tile_render(Tile(TileKind.BLOCK, Terrain.SAND)) == ("#", "yellow")

    def test_standalone_tiles(self):
        assert get_tile_render(AIR) == (" ", "default")
        assert get_tile_render(simple(TileKind.WATER)) == ("~", "blue")
        assert get_tile_render(simple(TileKind.MUSHROOM_STEM_RING)) == ("|", "white")
        assert get_tile_render(simple(TileKind.MUSHROOM_BROWN, alt=True)) == ("♠", "red")

    def test_unknown_kind_falls_back(self):
        assert get_tile_render(simple(TileKind.SNOW_PILE)) == ("?", "white")


class TestRenderPreview:
    """Tests for rendering a grid to styled text."""

    def test_rows_top_first(self, make_gen):
        schema = Schema()
        schema.add(GroundBlock(
            cover=GroundCover.TOP_COVERED,
            terrain=Terrain.GRASS,
            box=Box2.from_corners(0, 0, 3, 2),
        ))
        schema.add(TileFeature(place=Place(1, 2), tile=simple(TileKind.ROCK)))
        grid = render_level(schema, make_gen(), Box2.from_corners(-1, -1, 4, 3))

        text = render_preview(grid)
        assert isinstance(text, Text)
        assert text.plain.split("\n") == [
            "  o  ",
            " ### ",
            " ### ",
            "     ",
        ]

    def test_foreground_over_background(self, make_gen):
        schema = Schema()
        schema.add(SurfaceWater(box=Box2.from_corners(0, 0, 2, 1)))
        schema.add(TileFeature(place=Place(1, 0), tile=simple(TileKind.STAR)))
        grid = render_level(schema, make_gen(), Box2.from_corners(0, 0, 2, 1))
        assert render_preview(grid).plain == "≈*"

    def test_empty_region(self, make_gen):
        grid = render_level(Schema(), make_gen(), Box2.from_corners(0, 0, 0, 0))
        assert render_preview(grid).plain == ""
