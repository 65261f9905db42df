"""Terminal preview of a rendered tile grid.

Draws one character per cell with rich styles, top row first. The
foreground wins over the midground, which wins over the background.
"""

from __future__ import annotations

from rich.text import Text

from brushwork.core.types import Place
from brushwork.world.tiles import Terrain, Tile, TileKind
from .resolver import TileGrid

# Symbol and color mappings
TERRAIN_RENDER: dict[Terrain, tuple[str, str]] = {
    Terrain.CAKE: ("#", "bright_magenta"),
    Terrain.CHOCO: ("#", "rgb(120,70,30)"),
    Terrain.METAL: ("#", "bright_white"),
    Terrain.TUNDRA: ("#", "bright_cyan"),
    Terrain.CASTLE: ("#", "white"),
    Terrain.DIRT: ("#", "rgb(160,64,0)"),
    Terrain.GRASS: ("#", "green"),
    Terrain.STONE: ("#", "bright_black"),
    Terrain.SAND: ("#", "yellow"),
    Terrain.SNOW: ("#", "bright_white"),
    Terrain.INDUSTRIAL: ("#", "red"),
}

# Terrain shapes that get their own symbol; other shapes use the terrain's
SHAPE_SYMBOLS: dict[TileKind, str] = {
    TileKind.SLOPE: "/",
    TileKind.SLOPE_INT: "%",
    TileKind.FACE_INT: "+",
    TileKind.ROCK_SLOPE: "v",
    TileKind.CAP: "'",
}

TILE_RENDER: dict[TileKind, tuple[str, str]] = {
    TileKind.AIR: (" ", "default"),
    TileKind.WATER: ("~", "blue"),
    TileKind.WATER_WAVE: ("≈", "bright_blue"),
    TileKind.LAVA: ("~", "red"),
    TileKind.LAVA_WAVE: ("≈", "bright_red"),
    TileKind.IGLOO_TOP: ("n", "bright_cyan"),
    TileKind.IGLOO_INTERIOR: ("o", "cyan"),
    TileKind.IGLOO_DOOR: ("D", "cyan"),
    TileKind.CRATE_BLANK: ("□", "rgb(200,140,60)"),
    TileKind.CRATE_SLASH: ("/", "rgb(200,140,60)"),
    TileKind.CRATE_CROSS: ("x", "rgb(200,140,60)"),
    TileKind.MUSHROOM_BLOCK: ("=", "bright_red"),
    TileKind.MUSHROOM_STEM_BLOCK: ("=", "white"),
    TileKind.PINE_TOP: ("^", "bright_green"),
    TileKind.PINE_BRANCH: ("*", "green"),
    TileKind.PINE_TRUNK: ("|", "rgb(120,70,30)"),
    TileKind.TRUNK_BASE: ("|", "rgb(120,70,30)"),
    TileKind.TRUNK_BASE_SNOW: ("|", "rgb(120,70,30)"),
    TileKind.GRASS_TUFT: ('"', "green"),
    TileKind.CACTUS: ("Y", "green"),
    TileKind.SAPLING: ("t", "green"),
    TileKind.ROCK: ("o", "bright_black"),
    TileKind.MOSS: (",", "green"),
    TileKind.STONE_SPIKE: ("A", "bright_black"),
    TileKind.COIN_GOLD: ("$", "yellow"),
    TileKind.STAR: ("*", "yellow"),
}

_STEM_KINDS = frozenset({
    TileKind.MUSHROOM_STEM,
    TileKind.MUSHROOM_STEM_TOP,
    TileKind.MUSHROOM_STEM_BASE,
    TileKind.MUSHROOM_STEM_LEAF,
    TileKind.MUSHROOM_STEM_RING,
})

_SMALL_MUSHROOMS = frozenset({
    TileKind.MUSHROOM_RED,
    TileKind.MUSHROOM_WHITE,
    TileKind.MUSHROOM_BROWN,
})


def get_tile_render(tile: Tile) -> tuple[str, str]:
    """Get (symbol, color) for a tile."""
    if tile.terrain is not None:
        symbol, color = TERRAIN_RENDER.get(tile.terrain, ("#", "white"))
        return SHAPE_SYMBOLS.get(tile.kind, symbol), color
    if tile.kind in _STEM_KINDS:
        return ("|", "white")
    if tile.kind in _SMALL_MUSHROOMS:
        return ("♠", "red")
    return TILE_RENDER.get(tile.kind, ("?", "white"))


def render_preview(grid: TileGrid) -> Text:
    """Render a TileGrid as styled text, one line per row, top row first."""
    text = Text()
    region = grid.region
    for y in reversed(range(region.y.lo, region.y.hi)):
        for x in range(region.x.lo, region.x.hi):
            stack = grid.at(Place(x, y))
            tile = stack.background
            for candidate in (stack.midground, stack.foreground):
                if candidate.kind is not TileKind.AIR:
                    tile = candidate
            symbol, color = get_tile_render(tile)
            text.append(symbol, style=color)
        if y > region.y.lo:
            text.append("\n")
    return text
