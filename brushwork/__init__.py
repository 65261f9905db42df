"""brushwork - deterministic procedural generation of 2D platform levels.

A seed drives layered noise fields; a pipeline of brushes turns the noise
into a spatial index of level features; the resolver turns the features
into a five-layer grid of autotiled tile identifiers.
"""

from brushwork.core import Box1, Box2, Place
from brushwork.generation import Generator, generate_level
from brushwork.region import GeneratedRegion, generate_region
from brushwork.render import TileGrid, render_level
from brushwork.settings import LevelConfig, NoiseConfig, ZoneInfo, load_zone_table
from brushwork.world import Schema

__all__ = [
    "Box1",
    "Box2",
    "Place",
    "Generator",
    "generate_level",
    "GeneratedRegion",
    "generate_region",
    "TileGrid",
    "render_level",
    "LevelConfig",
    "NoiseConfig",
    "ZoneInfo",
    "load_zone_table",
    "Schema",
]
