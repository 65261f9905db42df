"""Generation settings and the per-zone parameter table.

Level-wide knobs live on LevelConfig (a frozen pydantic model with
defaults). Per-zone parameters are data: they are read from
config/zones.yaml into ZoneInfo models, one per zone tag.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from brushwork.world.feature import ZoneTag
from brushwork.world.tiles import Terrain

logger = logging.getLogger(__name__)

DEFAULT_ZONES_PATH = Path(__file__).parent / "config" / "zones.yaml"


class ConfigError(Exception):
    """Raised when the zone table is malformed or incomplete."""


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------


class NoiseConfig(BaseModel):
    """Noise field parameters.

    The terrain field is a fractal sum; zone and theme fields are single
    octave. Frequencies are in cycles per cell.
    """

    model_config = ConfigDict(frozen=True)

    terrain_octaves: int = Field(default=4, ge=1)
    terrain_frequency: float = 1 / 32
    lacunarity: float = 2.0
    persistence: float = 0.2
    zone_frequency: float = 0.173
    theme_frequency: float = 0.31


class LevelConfig(BaseModel):
    """Level-wide generation settings."""

    model_config = ConfigDict(frozen=True)

    half_width: int = Field(default=1000, ge=0)  # level spans [-W, W)
    half_height: int = Field(default=10, ge=1)  # zones span [-H, H + 1)
    min_zone_width: int = Field(default=20, ge=1)
    max_zone_width: int = Field(default=70, ge=2)
    chunk_size: int = Field(default=32, ge=1)
    noise: NoiseConfig = NoiseConfig()
    zones_path: Path | None = None

    @model_validator(mode="after")
    def _check_zone_widths(self) -> LevelConfig:
        if self.min_zone_width >= self.max_zone_width:
            raise ValueError("min_zone_width must be below max_zone_width")
        return self


class ZoneInfo(BaseModel):
    """Generation parameters for one zone."""

    model_config = ConfigDict(frozen=True)

    gap_chance: float = Field(ge=0.0, le=1.0)
    hill_chance: float = Field(ge=0.0, le=1.0)
    terrain: Terrain
    alt_terrain: Terrain | None = None

    @property
    def secondary_terrain(self) -> Terrain:
        """Alternate terrain, falling back to the primary one."""
        return self.alt_terrain or self.terrain

    @classmethod
    def from_dict(cls, data: dict) -> ZoneInfo:
        """Create a ZoneInfo from a dictionary (YAML data)."""
        alt = data.get("alt_terrain")
        return cls(
            gap_chance=data["gap_chance"],
            hill_chance=data["hill_chance"],
            terrain=Terrain(data["terrain"]),
            alt_terrain=Terrain(alt) if alt else None,
        )


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------


def load_zone_table(path: Path | None = None) -> dict[ZoneTag, ZoneInfo]:
    """Load the zone parameter table.

    Args:
        path: YAML file to read. If None, uses the bundled config/zones.yaml.

    Returns:
        ZoneInfo for every zone tag

    Raises:
        ConfigError: If the file is missing, a zone is unknown or missing,
            or an entry is malformed
    """
    if path is None:
        path = DEFAULT_ZONES_PATH
    if not path.exists():
        raise ConfigError(f"zone table not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not data or "zones" not in data:
        raise ConfigError(f"{path}: expected a top-level 'zones' mapping")

    table: dict[ZoneTag, ZoneInfo] = {}
    for name, entry in data["zones"].items():
        try:
            tag = ZoneTag(name)
        except ValueError as e:
            raise ConfigError(f"{path}: unknown zone '{name}'") from e
        try:
            table[tag] = ZoneInfo.from_dict(entry)
        except (KeyError, ValueError, TypeError) as e:
            raise ConfigError(f"{path}: bad entry for zone '{name}': {e}") from e

    missing = [tag.value for tag in ZoneTag if tag not in table]
    if missing:
        raise ConfigError(f"{path}: missing zones: {', '.join(missing)}")

    logger.debug(f"Loaded zone table | path={path} | zones={len(table)}")
    return table
