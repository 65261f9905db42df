"""The Generator: seed-derived noise fields plus generation settings.

A Generator is an immutable value object passed explicitly to every brush
and to the resolver. Two Generators built from the same seed and config
produce identical levels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from brushwork.settings import LevelConfig, ZoneInfo, load_zone_table
from brushwork.world.feature import ZoneTag
from .noise import FractalField, GradientField, NoiseField

# Seed offsets of the single-octave fields; terrain octaves use seed + k
ZONE_SEED_OFFSET = 4
THEME_SEED_OFFSET = 5


@dataclass(frozen=True)
class Generator:
    """Noise fields and parameters for one generation session.

    Attributes:
        seed: Session seed
        terrain: Ground height field
        zone: Zone selection and per-zone probability draws
        theme: Art variation (alternate tiles, palettes)
        zones: Parameter table keyed by zone tag
        config: Level-wide settings
    """

    seed: int
    terrain: NoiseField
    zone: NoiseField
    theme: NoiseField
    zones: Mapping[ZoneTag, ZoneInfo]
    config: LevelConfig = field(default_factory=LevelConfig)

    @classmethod
    def from_seed(
        cls,
        seed: int,
        config: LevelConfig | None = None,
        zones: Mapping[ZoneTag, ZoneInfo] | None = None,
    ) -> Generator:
        """Build the standard noise fields for a seed.

        Args:
            seed: Unsigned session seed
            config: Level settings (defaults if None)
            zones: Zone table. If None, loads config.zones_path or the bundled table.
        """
        assert seed >= 0, "seed must be unsigned"
        config = config or LevelConfig()
        noise = config.noise
        if zones is None:
            zones = load_zone_table(config.zones_path)
        return cls(
            seed=seed,
            terrain=FractalField(
                seed,
                octaves=noise.terrain_octaves,
                frequency=noise.terrain_frequency,
                lacunarity=noise.lacunarity,
                persistence=noise.persistence,
            ),
            zone=GradientField(seed + ZONE_SEED_OFFSET, noise.zone_frequency),
            theme=GradientField(seed + THEME_SEED_OFFSET, noise.theme_frequency),
            zones=zones,
            config=config,
        )

    def zone_info(self, tag: ZoneTag) -> ZoneInfo:
        return self.zones[tag]
