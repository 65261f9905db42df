"""Tests for zone partitioning and whole-level generation."""

import pytest

from brushwork.core.interval import Box1
from brushwork.generation.generator import Generator
from brushwork.generation.level import default_pipeline, generate_level, partition_zones
from brushwork.settings import LevelConfig
from brushwork.world.feature import (
    BigMushroomTop,
    GroundBlock,
    HillBlock,
    Offscreen,
    Zone,
    ZoneTag,
)

from conftest import ScriptedField


class TestPartitionZones:
    """Tests for splitting the level into zones."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 123, 4096])
    def test_zones_tile_level_exactly(self, seed):
        gen = Generator.from_seed(seed)
        zones = partition_zones(gen)
        assert zones[0].box.x.lo == -1000
        assert zones[-1].box.x.hi == 1000
        for a, b in zip(zones, zones[1:]):
            assert a.box.x.hi == b.box.x.lo

    def test_zone_widths_and_rows(self):
        gen = Generator.from_seed(8)
        zones = partition_zones(gen)
        for zone in zones[:-1]:
            assert 20 <= zone.box.x.size < 70
        assert 0 < zones[-1].box.x.size < 70
        assert all(zone.box.y == Box1(-10, 11) for zone in zones)

    def test_zero_width_level_has_no_zones(self):
        gen = Generator.from_seed(0, LevelConfig(half_width=0))
        assert partition_zones(gen) == []

    def test_scripted_partition(self, make_gen):
        # tag draw 0.0 picks the first zone; width draw 0.0 picks the minimum
        gen = make_gen(
            zone=ScriptedField(default=0.0),
            config=LevelConfig(half_width=30),
        )
        zones = partition_zones(gen)
        assert [z.zone for z in zones] == [ZoneTag.MUSHROOM] * 3
        assert [(z.box.x.lo, z.box.x.hi) for z in zones] == [(-30, -10), (-10, 10), (10, 30)]

    def test_many_zone_kinds_appear(self):
        zones = partition_zones(Generator.from_seed(2))
        assert len({z.zone for z in zones}) >= 10


class TestGenerateLevel:
    """Tests for full level generation."""

    def test_deterministic(self, small_config):
        a = generate_level(Generator.from_seed(77, small_config))
        b = generate_level(Generator.from_seed(77, small_config))
        assert list(a) == list(b)

    def test_seeds_differ(self, small_config):
        a = generate_level(Generator.from_seed(1, small_config))
        b = generate_level(Generator.from_seed(2, small_config))
        assert list(a) != list(b)

    def test_schema_frozen_with_zones_and_offscreen(self, small_config):
        schema = generate_level(Generator.from_seed(5, small_config))
        assert schema.frozen
        zones = [f for f in schema if isinstance(f, Zone)]
        assert zones == partition_zones(Generator.from_seed(5, small_config))
        (offscreen,) = [f for f in schema if isinstance(f, Offscreen)]
        assert offscreen.box.x == Box1(-150, 150)
        assert offscreen.box.y.hi == -10

    def test_features_stay_inside_level(self, small_config):
        schema = generate_level(Generator.from_seed(9, small_config))
        bounds = schema.bounds()
        assert bounds.x == Box1(-150, 150)
        assert bounds.y.hi <= 11

    def test_ground_stays_in_its_zone(self, small_config):
        gen = Generator.from_seed(31, small_config)
        schema = generate_level(gen)
        zones = [f for f in schema if isinstance(f, Zone)]
        for feature in schema:
            if isinstance(feature, (GroundBlock, HillBlock, BigMushroomTop)):
                box = feature.bounds()
                assert any(z.box.contains_box(box) for z in zones), feature.describe()

    def test_zero_width_level(self):
        schema = generate_level(Generator.from_seed(0, LevelConfig(half_width=0)))
        assert [type(f) for f in schema] == [Offscreen]

    def test_shortest_level_generates(self):
        config = LevelConfig(half_width=300, half_height=1)
        schema = generate_level(Generator.from_seed(7, config))
        zones = [f for f in schema if isinstance(f, Zone)]
        assert ZoneTag.CAVERNS in {z.zone for z in zones}
        assert all(z.box.y == Box1(-1, 2) for z in zones)

    def test_shortest_cavern_level(self, make_gen):
        # 0.0071 spreads to 0.071, the caverns slot of the zone enum
        gen = make_gen(zone=ScriptedField(default=0.0071), config=LevelConfig(half_width=40, half_height=1))
        schema = generate_level(gen)
        zones = [f for f in schema if isinstance(f, Zone)]
        assert zones
        assert {z.zone for z in zones} == {ZoneTag.CAVERNS}

    def test_default_pipeline_order(self):
        names = [brush.name for brush in default_pipeline().brushes]
        assert names == [
            "height_map_floor",
            "water",
            "lava",
            "big_mushroom",
            "cavern_roof",
            "ledge",
            "igloo",
            "tree",
            "tower",
            "scatter",
            "bonus",
        ]

    def test_pipeline_metrics_cover_every_zone(self, small_config):
        gen = Generator.from_seed(4, small_config)
        pipeline = default_pipeline()
        generate_level(gen, pipeline)
        assert pipeline.get_metrics().zones_painted == len(partition_zones(gen))

    @pytest.mark.slow
    def test_full_width_level(self):
        schema = generate_level(Generator.from_seed(2024))
        assert schema.bounds().x == Box1(-1000, 1000)
        assert any(isinstance(f, HillBlock) for f in schema)
