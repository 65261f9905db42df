"""Shared pytest fixtures for brushwork tests."""

import tempfile
from pathlib import Path
from typing import Callable

import pytest

from brushwork.core.interval import Box1, Box2
from brushwork.generation.generator import Generator
from brushwork.generation.pipeline import BrushContext
from brushwork.settings import LevelConfig, ZoneInfo, load_zone_table
from brushwork.world.feature import ZoneTag
from brushwork.world.schema import Schema


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# =============================================================================
# Fake noise fields
# =============================================================================


class ScriptedField:
    """Noise field with hand-picked values.

    Lookup order: exact (x, y) point, then y channel, then default.
    """

    def __init__(
        self,
        default: float = 0.5,
        points: dict[tuple[int, float], float] | None = None,
        channels: dict[float, float] | None = None,
    ):
        self.default = default
        self.points = points or {}
        self.channels = channels or {}

    def get(self, x, y) -> float:
        key = (int(x), float(y))
        if key in self.points:
            return self.points[key]
        if float(y) in self.channels:
            return self.channels[float(y)]
        return self.default


def unit_for(index: int, size: int) -> float:
    """A noise value that n_to_box1/n_to_range map to index within size."""
    return (index + 0.5) / size


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def zone_table() -> dict[ZoneTag, ZoneInfo]:
    """The bundled zone parameter table."""
    return load_zone_table()


@pytest.fixture
def make_gen(zone_table) -> Callable[..., Generator]:
    """Factory for generators with scripted noise fields."""

    def _make(
        terrain: ScriptedField | None = None,
        zone: ScriptedField | None = None,
        theme: ScriptedField | None = None,
        config: LevelConfig | None = None,
    ) -> Generator:
        return Generator(
            seed=0,
            terrain=terrain or ScriptedField(),
            zone=zone or ScriptedField(),
            theme=theme or ScriptedField(),
            zones=zone_table,
            config=config or LevelConfig(),
        )

    return _make


@pytest.fixture
def make_ctx() -> Callable[..., BrushContext]:
    """Factory for a brush context over a fresh schema."""

    def _make(
        gen: Generator,
        zone: ZoneTag = ZoneTag.GRASS_PLAINS,
        x: tuple[int, int] = (0, 50),
        y: tuple[int, int] = (0, 11),
        schema: Schema | None = None,
    ) -> BrushContext:
        box = Box2(Box1(*x), Box1(*y))
        return BrushContext(gen=gen, schema=schema or Schema(), zone=zone, box=box)

    return _make


@pytest.fixture
def small_config() -> LevelConfig:
    """A narrow level that generates quickly."""
    return LevelConfig(half_width=150)


@pytest.fixture
def temp_log_dir() -> Path:
    """Create a temporary log directory for tests."""
    with tempfile.TemporaryDirectory(prefix="brushwork_test_") as tmpdir:
        yield Path(tmpdir)
