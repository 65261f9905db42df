"""
BrushPipeline - runs the decoration brushes for one zone.

Each brush reads noise and the current schema and adds features. The
pipeline runs the brushes that apply to the zone in a fixed order and
records how long each took and how many features it added.

Design principles:
- Brushes are independent and can be tested on a hand-built context
- The schema is the only thing a brush mutates
- Failures are reported with the brush and zone that caused them
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from brushwork.core.interval import Box2
from brushwork.logging_config import log_brush
from brushwork.settings import ZoneInfo
from brushwork.world.feature import ZoneTag
from brushwork.world.schema import Schema
from .generator import Generator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrushContext:
    """Everything a brush needs to paint one zone."""

    gen: Generator
    schema: Schema
    zone: ZoneTag
    box: Box2

    @property
    def info(self) -> ZoneInfo:
        return self.gen.zone_info(self.zone)

    @property
    def floor(self) -> int:
        """Lowest row of the zone."""
        return self.box.y.lo


@runtime_checkable
class Brush(Protocol):
    """
    Protocol for brushes.

    A brush paints features for one zone into the context's schema.
    """

    @property
    def name(self) -> str:
        """Human-readable brush name for logging."""
        ...

    def applies_to(self, zone: ZoneTag) -> bool:
        """Whether this brush runs for the given zone."""
        ...

    def paint(self, ctx: BrushContext) -> None:
        """
        Paint this brush.

        Args:
            ctx: The zone being painted
        """
        ...


class BaseBrush(ABC):
    """
    Base class for brushes with common functionality.

    Provides:
    - Automatic name from class name
    - Zone filtering (None means every zone)
    - Logging wrapper around painting
    - Error handling
    """

    zones: frozenset[ZoneTag] | None = None

    @property
    def name(self) -> str:
        """Brush name derived from class name."""
        # HeightMapFloorBrush -> height_map_floor
        class_name = self.__class__.__name__
        if class_name.endswith("Brush"):
            class_name = class_name[:-5]
        return re.sub(r"(?<!^)(?=[A-Z])", "_", class_name).lower()

    def applies_to(self, zone: ZoneTag) -> bool:
        return self.zones is None or zone in self.zones

    @abstractmethod
    def _paint(self, ctx: BrushContext) -> None:
        """Override this to implement brush logic."""
        ...

    def paint(self, ctx: BrushContext) -> None:
        """Paint with logging and error handling."""
        before = len(ctx.schema)
        try:
            self._paint(ctx)
        except Exception as e:
            logger.error(f"Brush {self.name} failed | zone={ctx.zone.value}: {e}", exc_info=True)
            raise BrushError(brush_name=self.name, zone=ctx.zone, original_error=e) from e
        log_brush(
            logger,
            self.name,
            ctx.zone.value,
            "complete",
            f"x={ctx.box.x.lo}..{ctx.box.x.hi} | features={len(ctx.schema) - before}",
        )


@dataclass
class BrushError(Exception):
    """Error that occurred while painting a zone."""

    brush_name: str
    zone: ZoneTag
    original_error: Exception

    def __str__(self) -> str:
        return f"Brush '{self.brush_name}' failed in zone {self.zone.value}: {self.original_error}"


@dataclass
class PipelineMetrics:
    """Metrics collected across every zone painted by a pipeline."""

    total_duration_ms: float = 0.0
    brush_durations_ms: dict[str, float] = field(default_factory=lambda: defaultdict(float))
    features_added: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    zones_painted: int = 0


class BrushPipeline:
    """
    Orchestrates the brushes for each zone.

    The pipeline:
    1. Runs, in order, every brush that applies to the zone
    2. Accumulates per-brush durations and feature counts
    3. Lets BrushError propagate with the failing brush and zone

    Usage:
        pipeline = BrushPipeline([
            HeightMapFloorBrush(),
            WaterBrush(),
            BigMushroomBrush(),
            BonusBrush(),
        ])

        for zone in zones:
            pipeline.paint(BrushContext(gen, schema, zone.zone, zone.box))
    """

    def __init__(self, brushes: list[Brush]):
        """
        Initialize the pipeline with brushes.

        Args:
            brushes: Ordered list of brushes to run
        """
        self.brushes = brushes
        self._metrics = PipelineMetrics()

    def paint(self, ctx: BrushContext) -> None:
        """
        Run every applicable brush on one zone.

        Args:
            ctx: The zone to paint
        """
        start_time = time.perf_counter()

        for brush in self.brushes:
            if not brush.applies_to(ctx.zone):
                continue
            before = len(ctx.schema)
            brush_start = time.perf_counter()
            brush.paint(ctx)
            self._metrics.brush_durations_ms[brush.name] += (time.perf_counter() - brush_start) * 1000
            self._metrics.features_added[brush.name] += len(ctx.schema) - before

        self._metrics.total_duration_ms += (time.perf_counter() - start_time) * 1000
        self._metrics.zones_painted += 1

    def get_metrics(self) -> PipelineMetrics:
        """Get metrics accumulated since construction."""
        return self._metrics

    def get_brush(self, name: str) -> Brush | None:
        """Get a brush by name (for testing/debugging)."""
        for brush in self.brushes:
            if brush.name == name:
                return brush
        return None
