"""Noise fields, brushes and level generation."""

from .noise import NoiseField, GradientNoise, GradientField, FractalField, spread
from .generator import Generator
from .pipeline import (
    Brush,
    BaseBrush,
    BrushContext,
    BrushError,
    BrushPipeline,
    PipelineMetrics,
)
from .brushes import (
    Run,
    run_length_encode,
    run_length_decode,
    HeightMapFloorBrush,
    WaterBrush,
    LavaBrush,
    BigMushroomBrush,
)
from .decorations import (
    ScatterBrush,
    TreeBrush,
    IglooBrush,
    CavernRoofBrush,
    LedgeBrush,
    TowerBrush,
    BonusBrush,
)
from .level import partition_zones, default_pipeline, generate_level

__all__ = [
    "NoiseField",
    "GradientNoise",
    "GradientField",
    "FractalField",
    "spread",
    "Generator",
    "Brush",
    "BaseBrush",
    "BrushContext",
    "BrushError",
    "BrushPipeline",
    "PipelineMetrics",
    "Run",
    "run_length_encode",
    "run_length_decode",
    "HeightMapFloorBrush",
    "WaterBrush",
    "LavaBrush",
    "BigMushroomBrush",
    "ScatterBrush",
    "TreeBrush",
    "IglooBrush",
    "CavernRoofBrush",
    "LedgeBrush",
    "TowerBrush",
    "BonusBrush",
    "partition_zones",
    "default_pipeline",
    "generate_level",
]
