#!/usr/bin/env python3
"""
brushwork - preview a generated platform level region.

Generates the level for a seed, resolves the requested region and prints
it to the terminal, optionally followed by the features it contains.
"""

import argparse
import logging
from pathlib import Path

from rich.console import Console

from brushwork.core.interval import Box2
from brushwork.logging_config import setup_logging
from brushwork.region import generate_region
from brushwork.render.preview import render_preview
from brushwork.settings import LevelConfig


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="brushwork - deterministic 2D platform level generator"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Session seed (default: 0)",
    )
    parser.add_argument(
        "--region",
        type=int,
        nargs=4,
        metavar=("X0", "Y0", "X1", "Y1"),
        default=(-40, -11, 40, 12),
        help="Region [X0, X1) x [Y0, Y1) to render (default: -40 -11 40 12)",
    )
    parser.add_argument(
        "--half-width",
        type=int,
        default=LevelConfig().half_width,
        help="Level half-width W; the level spans [-W, W)",
    )
    parser.add_argument(
        "--zones",
        type=Path,
        default=None,
        help="Path to a zone table YAML (default: bundled table)",
    )
    parser.add_argument(
        "--features",
        action="store_true",
        help="List the features intersecting the region",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path("logs"),
        help="Directory for the debug log (default: ./logs)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging on the console",
    )

    args = parser.parse_args(argv)

    # Configure logging - always log DEBUG to file, console level depends on --debug
    console_level = logging.DEBUG if args.debug else logging.WARNING
    setup_logging(args.log_dir, console_level=console_level)

    x0, y0, x1, y1 = args.region
    if x1 < x0 or y1 < y0:
        parser.error("region corners must satisfy X0 <= X1 and Y0 <= Y1")
    if args.seed < 0:
        parser.error("seed must be non-negative")

    config = LevelConfig(half_width=args.half_width, zones_path=args.zones)
    result = generate_region(args.seed, Box2.from_corners(x0, y0, x1, y1), config)

    console = Console()
    console.print(render_preview(result.tiles))
    if args.features:
        for feature in result.features:
            console.print(feature.describe(), markup=False, highlight=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
