"""Deterministic plant layout engine.

Turns flat industrial asset records into a reproducible 2D plant map:
non-overlapping building rectangles per process area, inferred relationships,
ISA-95 automation zone boundaries and orthogonal connection routes.
"""

from plant_layout.layout import (
    GridLayoutEngine,
    LayoutOptions,
    compute_orthogonal_path,
    generate_layout,
    get_engine,
)
from plant_layout.models import AssetRecord, LayoutResult

__version__ = "0.1.0"

__all__ = [
    "AssetRecord",
    "GridLayoutEngine",
    "LayoutOptions",
    "LayoutResult",
    "compute_orthogonal_path",
    "generate_layout",
    "get_engine",
]
