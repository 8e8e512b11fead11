"""Layout module for deterministic plant positioning.

This module provides:
- Layout engine abstraction (LayoutEngine base class) and the grid engine
- Relationship inference and zone-type classification
- Building sizing, grid placement and collision resolution
- Automation zone boundaries and orthogonal connection routing
"""

from plant_layout.layout.engines import (
    ENGINES,
    GridLayoutEngine,
    LayoutEngine,
    LayoutOptions,
    generate_layout,
    get_engine,
)
from plant_layout.layout.routing import compute_orthogonal_path

__all__ = [
    "ENGINES",
    "GridLayoutEngine",
    "LayoutEngine",
    "LayoutOptions",
    "compute_orthogonal_path",
    "generate_layout",
    "get_engine",
]
