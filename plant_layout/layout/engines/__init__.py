"""Layout engines registry.

Available engines:
- grid: Deterministic production-flow grid with collision resolution
"""

from plant_layout.layout.engines.base import LayoutEngine
from plant_layout.layout.engines.grid import (
    GridLayoutEngine,
    LayoutOptions,
    generate_layout,
)

# Engine registry
ENGINES = {
    "grid": GridLayoutEngine,
}


def get_engine(name: str) -> type:
    """Get layout engine class by name.

    Args:
        name: Engine name ('grid')

    Returns:
        Layout engine class

    Raises:
        ValueError: If engine not found
    """
    if name not in ENGINES:
        raise ValueError(f"Unknown layout engine: {name}. Available: {list(ENGINES.keys())}")
    return ENGINES[name]


__all__ = [
    "LayoutEngine",
    "GridLayoutEngine",
    "LayoutOptions",
    "ENGINES",
    "generate_layout",
    "get_engine",
]
