"""Iterative pairwise collision resolution for building rectangles.

Two buildings collide when their centres are closer than half their summed
extents plus the minimum gap on BOTH axes. A colliding pair is pushed apart
symmetrically along the axis that needs the smaller correction. Each pass
ends by clamping every centre back inside the canvas margins.
"""

import logging
import math
from typing import Optional, Sequence

from plant_layout.config.settings import DEFAULT_SETTINGS, LayoutSettings
from plant_layout.layout.placement import PlacedUnit

logger = logging.getLogger(__name__)


def _direction(delta: float) -> float:
    # Coincident centres separate in the positive direction
    return math.copysign(1.0, delta) if delta != 0 else 1.0


def _clamp_axis(value: float, low: float, high: float, half: float) -> float:
    """Clamp a centre so the extent fits in [low, high]; centre it when it cannot fit."""
    if low + half <= high - half:
        return max(low + half, min(high - half, value))
    return max(low, min(high, (low + high) / 2))


def _clamp_into_canvas(node: PlacedUnit, canvas_width: float, canvas_height: float, settings: LayoutSettings) -> bool:
    margin = settings.margin
    x = _clamp_axis(node.x, margin.left, canvas_width - margin.right, node.building_width / 2)
    y = _clamp_axis(node.y, margin.top, canvas_height - margin.bottom, node.building_height / 2)

    moved = x != node.x or y != node.y
    node.x, node.y = x, y
    return moved


def resolve_collisions(
    nodes: Sequence[PlacedUnit],
    canvas_width: float,
    canvas_height: float,
    settings: Optional[LayoutSettings] = None,
) -> int:
    """Push overlapping buildings apart in place.

    Args:
        nodes: Placed units (mutated)
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        settings: Margins, minimum gap and pass budget

    Returns:
        Number of passes performed
    """
    settings = settings or DEFAULT_SETTINGS
    min_gap = settings.min_gap

    passes = 0
    converged = False
    for _ in range(settings.collision_iterations):
        passes += 1
        moved = False

        for i, a in enumerate(nodes):
            for b in nodes[i + 1:]:
                dx = b.x - a.x
                dy = b.y - a.y
                overlap_x = (a.building_width + b.building_width) / 2 + min_gap - abs(dx)
                overlap_y = (a.building_height + b.building_height) / 2 + min_gap - abs(dy)
                if overlap_x <= 0 or overlap_y <= 0:
                    continue

                if overlap_x < overlap_y:
                    push = (overlap_x / 2 + 1) * _direction(dx)
                    a.x -= push
                    b.x += push
                else:
                    push = (overlap_y / 2 + 1) * _direction(dy)
                    a.y -= push
                    b.y += push
                moved = True

        for node in nodes:
            if _clamp_into_canvas(node, canvas_width, canvas_height, settings):
                moved = True

        if not moved:
            converged = True
            break

    for node in nodes:
        _clamp_into_canvas(node, canvas_width, canvas_height, settings)

    if nodes and not converged:
        logger.warning(
            f"Collision resolution did not settle within {settings.collision_iterations} passes "
            f"({len(nodes)} buildings on {canvas_width}x{canvas_height})"
        )
    else:
        logger.debug(f"Collision resolution settled after {passes} passes")
    return passes


__all__ = ["resolve_collisions"]
