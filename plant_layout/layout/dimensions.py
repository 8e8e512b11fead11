"""Building footprint sizing.

Classified units are sized from the template's real floor area and aspect
ratio, scaled to the canvas and nudged by asset density. Unclassified units
are sized from asset count alone. Both are clamped to the pixel bounds in
LayoutSettings.
"""

import math
from typing import Optional, Tuple

from plant_layout.config.settings import DEFAULT_SETTINGS, LayoutSettings
from plant_layout.knowledge.catalog import ZoneTemplate

# Canvas dimension at which floor areas are drawn at their reference scale
REFERENCE_CANVAS = 900.0
FLOOR_AREA_SCALE = 0.25
DENSITY_MIN = 0.7
DENSITY_MAX = 1.4


def compute_building_dimensions(
    template: Optional[ZoneTemplate],
    asset_count: int,
    canvas_width: float,
    canvas_height: float,
    settings: Optional[LayoutSettings] = None,
) -> Tuple[float, float]:
    """Compute the (width, height) of a building rectangle in pixels.

    Args:
        template: Zone template of the unit, or None when unclassified
        asset_count: Number of assets in the unit
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        settings: Size bounds and default typical count

    Returns:
        Tuple of (width, height)
    """
    settings = settings or DEFAULT_SETTINGS
    count = max(0, asset_count or 0)

    if template is None:
        side = settings.unknown_size.clamp(40 + math.sqrt(count) * 4)
        return side * 1.3, side * 0.8

    scale = min(canvas_width, canvas_height) / REFERENCE_CANVAS
    base = math.sqrt(template.typical_floor_area_m2) * scale * FLOOR_AREA_SCALE
    aspect = math.sqrt(template.building_aspect)

    typical = settings.default_typical_asset_count
    if template.typical_asset_count is not None and template.typical_asset_count.typical:
        typical = template.typical_asset_count.typical
    density = max(DENSITY_MIN, min(DENSITY_MAX, math.sqrt(count / max(typical, 1))))

    width = settings.known_width.clamp(base * aspect * density)
    height = settings.known_height.clamp(base / aspect * density)
    return width, height


__all__ = ["compute_building_dimensions"]
