"""
Layout settings with environment variable overrides.

This module holds the tunable constants of the layout pipeline: canvas
margins, collision gap and iteration budget, zone padding, connection
threshold and building size bounds. Defaults reproduce the reference plant
map; each value can be overridden through a ``PLANT_LAYOUT_*`` environment
variable without code changes.

Usage:
    from plant_layout.config.settings import load_settings

    settings = load_settings()
    engine = GridLayoutEngine(settings=settings)

Environment Variables:
    PLANT_LAYOUT_MIN_GAP=15               - Minimum clearance between buildings
    PLANT_LAYOUT_COLLISION_ITERATIONS=50  - Collision resolver pass budget
    PLANT_LAYOUT_ZONE_PADDING=20          - Padding around automation zones
    PLANT_LAYOUT_CONNECTION_MIN_STRENGTH=0.25
    PLANT_LAYOUT_AUTO_GRID_COLUMNS=6
    PLANT_LAYOUT_MARGIN_TOP=60 (also _RIGHT, _BOTTOM, _LEFT)
"""

import logging
import os
from typing import Dict, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Margin(BaseModel):
    """Canvas margins in pixels."""

    model_config = {"frozen": True}

    top: float = Field(default=60.0, ge=0)
    right: float = Field(default=40.0, ge=0)
    bottom: float = Field(default=40.0, ge=0)
    left: float = Field(default=40.0, ge=0)


class SizeBounds(BaseModel):
    """Pixel clamp range for one building dimension."""

    model_config = {"frozen": True}

    min: float = Field(..., gt=0)
    max: float = Field(..., gt=0)

    def clamp(self, value: float) -> float:
        return max(self.min, min(self.max, value))


class LayoutSettings(BaseModel):
    """Tunable constants for the grid layout pipeline.

    Attributes:
        margin: Canvas margins; node centres are clamped inside them
        min_gap: Minimum clearance between two buildings
        collision_iterations: Maximum number of relaxation passes
        zone_padding: Padding added around automation zone boundaries
        connection_min_strength: Relationships at or below this strength are not routed
        auto_grid_columns: Column wrap for unclassified units
        known_width / known_height: Size bounds for classified buildings
        unknown_size: Bounds for the base size of unclassified buildings
        default_typical_asset_count: Used when a template has no typical count
        default_width / default_height: Canvas used when options omit a size
    """

    model_config = {"frozen": True}

    margin: Margin = Field(default_factory=Margin)
    min_gap: float = Field(default=15.0, ge=0)
    collision_iterations: int = Field(default=50, ge=0)
    zone_padding: float = Field(default=20.0, ge=0)
    connection_min_strength: float = Field(default=0.25, ge=0, le=1)
    auto_grid_columns: int = Field(default=6, ge=1)
    known_width: SizeBounds = Field(default_factory=lambda: SizeBounds(min=70, max=200))
    known_height: SizeBounds = Field(default_factory=lambda: SizeBounds(min=50, max=150))
    unknown_size: SizeBounds = Field(default_factory=lambda: SizeBounds(min=60, max=140))
    default_typical_asset_count: int = Field(default=200, ge=1)
    default_width: float = Field(default=900.0, gt=0)
    default_height: float = Field(default=550.0, gt=0)


# Environment variable -> settings field
ENV_OVERRIDES: Dict[str, str] = {
    "PLANT_LAYOUT_MIN_GAP": "min_gap",
    "PLANT_LAYOUT_COLLISION_ITERATIONS": "collision_iterations",
    "PLANT_LAYOUT_ZONE_PADDING": "zone_padding",
    "PLANT_LAYOUT_CONNECTION_MIN_STRENGTH": "connection_min_strength",
    "PLANT_LAYOUT_AUTO_GRID_COLUMNS": "auto_grid_columns",
}

MARGIN_OVERRIDES: Dict[str, str] = {
    "PLANT_LAYOUT_MARGIN_TOP": "top",
    "PLANT_LAYOUT_MARGIN_RIGHT": "right",
    "PLANT_LAYOUT_MARGIN_BOTTOM": "bottom",
    "PLANT_LAYOUT_MARGIN_LEFT": "left",
}


def load_settings(environ: Optional[Dict[str, str]] = None) -> LayoutSettings:
    """
    Build LayoutSettings from defaults plus environment overrides.

    Args:
        environ: Mapping to read overrides from (defaults to os.environ)

    Returns:
        Validated LayoutSettings

    Raises:
        pydantic.ValidationError: If an override has an invalid value

    Example:
        >>> load_settings({"PLANT_LAYOUT_MIN_GAP": "25"}).min_gap
        25.0
    """
    env = os.environ if environ is None else environ

    values: Dict[str, object] = {}
    for var, field_name in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()

    margin_values = {
        side: env[var].strip()
        for var, side in MARGIN_OVERRIDES.items()
        if env.get(var) and env[var].strip()
    }
    if margin_values:
        values["margin"] = Margin(**margin_values)

    if values:
        logger.debug(f"Layout settings overrides from environment: {sorted(values)}")

    return LayoutSettings(**values)


DEFAULT_SETTINGS = LayoutSettings()
