"""Deterministic grid placement of units onto the canvas.

Units are placed in four groups derived from their zone template:

    row 1     main production flow, one horizontal row left to right by col
    row >= 2  feeders, below the main-flow building with the same col
    row 0     perimeter, in a fixed upper-left or lower-right slot
    (none)    unclassified, auto-grid along the bottom of the canvas

Positions are rectangle centres. Overlaps are left for the collision
resolver.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from plant_layout.config.settings import DEFAULT_SETTINGS, LayoutSettings
from plant_layout.knowledge.catalog import IndustryCatalog, ZoneTemplate
from plant_layout.layout.classifier import detect_unit_type
from plant_layout.layout.dimensions import compute_building_dimensions
from plant_layout.models.assets import UnitAggregate
from plant_layout.models.enums import PerimeterSlot

logger = logging.getLogger(__name__)

MAIN_ROW_Y = 0.38
FEEDER_ROW_Y = 0.72
UNCLASSIFIED_ROW_Y = 0.92

# Fractions of the interior (x, y)
PERIMETER_SLOTS: Dict[PerimeterSlot, Tuple[float, float]] = {
    PerimeterSlot.UPPER_LEFT: (0.15, 0.08),
    PerimeterSlot.LOWER_RIGHT: (0.88, 0.88),
}

GROUP_MAIN = "main"
GROUP_FEEDER = "feeder"
GROUP_PERIMETER = "perimeter"
GROUP_UNCLASSIFIED = "unclassified"


@dataclass
class PlacedUnit:
    """A unit with a building rectangle centred at (x, y).

    Mutable: the collision resolver moves x and y in place.
    """

    unit: UnitAggregate
    detected_type: Optional[str]
    template: Optional[ZoneTemplate]
    group: str
    x: float
    y: float
    building_width: float
    building_height: float

    @property
    def name(self) -> str:
        return self.unit.name

    @property
    def asset_count(self) -> int:
        return self.unit.asset_count

    @property
    def automation_level(self) -> int:
        """Template level for known types, else the unit's dominant device level."""
        if self.template is not None:
            return self.template.automation_level
        return self.unit.dominant_automation_level

    @property
    def roof_profile(self) -> str:
        return self.template.roof_profile if self.template is not None else "flat"


def _flow_key(entry: Tuple[UnitAggregate, Optional[str], Optional[ZoneTemplate]]):
    unit, _, template = entry
    return (template.col, template.flow_order, unit.name)


def place_units(
    units: List[UnitAggregate],
    industry_catalog: Optional[IndustryCatalog],
    canvas_width: float,
    canvas_height: float,
    settings: Optional[LayoutSettings] = None,
) -> List[PlacedUnit]:
    """Classify units and assign initial building positions.

    Args:
        units: Unit aggregates (any order)
        industry_catalog: Catalog used for classification (None = all unclassified)
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        settings: Margins, gap and auto-grid column count

    Returns:
        Placed units in output order: main flow, feeders, perimeter, unclassified
    """
    settings = settings or DEFAULT_SETTINGS
    margin = settings.margin
    inner_w = canvas_width - margin.left - margin.right
    inner_h = canvas_height - margin.top - margin.bottom

    main, feeders, perimeter, unclassified = [], [], [], []
    for unit in units:
        detected = detect_unit_type(unit.name, industry_catalog)
        template = industry_catalog.get(detected) if industry_catalog is not None else None
        entry = (unit, detected, template)
        if template is None:
            unclassified.append(entry)
        elif template.row == 1:
            main.append(entry)
        elif template.row >= 2:
            feeders.append(entry)
        else:
            perimeter.append(entry)

    main.sort(key=_flow_key)
    feeders.sort(key=_flow_key)
    perimeter.sort(key=_flow_key)
    unclassified.sort(key=lambda entry: entry[0].name)

    def build(entry, group: str, x: float, y: float) -> PlacedUnit:
        unit, detected, template = entry
        width, height = compute_building_dimensions(
            template, unit.asset_count, canvas_width, canvas_height, settings
        )
        return PlacedUnit(
            unit=unit,
            detected_type=detected,
            template=template,
            group=group,
            x=x,
            y=y,
            building_width=width,
            building_height=height,
        )

    placed: List[PlacedUnit] = []

    # Main production row
    main_y = margin.top + inner_h * MAIN_ROW_Y
    main_spacing = inner_w / (len(main) + 1)
    main_x_by_col: Dict[int, float] = {}
    for i, entry in enumerate(main):
        x = margin.left + main_spacing * (i + 1)
        main_x_by_col.setdefault(entry[2].col, x)
        placed.append(build(entry, GROUP_MAIN, x, main_y))

    # Feeders under their main-flow partner
    feeder_y = margin.top + inner_h * FEEDER_ROW_Y
    feeder_spacing = inner_w / (len(feeders) + 2)
    for i, entry in enumerate(feeders):
        x = main_x_by_col.get(entry[2].col, margin.left + feeder_spacing * (i + 1))
        placed.append(build(entry, GROUP_FEEDER, x, feeder_y))

    # Perimeter slots
    for entry in perimeter:
        fx, fy = PERIMETER_SLOTS[entry[2].slot]
        placed.append(build(
            entry, GROUP_PERIMETER,
            margin.left + inner_w * fx,
            margin.top + inner_h * fy,
        ))

    placed.extend(_place_auto_grid(
        unclassified, canvas_width, canvas_height, settings, build
    ))

    logger.debug(
        f"Placed {len(placed)} units: {len(main)} main, {len(feeders)} feeder, "
        f"{len(perimeter)} perimeter, {len(unclassified)} unclassified"
    )
    return placed


def _place_auto_grid(entries, canvas_width, canvas_height, settings, build) -> List[PlacedUnit]:
    """Uniform-cell grid for unclassified units along the bottom of the canvas.

    Cells are sized to the largest unclassified building plus the minimum gap
    (and one pixel), so grid neighbours never collide with each other.
    """
    if not entries:
        return []

    margin = settings.margin
    inner_w = canvas_width - margin.left - margin.right
    inner_h = canvas_height - margin.top - margin.bottom

    sized = [build(entry, GROUP_UNCLASSIFIED, 0.0, 0.0) for entry in entries]
    max_w = max(p.building_width for p in sized)
    max_h = max(p.building_height for p in sized)
    cell_w = max_w + settings.min_gap + 1
    cell_h = max_h + settings.min_gap + 1

    columns = max(1, min(settings.auto_grid_columns, int(inner_w // cell_w)))
    rows = math.ceil(len(sized) / columns)

    start_x = margin.left + cell_w / 2
    start_y = min(
        margin.top + inner_h * UNCLASSIFIED_ROW_Y,
        canvas_height - margin.bottom - max_h / 2 - (rows - 1) * cell_h,
    )
    start_y = max(start_y, margin.top + max_h / 2)

    for i, placed in enumerate(sized):
        placed.x = start_x + (i % columns) * cell_w
        placed.y = start_y + (i // columns) * cell_h
    return sized


__all__ = [
    "PlacedUnit",
    "PERIMETER_SLOTS",
    "place_units",
]
