"""Automation-level (ISA-95 / Purdue) zone boundaries."""

import logging
from typing import Dict, List, Sequence

from plant_layout.knowledge.catalog import AutomationZone, find_automation_zone
from plant_layout.models.enums import AUTOMATION_LEVELS
from plant_layout.models.layout import BoundingBox, LayoutNode, ZoneBoundary

logger = logging.getLogger(__name__)


def compute_zone_boundaries(
    nodes: Sequence[LayoutNode],
    automation_levels: Sequence[AutomationZone],
    padding: float = 20.0,
) -> List[ZoneBoundary]:
    """Union bounding box of every building at each automation level.

    Args:
        nodes: Positioned nodes
        automation_levels: The 5-entry level table (labels and colours)
        padding: Margin added around each building

    Returns:
        One ZoneBoundary per populated level, ordered 0 -> 4
    """
    members: Dict[int, List[LayoutNode]] = {}
    for node in nodes:
        members.setdefault(node.automation_level, []).append(node)

    boundaries = []
    for level in AUTOMATION_LEVELS:
        level_nodes = members.get(level)
        if not level_nodes:
            continue

        boxes = [
            BoundingBox.from_rect(n.x, n.y, n.building_width, n.building_height, padding)
            for n in level_nodes
        ]
        zone = find_automation_zone(automation_levels, level)
        boundaries.append(ZoneBoundary(
            level=level,
            label=zone.label,
            color=zone.color,
            description=zone.description,
            bounds=BoundingBox(
                min_x=min(b.min_x for b in boxes),
                max_x=max(b.max_x for b in boxes),
                min_y=min(b.min_y for b in boxes),
                max_y=max(b.max_y for b in boxes),
            ),
            node_count=len(level_nodes),
            nodes=[n.name for n in level_nodes],
        ))

    logger.debug(f"Computed {len(boundaries)} automation zone boundaries")
    return boundaries


__all__ = ["compute_zone_boundaries"]
