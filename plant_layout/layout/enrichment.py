"""Display and engineering metadata for placed buildings.

Enrichment never moves a building; it copies template metadata (colour,
icon, shape, criticality, regulations) onto each node and compares the
observed asset count with the expected range for the unit type.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence

from plant_layout.knowledge.catalog import IndustryCatalog
from plant_layout.layout.placement import PlacedUnit
from plant_layout.models.assets import UnitAggregate
from plant_layout.models.enums import AUTOMATION_LEVELS, CoverageStatus
from plant_layout.models.layout import CoverageStat, LayoutNode

MAX_COVERAGE_RATIO = 2.0
BASE_RADIUS = 20.0
RADIUS_RANGE = 40.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def enrich_nodes(
    placed: Sequence[PlacedUnit],
    industry_catalog: Optional[IndustryCatalog],
    max_assets: int,
) -> List[LayoutNode]:
    """Convert placed units into enriched LayoutNodes.

    Args:
        placed: Placed (and collision-resolved) units
        industry_catalog: Catalog the types were detected against
        max_assets: Largest unit asset count, used for the legacy radius

    Returns:
        LayoutNodes in the same order as placed
    """
    max_assets = max(max_assets, 1)

    nodes = []
    for p in placed:
        template = p.template
        if template is None and industry_catalog is not None:
            template = industry_catalog.get(p.detected_type)

        expected = template.typical_asset_count if template is not None else None
        coverage_ratio = None
        if expected is not None and expected.typical:
            coverage_ratio = min(MAX_COVERAGE_RATIO, p.asset_count / expected.typical)

        nodes.append(LayoutNode(
            name=p.name,
            detected_type=p.detected_type,
            asset_count=p.asset_count,
            x=p.x,
            y=p.y,
            building_width=p.building_width,
            building_height=p.building_height,
            automation_level=p.automation_level,
            roof_profile=p.roof_profile,
            radius=BASE_RADIUS + p.asset_count / max_assets * RADIUS_RANGE,
            subnets=list(p.unit.subnets),
            tag_prefixes=list(p.unit.tag_prefixes),
            device_types=list(p.unit.device_types),
            automation_histogram=dict(p.unit.automation_histogram),
            dominant_automation_level=p.unit.dominant_automation_level,
            color=template.color if template is not None else "#94a3b8",
            icon=template.icon if template is not None else "?",
            shape=template.shape if template is not None else "rectangle",
            criticality=template.criticality if template is not None else "medium",
            expected_asset_range=expected,
            coverage_ratio=coverage_ratio,
            is_overstaffed=expected is not None and p.asset_count > expected.max,
            is_understaffed=expected is not None and p.asset_count < expected.min,
            regulations=list(template.regulations) if template is not None else [],
            safety_notes=template.safety_notes if template is not None else None,
        ))
    return nodes


def compute_coverage_stats(nodes: Iterable[LayoutNode]) -> List[CoverageStat]:
    """Per-node coverage status; ratio is a whole percentage of the typical count."""
    stats = []
    for node in nodes:
        expected = node.expected_asset_range
        if expected is None:
            stats.append(CoverageStat(name=node.name, status=CoverageStatus.UNKNOWN))
            continue

        if node.asset_count < expected.min:
            status = CoverageStatus.UNDER_COVERED
        elif node.asset_count > expected.max:
            status = CoverageStatus.OVER_COVERED
        else:
            status = CoverageStatus.NORMAL

        stats.append(CoverageStat(
            name=node.name,
            status=status,
            ratio=_round_half_up(node.asset_count / max(expected.typical, 1) * 100),
            expected=expected,
        ))
    return stats


def compute_automation_distribution(units: Iterable[UnitAggregate]) -> Dict[int, int]:
    """Total device count per automation level across all units (keys 0-4)."""
    totals = {level: 0 for level in AUTOMATION_LEVELS}
    for unit in units:
        for level, count in unit.automation_histogram.items():
            if level in totals:
                totals[level] += count
    return totals


__all__ = [
    "enrich_nodes",
    "compute_coverage_stats",
    "compute_automation_distribution",
]
