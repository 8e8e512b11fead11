"""Orthogonal (Manhattan) routing of connections between building centres."""

import logging
from typing import Dict, List, Optional, Sequence

from plant_layout.models.enums import RelationshipType
from plant_layout.models.layout import LayoutNode, Point, Relationship, RoutedConnection

logger = logging.getLogger(__name__)


def compute_orthogonal_path(x1: float, y1: float, x2: float, y2: float) -> List[Point]:
    """Right-angle path between two points with a single dog-leg.

    Mostly horizontal links run horizontal-vertical-horizontal through the
    x midpoint; everything else runs vertical-horizontal-vertical through the
    y midpoint.

    Args:
        x1, y1: Start point
        x2, y2: End point

    Returns:
        Four waypoints; consecutive waypoints share an x or a y coordinate

    Example:
        >>> compute_orthogonal_path(0, 0, 100, 20)
        [(0, 0), (50.0, 0), (50.0, 20), (100, 20)]
    """
    dx = x2 - x1
    dy = y2 - y1

    if abs(dx) > abs(dy):
        mid_x = x1 + dx / 2
        return [(x1, y1), (mid_x, y1), (mid_x, y2), (x2, y2)]

    mid_y = y1 + dy / 2
    return [(x1, y1), (x1, mid_y), (x2, mid_y), (x2, y2)]


def route_connections(
    relationships: Sequence[Relationship],
    nodes: Sequence[LayoutNode],
    min_strength: float = 0.25,
) -> List[RoutedConnection]:
    """Keep relationships stronger than min_strength and route them.

    Args:
        relationships: Inferred relationships
        nodes: Positioned nodes (endpoints are looked up by name)
        min_strength: Exclusive strength threshold for display

    Returns:
        Routed connections in relationship order
    """
    by_name: Dict[str, LayoutNode] = {node.name: node for node in nodes}

    connections = []
    for rel in relationships:
        if rel.strength <= min_strength:
            continue

        source: Optional[LayoutNode] = by_name.get(rel.source)
        target: Optional[LayoutNode] = by_name.get(rel.target)
        path: List[Point] = []
        if source is not None and target is not None:
            path = compute_orthogonal_path(source.x, source.y, target.x, target.y)
        else:
            logger.warning(f"Cannot route {rel.source} -> {rel.target}: endpoint not placed")

        connections.append(RoutedConnection(
            source=rel.source,
            target=rel.target,
            type=rel.type,
            strength=rel.strength,
            material=rel.material,
            critical=bool(rel.critical),
            is_production_flow=rel.type == RelationshipType.PRODUCTION_FLOW,
            path=path,
        ))
    return connections


__all__ = ["compute_orthogonal_path", "route_connections"]
