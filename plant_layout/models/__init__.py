"""Pydantic models for plant layout input and output.

Input:  AssetRecord (one row from asset canonization)
Output: LayoutResult and its parts (nodes, connections, zones, coverage)
"""

from .assets import (
    AssetCountRange,
    AssetRecord,
    UnitAggregate,
)
from .enums import (
    AUTOMATION_LEVELS,
    AutomationLevel,
    CoverageStatus,
    PerimeterSlot,
    RelationshipType,
)
from .layout import (
    BoundingBox,
    CoverageStat,
    LayoutNode,
    LayoutResult,
    LayoutSummary,
    Point,
    Relationship,
    RoutedConnection,
    ZoneBoundary,
)

__all__ = [
    # Input
    "AssetRecord",
    "AssetCountRange",
    "UnitAggregate",

    # Enumerations
    "AUTOMATION_LEVELS",
    "AutomationLevel",
    "CoverageStatus",
    "PerimeterSlot",
    "RelationshipType",

    # Output
    "BoundingBox",
    "CoverageStat",
    "LayoutNode",
    "LayoutResult",
    "LayoutSummary",
    "Point",
    "Relationship",
    "RoutedConnection",
    "ZoneBoundary",
]
