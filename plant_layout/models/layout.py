"""Layout result models: positioned buildings, routed connections, zones.

This module provides the schemas returned by the layout engine:
- Relationship: inferred link between two units (network, naming, production flow)
- LayoutNode: a building rectangle centred at (x, y) with display metadata
- ZoneBoundary: union bounding box of all buildings at one automation level
- RoutedConnection: a retained relationship with its orthogonal path
- LayoutResult: everything above plus coverage statistics and a summary

Serialization is deterministic (sorted keys, fixed float formatting from
json) so identical inputs yield byte-identical JSON and an identical etag.
"""

import hashlib
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .assets import AssetCountRange
from .enums import AUTOMATION_LEVELS, CoverageStatus, RelationshipType

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class BoundingBox(BaseModel):
    """Axis-aligned bounding box.

    Attributes:
        min_x: Minimum x coordinate
        max_x: Maximum x coordinate
        min_y: Minimum y coordinate
        max_y: Maximum y coordinate
    """

    min_x: float = Field(..., description="Minimum x coordinate")
    max_x: float = Field(..., description="Maximum x coordinate")
    min_y: float = Field(..., description="Minimum y coordinate")
    max_y: float = Field(..., description="Maximum y coordinate")

    @property
    def width(self) -> float:
        """Computed width of bounding box."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Computed height of bounding box."""
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        """Computed center point of bounding box."""
        return (
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def contains(self, other: "BoundingBox") -> bool:
        """Whether other lies inside this box (edges inclusive)."""
        return (
            self.min_x <= other.min_x
            and other.max_x <= self.max_x
            and self.min_y <= other.min_y
            and other.max_y <= self.max_y
        )

    def overlaps(self, other: "BoundingBox") -> bool:
        """Whether the two boxes share interior area."""
        return (
            self.min_x < other.max_x
            and other.min_x < self.max_x
            and self.min_y < other.max_y
            and other.min_y < self.max_y
        )

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float, padding: float = 0.0) -> "BoundingBox":
        """Bounding box of a rectangle centred at (x, y), grown by padding."""
        return cls(
            min_x=x - width / 2 - padding,
            max_x=x + width / 2 + padding,
            min_y=y - height / 2 - padding,
            max_y=y + height / 2 + padding,
        )


class Relationship(BaseModel):
    """Inferred relationship between two units."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from", description="Source unit name")
    target: str = Field(..., alias="to", description="Target unit name")
    type: RelationshipType
    strength: float = Field(..., description="Confidence in [0, 1]")
    material: Optional[str] = Field(None, description="Material moved (production flow only)")
    critical: Optional[bool] = Field(None, description="Critical path (production flow only)")
    evidence: str = Field(default="", description="Human-readable justification")

    @field_validator("strength")
    @classmethod
    def clamp_strength(cls, v: float) -> float:
        """Clamp strength into [0, 1]."""
        return max(0.0, min(1.0, float(v)))


class LayoutNode(BaseModel):
    """A positioned building representing one process unit."""

    name: str
    detected_type: Optional[str] = None
    asset_count: int = 0
    x: float = Field(..., description="Rectangle centre x")
    y: float = Field(..., description="Rectangle centre y")
    building_width: float
    building_height: float
    automation_level: int = Field(default=0, ge=0, le=4)
    roof_profile: str = "flat"
    radius: float = 20.0

    # Aggregated asset data
    subnets: List[str] = Field(default_factory=list)
    tag_prefixes: List[str] = Field(default_factory=list)
    device_types: List[str] = Field(default_factory=list)
    automation_histogram: Dict[int, int] = Field(default_factory=dict)
    dominant_automation_level: int = 0

    # Enrichment
    color: str = "#94a3b8"
    icon: str = "?"
    shape: str = "rectangle"
    criticality: str = "medium"
    expected_asset_range: Optional[AssetCountRange] = None
    coverage_ratio: Optional[float] = None
    is_overstaffed: bool = False
    is_understaffed: bool = False
    regulations: List[str] = Field(default_factory=list)
    safety_notes: Optional[str] = None

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox.from_rect(self.x, self.y, self.building_width, self.building_height)


class ZoneBoundary(BaseModel):
    """Automation-level zone drawn around all buildings at that level."""

    level: int = Field(..., ge=0, le=4)
    label: str
    color: str
    description: str = ""
    bounds: BoundingBox
    node_count: int = 0
    nodes: List[str] = Field(default_factory=list)


class RoutedConnection(BaseModel):
    """Relationship retained for display, with its orthogonal route."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from")
    target: str = Field(..., alias="to")
    type: RelationshipType
    strength: float
    material: Optional[str] = None
    critical: bool = False
    is_production_flow: bool = False
    path: List[Point] = Field(default_factory=list, description="Orthogonal waypoints")


class CoverageStat(BaseModel):
    """Observed asset count against the expected range for the unit type.

    ratio is the observed count as a whole percentage of the typical count.
    """

    name: str
    status: CoverageStatus
    ratio: Optional[int] = None
    expected: Optional[AssetCountRange] = None


class LayoutSummary(BaseModel):
    total_units: int = 0
    total_assets: int = 0
    production_flow_connections: int = 0
    network_connections: int = 0
    detected_types: List[str] = Field(default_factory=list)
    recognized_assets: int = 0
    unrecognized_assets: int = 0


def _empty_distribution() -> Dict[int, int]:
    return {level: 0 for level in AUTOMATION_LEVELS}


class LayoutResult(BaseModel):
    """Complete output of one layout computation.

    Attributes:
        nodes: Positioned and enriched buildings
        connections: Relationships above the display threshold, with paths
        relationships: Every inferred relationship
        zone_boundaries: One boundary per populated automation level (0 -> 4)
        coverage_stats: Per-unit coverage against the knowledge base
        automation_level_distribution: Device count per automation level
        summary: Aggregate counts
        industry: Industry the layout was computed for
        canvas: Canvas size (width, height)
    """

    nodes: List[LayoutNode] = Field(default_factory=list)
    connections: List[RoutedConnection] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    zone_boundaries: List[ZoneBoundary] = Field(default_factory=list)
    coverage_stats: List[CoverageStat] = Field(default_factory=list)
    automation_level_distribution: Dict[int, int] = Field(default_factory=_empty_distribution)
    summary: LayoutSummary = Field(default_factory=LayoutSummary)
    industry: str = ""
    canvas: Tuple[float, float] = (900.0, 550.0)

    def node(self, name: str) -> Optional[LayoutNode]:
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Export to a JSON-compatible dict using 'from'/'to' edge keys."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize with sorted keys for byte-stable output."""
        return json.dumps(self.to_dict(), sort_keys=True, indent=indent)

    def compute_etag(self) -> str:
        """SHA-256 of the canonical JSON form.

        Returns:
            64-character hex string
        """
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode()).hexdigest()

    def to_networkx_graph(self) -> nx.MultiDiGraph:
        """Export as a NetworkX MultiDiGraph.

        Nodes carry 'pos' ([x, y]), 'width', 'height' and the node's display
        attributes; one edge per relationship, keyed by its index in
        'relationships' and carrying the relationship type as 'type'.

        Returns:
            MultiDiGraph with one node per building
        """
        graph = nx.MultiDiGraph(industry=self.industry, canvas=list(self.canvas))
        for node in self.nodes:
            graph.add_node(
                node.name,
                pos=[node.x, node.y],
                width=node.building_width,
                height=node.building_height,
                detected_type=node.detected_type,
                automation_level=node.automation_level,
                asset_count=node.asset_count,
                color=node.color,
            )
        for index, rel in enumerate(self.relationships):
            if rel.source not in graph.nodes or rel.target not in graph.nodes:
                logger.warning(f"Relationship {rel.source} -> {rel.target} references unknown node")
                continue
            graph.add_edge(
                rel.source,
                rel.target,
                key=index,
                type=rel.type.value,
                strength=rel.strength,
                material=rel.material,
                critical=rel.critical,
                evidence=rel.evidence,
            )
        return graph


__all__ = [
    "Point",
    "BoundingBox",
    "Relationship",
    "LayoutNode",
    "ZoneBoundary",
    "RoutedConnection",
    "CoverageStat",
    "LayoutSummary",
    "LayoutResult",
]
