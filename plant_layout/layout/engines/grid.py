"""Deterministic grid layout engine.

Runs the full plant layout pipeline:

    assets -> units + relationships      (inference)
           -> initial positions          (placement)
           -> non-overlapping positions  (collisions)
           -> enriched nodes             (enrichment)
           -> connections, zones, stats  (routing, zones, enrichment)

The engine is a pure function of its inputs. No randomness, no clock, no
I/O: identical assets and options give byte-identical LayoutResult JSON.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from plant_layout.config.settings import LayoutSettings, load_settings
from plant_layout.knowledge.catalog import KnowledgeBase, get_knowledge_base
from plant_layout.layout.collisions import resolve_collisions
from plant_layout.layout.engines.base import LayoutEngine
from plant_layout.layout.enrichment import (
    compute_automation_distribution,
    compute_coverage_stats,
    enrich_nodes,
)
from plant_layout.layout.inference import infer_unit_relationships
from plant_layout.layout.placement import place_units
from plant_layout.layout.routing import route_connections
from plant_layout.layout.zones import compute_zone_boundaries
from plant_layout.models.enums import RelationshipType
from plant_layout.models.layout import LayoutNode, LayoutResult, LayoutSummary, RoutedConnection

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = "automotive"


class LayoutOptions(BaseModel):
    """Options for one layout call.

    Attributes:
        industry: Industry catalog to classify units against
        width: Canvas width in pixels (None or non-positive = settings default)
        height: Canvas height in pixels (None or non-positive = settings default)
    """

    model_config = ConfigDict(extra="ignore")

    industry: str = Field(default=DEFAULT_INDUSTRY, description="Industry catalog id")
    width: Optional[float] = Field(default=None, description="Canvas width in pixels")
    height: Optional[float] = Field(default=None, description="Canvas height in pixels")

    @field_validator("industry", mode="before")
    @classmethod
    def coerce_industry(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list, tuple, set)):
            return DEFAULT_INDUSTRY
        text = str(v).strip().lower()
        return text or DEFAULT_INDUSTRY

    @field_validator("width", "height", mode="before")
    @classmethod
    def positive_or_none(cls, v: Any) -> Optional[float]:
        """Non-numeric or non-positive sizes fall back to the default canvas."""
        if v is None or isinstance(v, bool):
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        if value != value or value <= 0 or value == float("inf"):
            return None
        return value

    @classmethod
    def from_raw(cls, options: Union["LayoutOptions", Dict[str, Any], None]) -> "LayoutOptions":
        if isinstance(options, LayoutOptions):
            return options
        if not isinstance(options, dict):
            return cls()
        return cls(**{str(k): v for k, v in options.items()})


def _as_asset_list(assets: Any) -> List[Any]:
    if assets is None:
        return []
    if isinstance(assets, (list, tuple)):
        return list(assets)
    if isinstance(assets, dict):
        return [assets]
    try:
        return list(assets)
    except TypeError:
        logger.warning(f"Ignoring non-iterable assets input of type {type(assets).__name__}")
        return []


def _summarize(
    units_total: int,
    assets_total: int,
    nodes: List[LayoutNode],
    connections: List[RoutedConnection],
) -> LayoutSummary:
    detected_types: List[str] = []
    for node in nodes:
        if node.detected_type and node.detected_type not in detected_types:
            detected_types.append(node.detected_type)

    return LayoutSummary(
        total_units=units_total,
        total_assets=assets_total,
        production_flow_connections=sum(1 for c in connections if c.is_production_flow),
        network_connections=sum(1 for c in connections if c.type == RelationshipType.NETWORK),
        detected_types=detected_types,
        recognized_assets=sum(n.asset_count for n in nodes if n.detected_type),
        unrecognized_assets=sum(n.asset_count for n in nodes if not n.detected_type),
    )


class GridLayoutEngine(LayoutEngine):
    """Production-flow grid layout with collision resolution.

    Example:
        >>> engine = GridLayoutEngine()
        >>> result = engine.layout(assets, {"industry": "automotive"})
        >>> [n.name for n in result.nodes]
        ['stamping', 'body_shop', 'paint_shop']
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        settings: Optional[LayoutSettings] = None,
    ):
        """Initialize the engine.

        Args:
            knowledge_base: Industry catalogs (defaults to the packaged knowledge base)
            settings: Layout constants (defaults to load_settings())
        """
        self.knowledge_base = knowledge_base or get_knowledge_base()
        self.settings = settings or load_settings()

    @property
    def name(self) -> str:
        return "grid"

    @property
    def supports_orthogonal_routing(self) -> bool:
        return True

    def layout(
        self,
        assets: Iterable[Any],
        options: Optional[Union[LayoutOptions, Dict[str, Any]]] = None,
    ) -> LayoutResult:
        """Compute a complete plant layout.

        Args:
            assets: AssetRecords or plain dicts; malformed entries degrade to defaults
            options: LayoutOptions or dict with industry/width/height

        Returns:
            LayoutResult (empty lists, never None, for an empty input)
        """
        opts = LayoutOptions.from_raw(options)
        settings = self.settings
        width = opts.width or settings.default_width
        height = opts.height or settings.default_height

        catalog = self.knowledge_base.get_industry(opts.industry)
        if catalog is None:
            logger.warning(f"Unknown industry '{opts.industry}'; all units left unclassified")

        asset_list = _as_asset_list(assets)
        units, relationships = infer_unit_relationships(asset_list, catalog)

        placed = place_units(units, catalog, width, height, settings)
        resolve_collisions(placed, width, height, settings)

        max_assets = max((u.asset_count for u in units), default=0)
        nodes = enrich_nodes(placed, catalog, max_assets)

        connections = route_connections(relationships, nodes, settings.connection_min_strength)
        zone_boundaries = compute_zone_boundaries(
            nodes, self.knowledge_base.automation_levels, settings.zone_padding
        )

        result = LayoutResult(
            nodes=nodes,
            connections=connections,
            relationships=relationships,
            zone_boundaries=zone_boundaries,
            coverage_stats=compute_coverage_stats(nodes),
            automation_level_distribution=compute_automation_distribution(units),
            summary=_summarize(len(units), len(asset_list), nodes, connections),
            industry=catalog.industry if catalog is not None else opts.industry,
            canvas=(width, height),
        )

        logger.info(
            f"Layout computed: {len(nodes)} buildings, {len(connections)} connections, "
            f"{len(zone_boundaries)} zones ({result.industry}, {width:g}x{height:g})"
        )
        return result


def generate_layout(
    assets: Iterable[Any],
    options: Optional[Union[LayoutOptions, Dict[str, Any]]] = None,
    *,
    knowledge_base: Optional[KnowledgeBase] = None,
    settings: Optional[LayoutSettings] = None,
) -> LayoutResult:
    """Generate a plant layout with the grid engine.

    Args:
        assets: AssetRecords or plain dicts
        options: LayoutOptions or dict (industry, width, height)
        knowledge_base: Industry catalogs (defaults to the packaged knowledge base)
        settings: Layout constants (defaults to load_settings())

    Returns:
        LayoutResult
    """
    engine = GridLayoutEngine(knowledge_base=knowledge_base, settings=settings)
    return engine.layout(assets, options)


__all__ = [
    "DEFAULT_INDUSTRY",
    "LayoutOptions",
    "GridLayoutEngine",
    "generate_layout",
]
