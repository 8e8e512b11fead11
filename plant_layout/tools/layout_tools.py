"""MCP tools for plant layout computation.

Provides tools to:
- Compute a plant layout from asset records (grid engine)
- Route a single orthogonal connection between two points
- Inspect the industry knowledge base
- Generate reproducible synthetic asset sets (optionally laid out)

Tool arguments are validated with pydantic models; every handler returns the
standard {"ok": ..., "data"|"error": ...} envelope.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp import Tool
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config.settings import LayoutSettings, load_settings
from ..generators.synthetic_assets import generate_plant_assets
from ..knowledge.catalog import KnowledgeBase, get_knowledge_base
from ..layout.engines import get_engine
from ..layout.routing import compute_orthogonal_path
from ..utils.response import (
    TOOL_ERROR,
    UNKNOWN_TOOL,
    error_response,
    invalid_arguments_response,
    success_response,
)

logger = logging.getLogger(__name__)


class GenerateLayoutArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    assets: List[Any] = Field(default_factory=list)
    industry: str = "automotive"
    width: Optional[float] = None
    height: Optional[float] = None
    engine: str = "grid"
    include_relationships: bool = True


class RouteArgs(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class CatalogArgs(BaseModel):
    industry: Optional[str] = None


class SyntheticArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    plant_name: str = Field(..., min_length=1)
    industry: str = "automotive"
    area_names: Optional[List[str]] = None
    min_assets: int = Field(default=10, ge=0)
    max_assets: int = Field(default=60, ge=0)
    layout: bool = False
    width: Optional[float] = None
    height: Optional[float] = None


class PlantLayoutTools:
    """Provides plant layout MCP tools."""

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        settings: Optional[LayoutSettings] = None,
    ):
        """Initialize with a knowledge base and layout settings.

        Args:
            knowledge_base: Industry catalogs (defaults to the packaged knowledge base)
            settings: Layout constants (defaults to load_settings())
        """
        self.knowledge_base = knowledge_base or get_knowledge_base()
        self.settings = settings or load_settings()

    def get_tools(self) -> List[Tool]:
        """Return plant layout MCP tools."""
        return [
            Tool(
                name="plant_layout_generate",
                description="Compute a deterministic 2D plant layout from asset records: building rectangles, inferred relationships, automation zones and orthogonal connection routes.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "assets": {
                            "type": "array",
                            "items": {"type": "object"},
                            "description": "Asset records (unit/area/location, ip_address, tag_id, device_type)"
                        },
                        "industry": {
                            "type": "string",
                            "description": "Industry catalog id",
                            "default": "automotive"
                        },
                        "width": {
                            "type": "number",
                            "description": "Canvas width in pixels (default 900)"
                        },
                        "height": {
                            "type": "number",
                            "description": "Canvas height in pixels (default 550)"
                        },
                        "engine": {
                            "type": "string",
                            "enum": ["grid"],
                            "default": "grid"
                        },
                        "include_relationships": {
                            "type": "boolean",
                            "description": "Include every inferred relationship, not only routed connections",
                            "default": True
                        }
                    },
                    "required": ["assets"]
                }
            ),
            Tool(
                name="plant_layout_route",
                description="Compute an orthogonal (right-angle) path between two points",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "x1": {"type": "number"},
                        "y1": {"type": "number"},
                        "x2": {"type": "number"},
                        "y2": {"type": "number"}
                    },
                    "required": ["x1", "y1", "x2", "y2"]
                }
            ),
            Tool(
                name="plant_layout_catalog",
                description="List industries, or describe one industry's zone templates and production flow",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "industry": {
                            "type": "string",
                            "description": "Industry catalog id (omit to list all)"
                        }
                    }
                }
            ),
            Tool(
                name="plant_layout_synthetic",
                description="Generate a reproducible synthetic asset set for a plant, optionally with its layout",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "plant_name": {
                            "type": "string",
                            "description": "Plant name; also the random seed"
                        },
                        "industry": {
                            "type": "string",
                            "default": "automotive"
                        },
                        "area_names": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Area names (defaults to the industry's zone names)"
                        },
                        "min_assets": {"type": "integer", "default": 10},
                        "max_assets": {"type": "integer", "default": 60},
                        "layout": {
                            "type": "boolean",
                            "description": "Also compute the layout of the generated assets",
                            "default": False
                        },
                        "width": {"type": "number"},
                        "height": {"type": "number"}
                    },
                    "required": ["plant_name"]
                }
            ),
        ]

    async def handle_tool(self, name: str, arguments: dict) -> dict:
        """Route tool call to appropriate handler.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Standardized response
        """
        handlers = {
            "plant_layout_generate": self._generate_layout,
            "plant_layout_route": self._route,
            "plant_layout_catalog": self._catalog,
            "plant_layout_synthetic": self._synthetic,
        }

        handler = handlers.get(name)
        if not handler:
            return error_response(f"Unknown plant layout tool: {name}", code=UNKNOWN_TOOL)

        try:
            return await handler(arguments or {})
        except ValidationError as e:
            logger.info(f"Invalid arguments for {name}: {e.error_count()} error(s)")
            return invalid_arguments_response(name, e)
        except Exception as e:
            logger.error(f"Error in {name}: {e}", exc_info=True)
            return error_response(str(e), code=TOOL_ERROR)

    def _run_engine(self, engine_name: str, assets: List[Any], options: Dict[str, Any]):
        engine_cls = get_engine(engine_name)
        engine = engine_cls(knowledge_base=self.knowledge_base, settings=self.settings)
        return engine.layout(assets, options)

    async def _generate_layout(self, args: dict) -> dict:
        """Compute a layout for the given assets."""
        params = GenerateLayoutArgs(**args)
        result = self._run_engine(
            params.engine,
            params.assets,
            {"industry": params.industry, "width": params.width, "height": params.height},
        )

        data = result.to_dict()
        if not params.include_relationships:
            data.pop("relationships", None)

        warnings = []
        if self.knowledge_base.get_industry(params.industry) is None:
            warnings.append(f"Unknown industry '{params.industry}'; all units left unclassified")

        return success_response(data, warnings=warnings, etag=result.compute_etag())

    async def _route(self, args: dict) -> dict:
        """Orthogonal path between two points."""
        params = RouteArgs(**args)
        path = compute_orthogonal_path(params.x1, params.y1, params.x2, params.y2)
        return success_response({"path": [list(point) for point in path]})

    async def _catalog(self, args: dict) -> dict:
        """List industries or describe one catalog."""
        params = CatalogArgs(**args)
        kb = self.knowledge_base

        if not params.industry:
            return success_response({
                "industries": [
                    {"industry": c.industry, "name": c.name, "zone_count": len(c.zones)}
                    for c in kb.industries.values()
                ],
                "automation_levels": [z.model_dump(mode="json") for z in kb.automation_levels],
            })

        catalog = kb.get_industry(params.industry)
        if catalog is None:
            return error_response(
                f"Unknown industry: {params.industry}",
                code=TOOL_ERROR,
                details={"available": list(kb.industries)},
            )
        return success_response(catalog.model_dump(mode="json", by_alias=True))

    async def _synthetic(self, args: dict) -> dict:
        """Generate synthetic assets (and optionally their layout)."""
        params = SyntheticArgs(**args)
        assets = generate_plant_assets(
            params.plant_name,
            industry=params.industry,
            area_names=params.area_names,
            min_assets=params.min_assets,
            max_assets=params.max_assets,
            knowledge_base=self.knowledge_base,
        )

        data: Dict[str, Any] = {
            "plant_name": params.plant_name,
            "asset_count": len(assets),
            "assets": [a.model_dump(mode="json", exclude_none=True) for a in assets],
        }
        if not params.layout:
            return success_response(data)

        result = self._run_engine(
            "grid",
            assets,
            {"industry": params.industry, "width": params.width, "height": params.height},
        )
        data["layout"] = result.to_dict()
        return success_response(data, etag=result.compute_etag())
