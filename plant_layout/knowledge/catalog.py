"""Industry knowledge base: zone templates, production flows, automation levels.

The knowledge base is static, versioned configuration shipped as YAML under
``plant_layout/config/``. It is loaded once at process start and passed by
reference into every layout call. All models are frozen; the engine never
mutates them.

File layout:
    config/automation_levels.yaml   - the 5-entry ISA-95 level table
    config/industries/<id>.yaml     - one catalog per industry

Catalog order matters: zone templates are matched against unit names in
document order and the first match wins.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from plant_layout.models.assets import AssetCountRange
from plant_layout.models.enums import PerimeterSlot

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


class KnowledgeBaseError(ValueError):
    """Raised when knowledge base files are missing or invalid."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid knowledge base file {path}: {reason}")


class ZoneTemplate(BaseModel):
    """Known process-area type for one industry.

    Placement hints:
        row 0 = perimeter, row 1 = main production flow, row >= 2 = feeders
        col   = position along the production flow
        flow_order = tie-break order within a row/column
    """

    model_config = ConfigDict(frozen=True)

    zone_id: str = Field(..., description="Catalog key, e.g. 'body_shop'")
    name: str = Field(..., description="Display name")
    aliases: Tuple[str, ...] = Field(default=(), description="Alternate names matched as substrings")
    criticality: str = Field(default="medium")
    description: Optional[str] = None
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    flow_order: float = Field(default=99.0)
    perimeter_slot: Optional[PerimeterSlot] = None
    automation_level: int = Field(..., ge=0, le=4)
    building_aspect: float = Field(..., gt=0, description="Width:depth ratio")
    typical_floor_area_m2: float = Field(..., gt=0)
    roof_profile: str = Field(default="flat")
    typical_asset_count: Optional[AssetCountRange] = None
    regulations: Tuple[str, ...] = ()
    safety_notes: Optional[str] = None
    color: str = Field(default="#94a3b8")
    icon: str = Field(default="?")
    shape: str = Field(default="rectangle")

    @property
    def slot(self) -> PerimeterSlot:
        """Perimeter slot, defaulting by column."""
        if self.perimeter_slot is not None:
            return self.perimeter_slot
        return PerimeterSlot.UPPER_LEFT if self.col == 0 else PerimeterSlot.LOWER_RIGHT


class FlowEdge(BaseModel):
    """Directed production-flow step between two zone types."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(..., alias="from")
    target: str = Field(..., alias="to")
    strength: float = Field(..., ge=0, le=1)
    material: Optional[str] = None
    critical: bool = False


class IndustryCatalog(BaseModel):
    """Zone templates and production flow for one industry."""

    model_config = ConfigDict(frozen=True)

    industry: str
    name: str
    zones: Dict[str, ZoneTemplate] = Field(default_factory=dict)
    production_flow: Tuple[FlowEdge, ...] = ()

    @model_validator(mode="after")
    def check_flow_endpoints(self) -> "IndustryCatalog":
        for edge in self.production_flow:
            for endpoint in (edge.source, edge.target):
                if endpoint not in self.zones:
                    raise ValueError(
                        f"Production flow references unknown zone '{endpoint}'"
                    )
        return self

    def get(self, zone_id: Optional[str]) -> Optional[ZoneTemplate]:
        if zone_id is None:
            return None
        return self.zones.get(zone_id)


class AutomationZone(BaseModel):
    """Label and colour for one automation level."""

    model_config = ConfigDict(frozen=True)

    id: str
    level: int = Field(..., ge=0, le=4)
    label: str
    color: str
    description: str = ""


def find_automation_zone(automation_levels: Sequence[AutomationZone], level: int) -> AutomationZone:
    """Level table entry for a level; unknown levels render as the highest level."""
    for zone in automation_levels:
        if zone.level == level:
            return zone
    return max(automation_levels, key=lambda zone: zone.level)


class KnowledgeBase(BaseModel):
    """All industry catalogs plus the automation level table."""

    model_config = ConfigDict(frozen=True)

    industries: Dict[str, IndustryCatalog] = Field(default_factory=dict)
    automation_levels: Tuple[AutomationZone, ...] = ()

    @model_validator(mode="after")
    def check_levels(self) -> "KnowledgeBase":
        levels = sorted(zone.level for zone in self.automation_levels)
        if levels != [0, 1, 2, 3, 4]:
            raise ValueError(f"Automation level table must cover levels 0-4, got {levels}")
        return self

    def get_industry(self, industry: Optional[str]) -> Optional[IndustryCatalog]:
        """Look up a catalog; 'Oil_Gas' and 'oil-gas' resolve to the same entry."""
        if not industry:
            return None
        key = industry.strip().lower()
        return self.industries.get(key) or self.industries.get(key.replace("_", "-"))

    def automation_zone(self, level: int) -> AutomationZone:
        return find_automation_zone(self.automation_levels, level)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise KnowledgeBaseError(path, f"cannot read file ({e})") from e
    except yaml.YAMLError as e:
        raise KnowledgeBaseError(path, f"YAML parse error ({e})") from e

    if not isinstance(data, dict):
        raise KnowledgeBaseError(path, "top level must be a mapping")
    return data


def load_industry_catalog(path: Path) -> IndustryCatalog:
    """Load one industry catalog from YAML.

    Args:
        path: Path to the industry YAML file

    Returns:
        Validated IndustryCatalog

    Raises:
        KnowledgeBaseError: If the file is unreadable or fails validation
    """
    data = _read_yaml(path)
    zones_raw = data.get("zones") or {}
    if not isinstance(zones_raw, dict):
        raise KnowledgeBaseError(path, "'zones' must be a mapping")

    try:
        zones = {
            zone_id: ZoneTemplate(zone_id=zone_id, **(fields or {}))
            for zone_id, fields in zones_raw.items()
        }
        return IndustryCatalog(
            industry=data.get("industry") or path.stem,
            name=data.get("name") or path.stem,
            zones=zones,
            production_flow=[FlowEdge(**edge) for edge in data.get("production_flow") or []],
        )
    except (ValidationError, TypeError) as e:
        raise KnowledgeBaseError(path, str(e)) from e


def load_knowledge_base(config_dir: Optional[Path] = None) -> KnowledgeBase:
    """Load the automation level table and every industry catalog.

    Args:
        config_dir: Directory holding automation_levels.yaml and industries/
            (defaults to the packaged configuration)

    Returns:
        KnowledgeBase

    Raises:
        KnowledgeBaseError: If any file is missing or invalid
    """
    base = Path(config_dir) if config_dir is not None else CONFIG_DIR

    levels_path = base / "automation_levels.yaml"
    levels_data = _read_yaml(levels_path)

    industries: Dict[str, IndustryCatalog] = {}
    industry_dir = base / "industries"
    for path in sorted(industry_dir.glob("*.yaml")):
        catalog = load_industry_catalog(path)
        industries[catalog.industry] = catalog
        logger.debug(
            f"Loaded industry catalog '{catalog.industry}' "
            f"({len(catalog.zones)} zones, {len(catalog.production_flow)} flows)"
        )

    try:
        kb = KnowledgeBase(
            industries=industries,
            automation_levels=[AutomationZone(**z) for z in levels_data.get("levels") or []],
        )
    except (ValidationError, TypeError) as e:
        raise KnowledgeBaseError(levels_path, str(e)) from e

    logger.info(f"Knowledge base loaded: {sorted(industries)}")
    return kb


@lru_cache(maxsize=1)
def get_knowledge_base() -> KnowledgeBase:
    """Process-wide knowledge base loaded from the packaged configuration."""
    return load_knowledge_base()


def list_industries(kb: Optional[KnowledgeBase] = None) -> List[str]:
    kb = kb or get_knowledge_base()
    return list(kb.industries)


__all__ = [
    "KnowledgeBaseError",
    "AssetCountRange",
    "ZoneTemplate",
    "FlowEdge",
    "IndustryCatalog",
    "AutomationZone",
    "find_automation_zone",
    "KnowledgeBase",
    "load_industry_catalog",
    "load_knowledge_base",
    "get_knowledge_base",
    "list_industries",
]
