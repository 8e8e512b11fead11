"""Static industry knowledge base used by the layout engine."""

from plant_layout.knowledge.catalog import (
    AssetCountRange,
    AutomationZone,
    FlowEdge,
    IndustryCatalog,
    KnowledgeBase,
    KnowledgeBaseError,
    ZoneTemplate,
    find_automation_zone,
    get_knowledge_base,
    list_industries,
    load_industry_catalog,
    load_knowledge_base,
)

__all__ = [
    "AssetCountRange",
    "AutomationZone",
    "FlowEdge",
    "IndustryCatalog",
    "KnowledgeBase",
    "KnowledgeBaseError",
    "ZoneTemplate",
    "find_automation_zone",
    "get_knowledge_base",
    "list_industries",
    "load_industry_catalog",
    "load_knowledge_base",
]
