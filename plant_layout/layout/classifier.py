"""Unit name normalization and zone-type detection.

Unit names come from free-text asset fields ("Body Shop", "BODY-SHOP 2",
"Paint/Shop"). They are normalized to snake_case and matched against the
industry catalog by substring on the zone id, then on each alias, in catalog
order. The first match wins, so a unit never gets more than one type.
"""

import re
from typing import Optional

from plant_layout.knowledge.catalog import IndustryCatalog, ZoneTemplate

UNKNOWN_UNIT = "unknown"

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_REPEATED_UNDERSCORE = re.compile(r"_+")


def normalize_unit_name(name: Optional[str]) -> str:
    """Lowercase, non-alphanumerics to '_', collapse repeats, strip edges.

    Example:
        >>> normalize_unit_name("  Body-Shop (2) ")
        'body_shop_2'
    """
    if not name:
        return UNKNOWN_UNIT
    normalized = _NON_ALNUM.sub("_", name.lower())
    normalized = _REPEATED_UNDERSCORE.sub("_", normalized).strip("_")
    return normalized or UNKNOWN_UNIT


def _template_matches(normalized: str, template: ZoneTemplate) -> bool:
    if normalize_unit_name(template.zone_id) in normalized:
        return True
    return any(normalize_unit_name(alias) in normalized for alias in template.aliases)


def detect_unit_type(
    unit_name: Optional[str],
    industry_catalog: Optional[IndustryCatalog],
) -> Optional[str]:
    """Detect the zone type of a unit from its name.

    Args:
        unit_name: Raw or normalized unit name
        industry_catalog: Catalog to match against (None = unknown industry)

    Returns:
        Zone id of the first matching template, or None
    """
    if not unit_name or industry_catalog is None:
        return None

    normalized = normalize_unit_name(unit_name)
    for zone_id, template in industry_catalog.zones.items():
        if _template_matches(normalized, template):
            return zone_id
    return None


def matches_unit_type(
    unit_name: Optional[str],
    zone_id: str,
    industry_catalog: Optional[IndustryCatalog],
) -> bool:
    """Whether a unit name matches one specific zone type (id or alias)."""
    if not unit_name:
        return False

    normalized = normalize_unit_name(unit_name)
    if normalize_unit_name(zone_id) in normalized:
        return True

    template = industry_catalog.get(zone_id) if industry_catalog is not None else None
    if template is None:
        return False
    return any(normalize_unit_name(alias) in normalized for alias in template.aliases)


__all__ = [
    "UNKNOWN_UNIT",
    "normalize_unit_name",
    "detect_unit_type",
    "matches_unit_type",
]
