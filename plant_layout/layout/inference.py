"""Relationship inference from raw asset records.

Assets are grouped into units by normalized name. Three independent signals
link units:

- network: units sharing a /24 subnet (first three IPv4 octets)
- naming: units sharing an instrument tag prefix ("PLC-", "FT", ...)
- production_flow: catalog flow steps whose endpoints match two units

Every signal is emitted as its own Relationship; nothing is merged.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from plant_layout.knowledge.catalog import IndustryCatalog
from plant_layout.layout.classifier import matches_unit_type, normalize_unit_name
from plant_layout.models.assets import AssetRecord, UnitAggregate
from plant_layout.models.enums import AUTOMATION_LEVELS, RelationshipType
from plant_layout.models.layout import Relationship

logger = logging.getLogger(__name__)

NETWORK_STRENGTH_PER_SUBNET = 0.3
NAMING_STRENGTH_PER_PREFIX = 0.2
NAMING_STRENGTH_CAP = 0.6

_TAG_PREFIX = re.compile(r"^([A-Z]{2,6}[-_]?\d{0,2})", re.IGNORECASE)

# Checked in order; the first matching level wins
_AUTOMATION_KEYWORDS: List[Tuple[int, re.Pattern]] = [
    (0, re.compile(r"sensor|transmitter|actuator|valve|drive|vfd|motor|servo")),
    (1, re.compile(r"plc|dcs|safety|controller|rtu")),
    (2, re.compile(r"hmi|scada|workstation|ews|camera|vision")),
    (3, re.compile(r"historian|mes|server|database")),
    (4, re.compile(r"erp|email|domain")),
]


def get_subnet(ip_address: Optional[str]) -> Optional[str]:
    """First three octets of a dotted four-part address ('10.0.1.5' -> '10.0.1')."""
    if not ip_address:
        return None
    parts = ip_address.split(".")
    if len(parts) != 4:
        return None
    return ".".join(parts[:3])


def get_tag_prefix(tag_id: Optional[str]) -> Optional[str]:
    if not tag_id:
        return None
    match = _TAG_PREFIX.match(tag_id)
    return match.group(1).upper() if match else None


def classify_automation_level(device_type: str) -> int:
    """Map a device type to an automation (Purdue) level by keyword.

    Unrecognized device types count as field level 0.
    """
    text = device_type.lower()
    for level, pattern in _AUTOMATION_KEYWORDS:
        if pattern.search(text):
            return level
    return 0


class _UnitAccumulator:
    def __init__(self, name: str):
        self.name = name
        self.asset_count = 0
        self.subnets: Set[str] = set()
        self.tag_prefixes: Set[str] = set()
        self.device_types: Set[str] = set()
        self.histogram: Dict[int, int] = {level: 0 for level in AUTOMATION_LEVELS}

    def add(self, asset: AssetRecord) -> None:
        self.asset_count += 1

        subnet = get_subnet(asset.ip_address)
        if subnet:
            self.subnets.add(subnet)

        prefix = get_tag_prefix(asset.tag_id)
        if prefix:
            self.tag_prefixes.add(prefix)

        if asset.device_type:
            device_type = asset.device_type.lower()
            self.device_types.add(device_type)
            self.histogram[classify_automation_level(device_type)] += 1

    def to_aggregate(self) -> UnitAggregate:
        return UnitAggregate(
            name=self.name,
            asset_count=self.asset_count,
            subnets=sorted(self.subnets),
            tag_prefixes=sorted(self.tag_prefixes),
            device_types=sorted(self.device_types),
            automation_histogram=dict(self.histogram),
        )


def aggregate_units(assets: Iterable[Any]) -> List[UnitAggregate]:
    """Group assets by normalized unit name; units are returned sorted by name."""
    accumulators: Dict[str, _UnitAccumulator] = {}
    for raw in assets or []:
        asset = AssetRecord.from_raw(raw)
        name = normalize_unit_name(asset.unit_label)
        if name not in accumulators:
            accumulators[name] = _UnitAccumulator(name)
        accumulators[name].add(asset)

    return [accumulators[name].to_aggregate() for name in sorted(accumulators)]


def _shared_signal_relationships(
    units: List[UnitAggregate],
    attribute: str,
    rel_type: RelationshipType,
    per_item: float,
    cap: float,
    label: str,
) -> List[Relationship]:
    relationships = []
    for i, a in enumerate(units):
        a_items = set(getattr(a, attribute))
        for b in units[i + 1:]:
            shared = sorted(a_items.intersection(getattr(b, attribute)))
            if not shared:
                continue
            relationships.append(Relationship(
                source=a.name,
                target=b.name,
                type=rel_type,
                strength=min(per_item * len(shared), cap),
                evidence=f"Shared {label}: {', '.join(shared)}",
            ))
    return relationships


def _production_flow_relationships(
    units: List[UnitAggregate],
    industry_catalog: IndustryCatalog,
) -> List[Relationship]:
    relationships = []
    for edge in industry_catalog.production_flow:
        source = next(
            (u for u in units if matches_unit_type(u.name, edge.source, industry_catalog)),
            None,
        )
        target = next(
            (u for u in units if matches_unit_type(u.name, edge.target, industry_catalog)),
            None,
        )
        if source is None or target is None:
            continue
        if source.name == target.name:
            logger.debug(f"Skipping flow {edge.source} -> {edge.target}: both ends match '{source.name}'")
            continue

        relationships.append(Relationship(
            source=source.name,
            target=target.name,
            type=RelationshipType.PRODUCTION_FLOW,
            strength=edge.strength,
            material=edge.material,
            critical=edge.critical,
            evidence=f"{industry_catalog.name} production flow: {edge.source} -> {edge.target}",
        ))
    return relationships


def infer_unit_relationships(
    assets: Iterable[Any],
    industry_catalog: Optional[IndustryCatalog],
) -> Tuple[List[UnitAggregate], List[Relationship]]:
    """Aggregate assets into units and infer relationships between them.

    Args:
        assets: AssetRecords or plain dicts (malformed entries degrade to defaults)
        industry_catalog: Catalog for production-flow edges (None = no flow edges)

    Returns:
        Tuple of (units sorted by name, relationships in network, naming,
        production-flow order)
    """
    units = aggregate_units(assets)

    relationships = _shared_signal_relationships(
        units, "subnets", RelationshipType.NETWORK,
        NETWORK_STRENGTH_PER_SUBNET, 1.0, "subnets",
    )
    relationships += _shared_signal_relationships(
        units, "tag_prefixes", RelationshipType.NAMING,
        NAMING_STRENGTH_PER_PREFIX, NAMING_STRENGTH_CAP, "tag prefixes",
    )
    if industry_catalog is not None:
        relationships += _production_flow_relationships(units, industry_catalog)

    logger.debug(f"Inferred {len(relationships)} relationships across {len(units)} units")
    return units, relationships


__all__ = [
    "get_subnet",
    "get_tag_prefix",
    "classify_automation_level",
    "aggregate_units",
    "infer_unit_relationships",
]
