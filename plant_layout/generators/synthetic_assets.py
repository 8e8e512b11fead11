"""Reproducible synthetic asset sets for demos and tests.

Every value is drawn from a Mulberry32 generator seeded with the plant name,
so the same plant name always yields the same assets (and therefore the same
layout). Each area gets its own /24 subnet and its own tag prefix, so areas
are only linked by production flow unless callers reuse names.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from plant_layout.knowledge.catalog import KnowledgeBase, get_knowledge_base
from plant_layout.models.assets import AssetRecord
from plant_layout.utils.seeded_random import Mulberry32, hash_string

logger = logging.getLogger(__name__)

# (device type, relative weight); automation level follows from the type name
DEVICE_MIX: Tuple[Tuple[str, float], ...] = (
    ("Pressure Transmitter", 18),
    ("Temperature Sensor", 14),
    ("Control Valve", 10),
    ("VFD", 10),
    ("Servo Drive", 8),
    ("PLC", 12),
    ("Safety PLC", 4),
    ("HMI Panel", 9),
    ("Vision System", 4),
    ("Engineering Workstation", 2),
    ("Historian", 3),
    ("MES Server", 3),
    ("ERP Gateway", 1),
)

MISSING_IP_PROBABILITY = 0.1


def _tag_letters(area_name: str) -> str:
    letters = "".join(ch for ch in area_name.upper() if "A" <= ch <= "Z")
    return letters[:3] if len(letters) >= 2 else "UN"


def _area_assets(
    rng: Mulberry32,
    plant_name: str,
    area_name: str,
    area_index: int,
    count: int,
    network_octet: int,
) -> List[AssetRecord]:
    letters = _tag_letters(area_name)
    subnet = f"10.{network_octet}.{area_index % 250 + 1}"
    types = [device for device, _ in DEVICE_MIX]
    weights = [weight for _, weight in DEVICE_MIX]

    assets = []
    for device_no in range(count):
        device_type = rng.sample_weighted(types, weights)
        ip_address = None
        if rng.random() >= MISSING_IP_PROBABILITY:
            ip_address = f"{subnet}.{device_no % 254 + 1}"

        assets.append(AssetRecord(
            unit=area_name,
            area=area_name,
            tag_id=f"{letters}{area_index % 100:02d}-{device_no + 1:04d}",
            device_type=device_type,
            ip_address=ip_address,
            plant=plant_name,
        ))
    return assets


def generate_plant_assets(
    plant_name: str,
    industry: Optional[str] = "automotive",
    area_names: Optional[Sequence[str]] = None,
    min_assets: int = 10,
    max_assets: int = 60,
    knowledge_base: Optional[KnowledgeBase] = None,
) -> List[AssetRecord]:
    """Generate a deterministic asset set for one plant.

    Args:
        plant_name: Seed material; same name -> same assets
        industry: Catalog used for default area names when area_names is None
        area_names: Explicit area names (overrides the catalog's zone names)
        min_assets: Minimum assets per area (inclusive)
        max_assets: Maximum assets per area (inclusive)
        knowledge_base: Industry catalogs (defaults to the packaged knowledge base)

    Returns:
        AssetRecords grouped by area in area order

    Example:
        >>> assets = generate_plant_assets("Georgetown", "automotive")
        >>> assets == generate_plant_assets("Georgetown", "automotive")
        True
    """
    if area_names is None:
        kb = knowledge_base or get_knowledge_base()
        catalog = kb.get_industry(industry)
        if catalog is None:
            logger.warning(f"No catalog for industry '{industry}' and no area names; nothing generated")
            return []
        area_names = [template.name for template in catalog.zones.values()]

    low, high = sorted((max(0, min_assets), max(0, max_assets)))
    seed = hash_string(plant_name)
    rng = Mulberry32(seed)
    network_octet = 10 + seed % 200

    assets: List[AssetRecord] = []
    for index, area_name in enumerate(area_names):
        count = rng.randint(low, high)
        assets.extend(_area_assets(rng, plant_name, area_name, index, count, network_octet))

    logger.debug(f"Generated {len(assets)} synthetic assets for '{plant_name}' across {len(area_names)} areas")
    return assets


__all__ = ["DEVICE_MIX", "generate_plant_assets"]
