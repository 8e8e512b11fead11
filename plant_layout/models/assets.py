"""Asset records and per-unit aggregates.

AssetRecord validates the rows handed over by the upstream asset canonizer.
The schema is permissive: every field is optional, unknown columns are kept,
and non-string scalars are coerced to strings so a malformed row degrades to
defaults instead of failing the whole layout.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)

from .enums import AUTOMATION_LEVELS

logger = logging.getLogger(__name__)


def _clean_text(v: Any) -> Optional[str]:
    if v is None or isinstance(v, (dict, list, tuple, set)):
        return None
    text = str(v).strip()
    return text or None


class AssetRecord(BaseModel):
    """A single industrial asset as produced by asset canonization.

    Attributes:
        unit: Process unit name (preferred grouping key)
        area: Plant area, used when unit is absent
        location: Physical location, used when unit and area are absent
        ip_address: IPv4 address of the device, if networked
        tag_id: Instrument/equipment tag (e.g., "PLC-101")
        device_type: Free-text device type (e.g., "PLC", "HMI", "VFD")
    """

    model_config = ConfigDict(extra="allow")

    unit: Optional[str] = Field(None, description="Process unit name")
    area: Optional[str] = Field(None, description="Plant area")
    location: Optional[str] = Field(None, description="Physical location")
    ip_address: Optional[str] = Field(None, description="IPv4 address")
    tag_id: Optional[str] = Field(None, description="Asset tag identifier")
    device_type: Optional[str] = Field(None, description="Device type")

    @field_validator(
        "unit", "area", "location", "ip_address", "tag_id", "device_type",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        """Coerce scalars to stripped strings; blank values become None."""
        return _clean_text(v)

    @property
    def unit_label(self) -> str:
        """Grouping label: unit, then area, then location."""
        return self.unit or self.area or self.location or "unknown"

    @classmethod
    def from_raw(cls, raw: Any) -> "AssetRecord":
        """Build an AssetRecord from a dict or record without raising.

        Args:
            raw: AssetRecord, mapping, or any other object

        Returns:
            AssetRecord (empty when raw cannot be interpreted)
        """
        if isinstance(raw, AssetRecord):
            return raw
        if not isinstance(raw, dict):
            return cls()
        data = {str(k): v for k, v in raw.items()}
        try:
            return cls(**data)
        except ValidationError as e:
            logger.debug(f"Dropping extra asset fields after validation error: {e}")
            return cls(**{k: _clean_text(data.get(k)) for k in cls.model_fields})


class AssetCountRange(BaseModel):
    """Expected number of assets in a unit of a given type."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)
    typical: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "AssetCountRange":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) exceeds max ({self.max})")
        return self


class UnitAggregate(BaseModel):
    """Summary of all assets that belong to one normalized unit name."""

    name: str = Field(..., description="Normalized unit name")
    asset_count: int = Field(default=0, ge=0)
    subnets: List[str] = Field(default_factory=list, description="Sorted 3-octet prefixes")
    tag_prefixes: List[str] = Field(default_factory=list, description="Sorted tag prefixes")
    device_types: List[str] = Field(default_factory=list, description="Sorted device types")
    automation_histogram: Dict[int, int] = Field(
        default_factory=lambda: {level: 0 for level in AUTOMATION_LEVELS},
        description="Device counts per automation level 0-4",
    )

    @computed_field
    @property
    def dominant_automation_level(self) -> int:
        """Level with the most devices; ties go to the lowest level."""
        best_level = 0
        best_count = 0
        for level in AUTOMATION_LEVELS:
            count = self.automation_histogram.get(level, 0)
            if count > best_count:
                best_level, best_count = level, count
        return best_level


__all__ = ["AssetRecord", "AssetCountRange", "UnitAggregate"]
