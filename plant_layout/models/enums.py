"""Controlled vocabularies for plant layout models."""

from enum import Enum, IntEnum


class RelationshipType(str, Enum):
    """Signal that produced an inferred relationship between two units."""
    NETWORK = "network"
    NAMING = "naming"
    PRODUCTION_FLOW = "production_flow"


class AutomationLevel(IntEnum):
    """ISA-95 / Purdue functional hierarchy level."""
    PROCESS = 0        # Sensors, actuators, drives
    CONTROL = 1        # PLC, DCS, safety PLC
    SUPERVISORY = 2    # SCADA, HMI, engineering workstations
    OPERATIONS = 3     # MES, historian, scheduling
    ENTERPRISE = 4     # ERP, business systems


class CoverageStatus(str, Enum):
    """Observed asset count compared with the expected range for a unit type."""
    NORMAL = "normal"
    UNDER_COVERED = "under-covered"
    OVER_COVERED = "over-covered"
    UNKNOWN = "unknown"


class PerimeterSlot(str, Enum):
    """Canonical placement slots for perimeter (row 0) buildings."""
    UPPER_LEFT = "upper-left"
    LOWER_RIGHT = "lower-right"


AUTOMATION_LEVELS = tuple(level.value for level in AutomationLevel)


__all__ = [
    "RelationshipType",
    "AutomationLevel",
    "CoverageStatus",
    "PerimeterSlot",
    "AUTOMATION_LEVELS",
]
