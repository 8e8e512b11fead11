"""Base layout engine protocol.

Defines the interface that all plant layout engines must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from plant_layout.models.layout import LayoutResult


class LayoutEngine(ABC):
    """Abstract base class for layout engines.

    Layout engines convert flat asset records into a positioned plant
    layout with building rectangles, zone boundaries and routed
    connections. Engines are synchronous and side-effect free.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name (e.g., 'grid')."""
        ...

    @property
    @abstractmethod
    def supports_orthogonal_routing(self) -> bool:
        """Whether engine routes connections with right-angle paths."""
        ...

    @abstractmethod
    def layout(
        self,
        assets: Iterable[Any],
        options: Optional[Dict[str, Any]] = None,
    ) -> LayoutResult:
        """Compute a layout for a set of assets.

        Args:
            assets: AssetRecords or plain dicts
            options: Engine-specific layout options

        Returns:
            LayoutResult with nodes, connections and zone boundaries
        """
        ...

    def is_available(self) -> bool:
        """Check if engine is available (dependencies installed).

        Returns:
            True if engine can be used
        """
        return True
