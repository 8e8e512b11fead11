"""Tests for automation zone boundaries and node enrichment."""

import pytest

from plant_layout.layout.enrichment import (
    compute_automation_distribution,
    compute_coverage_stats,
    enrich_nodes,
)
from plant_layout.layout.placement import place_units
from plant_layout.layout.zones import compute_zone_boundaries
from plant_layout.models.assets import AssetCountRange, UnitAggregate
from plant_layout.models.enums import CoverageStatus
from plant_layout.models.layout import LayoutNode


def _node(name, x, y, level, width=80, height=60):
    return LayoutNode(
        name=name, x=x, y=y, building_width=width, building_height=height,
        automation_level=level,
    )


# =============================================================================
# Zone boundaries
# =============================================================================


class TestZoneBoundaries:
    """Union boxes per automation level."""

    def test_union_with_padding(self, knowledge_base):
        nodes = [_node("a", 100, 100, 1), _node("b", 300, 200, 1)]
        zones = compute_zone_boundaries(nodes, knowledge_base.automation_levels, 20)

        assert len(zones) == 1
        zone = zones[0]
        assert zone.level == 1
        assert zone.label == "BASIC CONTROL (L1)"
        assert zone.color == "#f59e0b"
        assert (zone.bounds.min_x, zone.bounds.max_x) == (40, 360)
        assert (zone.bounds.min_y, zone.bounds.max_y) == (50, 250)
        assert zone.node_count == 2
        assert zone.nodes == ["a", "b"]

    def test_levels_ordered_and_empty_levels_omitted(self, knowledge_base):
        nodes = [_node("a", 100, 100, 3), _node("b", 300, 200, 0), _node("c", 500, 200, 3)]
        zones = compute_zone_boundaries(nodes, knowledge_base.automation_levels)
        assert [z.level for z in zones] == [0, 3]
        assert zones[1].node_count == 2

    def test_members_are_contained(self, knowledge_base):
        nodes = [_node(f"n{i}", 100 + 90 * i, 100 + 40 * i, i % 5) for i in range(10)]
        for zone in compute_zone_boundaries(nodes, knowledge_base.automation_levels):
            for node in nodes:
                if node.name in zone.nodes:
                    assert zone.bounds.contains(node.bounds)

    def test_no_nodes(self, knowledge_base):
        assert compute_zone_boundaries([], knowledge_base.automation_levels) == []


# =============================================================================
# Enrichment
# =============================================================================


class TestEnrichNodes:
    """Template metadata and coverage flags on nodes."""

    def _enrich(self, automotive, settings, name, count, max_assets=None):
        placed = place_units([UnitAggregate(name=name, asset_count=count)], automotive, 900, 550, settings)
        return enrich_nodes(placed, automotive, max_assets if max_assets is not None else count)[0]

    def test_template_metadata(self, automotive, settings):
        node = self._enrich(automotive, settings, "stamping", 280)
        assert node.detected_type == "stamping"
        assert node.color == "#f59e0b"
        assert node.icon == "S"
        assert node.shape == "rectangle"
        assert node.criticality == "critical"
        assert node.expected_asset_range == AssetCountRange(min=150, max=400, typical=280)
        assert "OSHA_1910" in node.regulations
        assert node.safety_notes
        assert node.coverage_ratio == pytest.approx(1.0)
        assert not node.is_overstaffed
        assert not node.is_understaffed

    def test_coverage_flags(self, automotive, settings):
        over = self._enrich(automotive, settings, "stamping", 700)
        under = self._enrich(automotive, settings, "stamping", 100)
        assert over.is_overstaffed and not over.is_understaffed
        assert over.coverage_ratio == 2.0
        assert under.is_understaffed and not under.is_overstaffed

    def test_unclassified_defaults(self, automotive, settings):
        node = self._enrich(automotive, settings, "area_51", 5)
        assert node.detected_type is None
        assert node.color == "#94a3b8"
        assert node.icon == "?"
        assert node.shape == "rectangle"
        assert node.criticality == "medium"
        assert node.expected_asset_range is None
        assert node.coverage_ratio is None
        assert node.regulations == []

    def test_radius(self, automotive, settings):
        assert self._enrich(automotive, settings, "x", 50, max_assets=100).radius == pytest.approx(40)
        assert self._enrich(automotive, settings, "x", 0, max_assets=0).radius == pytest.approx(20)

    def test_geometry_unchanged(self, automotive, settings):
        placed = place_units([UnitAggregate(name="stamping", asset_count=10)], automotive, 900, 550, settings)
        node = enrich_nodes(placed, automotive, 10)[0]
        assert (node.x, node.y) == (placed[0].x, placed[0].y)
        assert (node.building_width, node.building_height) == (
            placed[0].building_width, placed[0].building_height
        )


class TestCoverageStats:
    """Status and whole-percentage ratio per node."""

    @pytest.mark.parametrize("count,status,ratio", [
        (280, CoverageStatus.NORMAL, 100),
        (100, CoverageStatus.UNDER_COVERED, 36),
        (500, CoverageStatus.OVER_COVERED, 179),
        (70, CoverageStatus.UNDER_COVERED, 25),
    ])
    def test_status_and_ratio(self, count, status, ratio):
        node = LayoutNode(
            name="stamping", x=0, y=0, building_width=70, building_height=50,
            asset_count=count,
            expected_asset_range=AssetCountRange(min=150, max=400, typical=280),
        )
        stat = compute_coverage_stats([node])[0]
        assert stat.status == status
        assert stat.ratio == ratio

    def test_half_percent_rounds_up(self):
        node = LayoutNode(
            name="n", x=0, y=0, building_width=70, building_height=50, asset_count=1,
            expected_asset_range=AssetCountRange(min=0, max=10, typical=8),
        )
        assert compute_coverage_stats([node])[0].ratio == 13

    def test_unknown_without_expected_range(self):
        node = LayoutNode(name="n", x=0, y=0, building_width=70, building_height=50)
        stat = compute_coverage_stats([node])[0]
        assert stat.status == CoverageStatus.UNKNOWN
        assert stat.ratio is None
        assert stat.expected is None


class TestAutomationDistribution:
    """Device totals per level always include keys 0-4."""

    def test_sums_histograms(self):
        units = [
            UnitAggregate(name="a", automation_histogram={0: 2, 1: 1, 2: 0, 3: 0, 4: 0}),
            UnitAggregate(name="b", automation_histogram={0: 1, 1: 0, 2: 0, 3: 4, 4: 0}),
        ]
        assert compute_automation_distribution(units) == {0: 3, 1: 1, 2: 0, 3: 4, 4: 0}

    def test_empty(self):
        assert compute_automation_distribution([]) == {0: 0, 1: 0, 2: 0, 3: 0, 4: 0}
