"""Tests for building footprint sizing."""

import math

import pytest

from plant_layout.config.settings import LayoutSettings, SizeBounds
from plant_layout.knowledge.catalog import ZoneTemplate
from plant_layout.layout.dimensions import compute_building_dimensions


class TestUnclassifiedDimensions:
    """Unclassified units are sized from asset count only."""

    @pytest.mark.parametrize("count,side", [
        (0, 60),        # 40 clamps up to the minimum
        (100, 80),      # 40 + 4 * 10
        (10000, 140),   # 440 clamps down to the maximum
    ])
    def test_size_from_count(self, settings, count, side):
        width, height = compute_building_dimensions(None, count, 900, 550, settings)
        assert width == pytest.approx(side * 1.3)
        assert height == pytest.approx(side * 0.8)

    def test_negative_count_treated_as_zero(self, settings):
        assert compute_building_dimensions(None, -5, 900, 550, settings) == \
            compute_building_dimensions(None, 0, 900, 550, settings)

    def test_bounds_come_from_settings(self):
        settings = LayoutSettings(unknown_size=SizeBounds(min=10, max=20))
        width, height = compute_building_dimensions(None, 100, 900, 550, settings)
        assert width == pytest.approx(26)
        assert height == pytest.approx(16)


class TestClassifiedDimensions:
    """Classified units are sized from floor area, aspect and density."""

    def test_small_canvas_clamps_to_minimum(self, automotive, settings):
        stamping = automotive.get("stamping")
        assert compute_building_dimensions(stamping, 50, 900, 550, settings) == (70, 50)

    def test_floor_area_and_aspect(self, automotive, settings):
        """At typical count the density factor is 1."""
        stamping = automotive.get("stamping")  # 30000 m2, aspect 2.5, typical 280
        width, height = compute_building_dimensions(stamping, 280, 1800, 1800, settings)
        assert width == pytest.approx(math.sqrt(30000 * 2.5) * 0.5)
        assert height == pytest.approx(math.sqrt(30000 / 2.5) * 0.5)

    def test_density_factor_clamps_high(self, automotive, settings):
        stamping = automotive.get("stamping")
        width, height = compute_building_dimensions(stamping, 280 * 9, 1800, 1800, settings)
        assert width == pytest.approx(math.sqrt(30000 * 2.5) * 0.5 * 1.4)
        assert height == pytest.approx(math.sqrt(30000 / 2.5) * 0.5 * 1.4)

    def test_density_factor_clamps_low(self, automotive, settings):
        stamping = automotive.get("stamping")
        _, height = compute_building_dimensions(stamping, 0, 3600, 3600, settings)
        assert height == pytest.approx(math.sqrt(30000 / 2.5) * 0.7)

    def test_missing_typical_count_defaults_to_200(self, settings):
        template = ZoneTemplate(
            zone_id="hall",
            name="Hall",
            row=1,
            col=0,
            automation_level=1,
            building_aspect=1.0,
            typical_floor_area_m2=40000,
        )
        width, height = compute_building_dimensions(template, 200, 1800, 1800, settings)
        assert width == pytest.approx(100)
        assert height == pytest.approx(100)

    def test_results_stay_within_bounds(self, knowledge_base, settings):
        for catalog in knowledge_base.industries.values():
            for template in catalog.zones.values():
                for count in (0, 10, 1000, 100000):
                    for canvas in ((900, 550), (4000, 4000), (1, 1)):
                        width, height = compute_building_dimensions(template, count, *canvas, settings)
                        assert 70 <= width <= 200
                        assert 50 <= height <= 150
