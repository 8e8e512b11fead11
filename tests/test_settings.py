"""Tests for layout settings and environment overrides."""

import pytest
from pydantic import ValidationError

from plant_layout.config.settings import (
    DEFAULT_SETTINGS,
    LayoutSettings,
    Margin,
    SizeBounds,
    load_settings,
)


class TestDefaults:
    """Defaults reproduce the reference plant map."""

    def test_values(self):
        settings = LayoutSettings()
        assert settings.margin == Margin(top=60, right=40, bottom=40, left=40)
        assert settings.min_gap == 15
        assert settings.collision_iterations == 50
        assert settings.zone_padding == 20
        assert settings.connection_min_strength == 0.25
        assert settings.auto_grid_columns == 6
        assert (settings.known_width.min, settings.known_width.max) == (70, 200)
        assert (settings.known_height.min, settings.known_height.max) == (50, 150)
        assert (settings.unknown_size.min, settings.unknown_size.max) == (60, 140)
        assert (settings.default_width, settings.default_height) == (900, 550)

    def test_module_default_matches(self):
        assert DEFAULT_SETTINGS == LayoutSettings()

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_SETTINGS.min_gap = 5

    @pytest.mark.parametrize("value,expected", [(10, 70), (120, 120), (500, 200)])
    def test_size_bounds_clamp(self, value, expected):
        assert SizeBounds(min=70, max=200).clamp(value) == expected


class TestLoadSettings:
    """PLANT_LAYOUT_* environment overrides."""

    def test_no_overrides(self):
        assert load_settings({}) == LayoutSettings()

    def test_scalar_overrides(self):
        settings = load_settings({
            "PLANT_LAYOUT_MIN_GAP": "25",
            "PLANT_LAYOUT_COLLISION_ITERATIONS": " 10 ",
            "PLANT_LAYOUT_CONNECTION_MIN_STRENGTH": "0.5",
        })
        assert settings.min_gap == 25.0
        assert settings.collision_iterations == 10
        assert settings.connection_min_strength == 0.5
        assert settings.zone_padding == 20

    def test_margin_override_keeps_other_sides(self):
        settings = load_settings({"PLANT_LAYOUT_MARGIN_TOP": "80"})
        assert settings.margin.top == 80
        assert settings.margin.left == 40

    def test_blank_values_ignored(self):
        assert load_settings({"PLANT_LAYOUT_MIN_GAP": "  "}).min_gap == 15

    def test_unrelated_variables_ignored(self):
        assert load_settings({"PATH": "/usr/bin"}) == LayoutSettings()

    @pytest.mark.parametrize("env", [
        {"PLANT_LAYOUT_MIN_GAP": "wide"},
        {"PLANT_LAYOUT_CONNECTION_MIN_STRENGTH": "1.5"},
        {"PLANT_LAYOUT_AUTO_GRID_COLUMNS": "0"},
        {"PLANT_LAYOUT_MARGIN_LEFT": "-1"},
    ])
    def test_invalid_values_rejected(self, env):
        with pytest.raises(ValidationError):
            load_settings(env)

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("PLANT_LAYOUT_ZONE_PADDING", "32")
        assert load_settings().zone_padding == 32
