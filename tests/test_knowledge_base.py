"""Tests for knowledge base loading and validation."""

import shutil
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from plant_layout.knowledge.catalog import (
    CONFIG_DIR,
    KnowledgeBaseError,
    find_automation_zone,
    get_knowledge_base,
    list_industries,
    load_industry_catalog,
    load_knowledge_base,
)
from plant_layout.models.enums import PerimeterSlot


@pytest.fixture
def config_copy(tmp_path) -> Path:
    """Writable copy of the packaged configuration."""
    target = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, target, ignore=shutil.ignore_patterns("*.py", "__pycache__"))
    return target


def _write_yaml(path: Path, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f)


class TestPackagedKnowledgeBase:
    """The shipped YAML loads and is internally consistent."""

    def test_industries(self, knowledge_base):
        assert set(list_industries(knowledge_base)) == {"automotive", "oil-gas", "pharma", "utilities"}

    def test_automation_levels(self, knowledge_base):
        assert sorted(z.level for z in knowledge_base.automation_levels) == [0, 1, 2, 3, 4]
        assert knowledge_base.automation_zone(2).label == "SUPERVISORY (L2)"

    def test_unknown_level_renders_as_enterprise(self, knowledge_base):
        assert knowledge_base.automation_zone(9).level == 4
        zone = find_automation_zone(knowledge_base.automation_levels, 7)
        assert zone.label == "ENTERPRISE (L4)"
        assert find_automation_zone(knowledge_base.automation_levels, 3).level == 3

    def test_zone_order_follows_file(self, automotive):
        assert list(automotive.zones)[:3] == ["stamping", "body_shop", "paint_shop"]

    def test_production_flow(self, automotive):
        first = automotive.production_flow[0]
        assert (first.source, first.target) == ("stamping", "body_shop")
        assert first.material == "Body Panels"
        assert len(automotive.production_flow) == 10

    def test_perimeter_slots(self, automotive):
        assert automotive.get("logistics").slot == PerimeterSlot.UPPER_LEFT
        assert automotive.get("plant_utilities").slot == PerimeterSlot.LOWER_RIGHT

    def test_every_flow_endpoint_exists(self, knowledge_base):
        for catalog in knowledge_base.industries.values():
            for edge in catalog.production_flow:
                assert edge.source in catalog.zones
                assert edge.target in catalog.zones

    def test_get_industry_normalizes(self, knowledge_base):
        assert knowledge_base.get_industry("Oil_Gas").industry == "oil-gas"
        assert knowledge_base.get_industry("AUTOMOTIVE").industry == "automotive"
        assert knowledge_base.get_industry("mining") is None
        assert knowledge_base.get_industry(None) is None

    def test_models_are_frozen(self, automotive):
        with pytest.raises(ValidationError):
            automotive.get("stamping").row = 5

    def test_cached(self):
        assert get_knowledge_base() is get_knowledge_base()


class TestKnowledgeBaseErrors:
    """Invalid configuration fails at load time."""

    def test_missing_levels_file(self, config_copy):
        (config_copy / "automation_levels.yaml").unlink()
        with pytest.raises(KnowledgeBaseError, match="cannot read file"):
            load_knowledge_base(config_copy)

    def test_yaml_syntax_error(self, config_copy):
        (config_copy / "industries" / "broken.yaml").write_text("zones: [unclosed\n", encoding="utf-8")
        with pytest.raises(KnowledgeBaseError, match="YAML parse error"):
            load_knowledge_base(config_copy)

    def test_top_level_must_be_mapping(self, config_copy):
        (config_copy / "industries" / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(KnowledgeBaseError, match="mapping"):
            load_knowledge_base(config_copy)

    def test_flow_to_unknown_zone(self, tmp_path):
        path = tmp_path / "mini.yaml"
        _write_yaml(path, {
            "industry": "mini",
            "name": "Mini",
            "zones": {
                "hall": {
                    "name": "Hall", "row": 1, "col": 0, "automation_level": 1,
                    "building_aspect": 1.0, "typical_floor_area_m2": 1000,
                },
            },
            "production_flow": [{"from": "hall", "to": "yard", "strength": 0.5}],
        })
        with pytest.raises(KnowledgeBaseError) as exc_info:
            load_industry_catalog(path)
        assert exc_info.value.path == path
        assert "yard" in exc_info.value.reason

    def test_invalid_zone_field(self, tmp_path):
        path = tmp_path / "bad.yaml"
        _write_yaml(path, {
            "zones": {
                "hall": {
                    "name": "Hall", "row": 1, "col": 0, "automation_level": 7,
                    "building_aspect": 1.0, "typical_floor_area_m2": 1000,
                },
            },
        })
        with pytest.raises(KnowledgeBaseError):
            load_industry_catalog(path)

    def test_incomplete_level_table(self, config_copy):
        _write_yaml(config_copy / "automation_levels.yaml", {
            "levels": [{"id": "process", "level": 0, "label": "L0", "color": "#000"}],
        })
        with pytest.raises(KnowledgeBaseError, match="levels 0-4"):
            load_knowledge_base(config_copy)

    def test_error_is_value_error(self):
        assert issubclass(KnowledgeBaseError, ValueError)

    def test_industry_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "shipyard.yaml"
        _write_yaml(path, {"zones": {}})
        catalog = load_industry_catalog(path)
        assert catalog.industry == "shipyard"
        assert catalog.zones == {}
