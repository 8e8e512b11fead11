"""Shared fixtures for plant layout tests."""

import pytest

from plant_layout.config.settings import LayoutSettings
from plant_layout.knowledge.catalog import get_knowledge_base


@pytest.fixture
def knowledge_base():
    """Packaged knowledge base."""
    return get_knowledge_base()


@pytest.fixture
def automotive(knowledge_base):
    """Automotive industry catalog."""
    return knowledge_base.get_industry("automotive")


@pytest.fixture
def settings():
    """Default layout settings (no environment overrides)."""
    return LayoutSettings()

