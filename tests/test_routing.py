"""Tests for orthogonal routing of connections."""

import pytest

from plant_layout.layout.routing import compute_orthogonal_path, route_connections
from plant_layout.models.enums import RelationshipType
from plant_layout.models.layout import LayoutNode, Relationship


def _assert_orthogonal(path):
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        assert x1 == x2 or y1 == y2, f"diagonal segment {(x1, y1)} -> {(x2, y2)}"


def _node(name, x, y):
    return LayoutNode(name=name, x=x, y=y, building_width=80, building_height=60)


class TestComputeOrthogonalPath:
    """Paths are four waypoints joined by axis-aligned segments."""

    def test_mostly_horizontal(self):
        path = compute_orthogonal_path(0, 0, 100, 20)
        assert path == [(0, 0), (50, 0), (50, 20), (100, 20)]

    def test_mostly_vertical(self):
        path = compute_orthogonal_path(0, 0, 20, 100)
        assert path == [(0, 0), (0, 50), (20, 50), (20, 100)]

    def test_equal_deltas_route_vertically_first(self):
        path = compute_orthogonal_path(0, 0, 40, 40)
        assert path[1] == (0, 20)

    @pytest.mark.parametrize("x1,y1,x2,y2", [
        (245, 231, 450, 231),
        (450, 231, 450, 384),
        (10, 500, 800, 20),
        (800, 20, 10, 500),
        (5, 5, 5, 5),
        (-30.5, 12.25, 77.125, -3),
    ])
    def test_every_segment_is_axis_aligned(self, x1, y1, x2, y2):
        path = compute_orthogonal_path(x1, y1, x2, y2)
        assert len(path) == 4
        assert path[0] == (x1, y1)
        assert path[-1] == (x2, y2)
        _assert_orthogonal(path)

    def test_exactly_one_coordinate_changes_when_both_deltas_nonzero(self):
        path = compute_orthogonal_path(10, 500, 800, 20)
        for (x1, y1), (x2, y2) in zip(path, path[1:]):
            assert (x1 != x2) + (y1 != y2) == 1


class TestRouteConnections:
    """Only relationships above the threshold are routed."""

    @pytest.fixture
    def nodes(self):
        return [_node("a", 100, 100), _node("b", 400, 100), _node("c", 400, 300)]

    def test_threshold_is_exclusive(self, nodes):
        relationships = [
            Relationship(source="a", target="b", type=RelationshipType.NAMING, strength=0.2),
            Relationship(source="a", target="c", type=RelationshipType.NETWORK, strength=0.25),
            Relationship(source="b", target="c", type=RelationshipType.NETWORK, strength=0.3),
        ]
        connections = route_connections(relationships, nodes, 0.25)
        assert [(c.source, c.target) for c in connections] == [("b", "c")]

    def test_production_flow_fields(self, nodes):
        relationships = [Relationship(
            source="a", target="b", type=RelationshipType.PRODUCTION_FLOW,
            strength=1.0, material="Body Panels", critical=True,
        )]
        connection = route_connections(relationships, nodes)[0]
        assert connection.is_production_flow is True
        assert connection.critical is True
        assert connection.material == "Body Panels"
        assert connection.path == [(100, 100), (250, 100), (250, 100), (400, 100)]

    def test_non_flow_defaults(self, nodes):
        relationships = [Relationship(source="b", target="c", type=RelationshipType.NETWORK, strength=0.6)]
        connection = route_connections(relationships, nodes)[0]
        assert connection.is_production_flow is False
        assert connection.critical is False
        assert connection.material is None
        _assert_orthogonal(connection.path)

    def test_unplaced_endpoint_gets_empty_path(self, nodes):
        relationships = [Relationship(source="a", target="ghost", type=RelationshipType.NETWORK, strength=0.9)]
        connection = route_connections(relationships, nodes)[0]
        assert connection.path == []

    def test_serializes_with_from_and_to(self, nodes):
        relationships = [Relationship(source="a", target="b", type=RelationshipType.NETWORK, strength=0.9)]
        data = route_connections(relationships, nodes)[0].model_dump(mode="json", by_alias=True)
        assert data["from"] == "a"
        assert data["to"] == "b"
        assert data["type"] == "network"
