"""Tests for building, street and ground synthesis."""

import pytest

from swcity.config import ColorConfig, LayoutConfig, StreetConfig
from swcity.geometry.buildings import build_building, extract_buildings
from swcity.geometry.ground import extract_ground, extract_lights
from swcity.geometry.streets import extract_streets, route_street, street_elevation
from swcity.layout.grid import GridLayout
from swcity.model.graph import DependencyGraph
from swcity.model.model import Component, Coordinate
from swcity.scene.primitives import FLAT_ON_GROUND


def _component(name: str, requires=(), width=5.0, height=2.0, length=5.0, area="A") -> Component:
    return Component(name, height=height, width=width, length=length, requires=tuple(requires), usage_area=area)


def _building(name: str, x: float, z: float, requires=(), unit: float = 10.0):
    return build_building(_component(name, requires), Coordinate(x, z), unit, {"A": 0xD3D3D3})


class TestBuildings:
    def test_volume_sits_on_plot(self):
        b = build_building(
            _component("X", height=4.0, width=3.0, length=2.0),
            Coordinate(-5.0, 7.0),
            10.0,
            {"A": 0xE0E0E0},
        )
        assert (b.volume.width, b.volume.height, b.volume.length) == (3.0, 4.0, 2.0)
        assert b.volume.position == pytest.approx((-5.0, 2.02, 7.0))
        assert b.volume.bottom == pytest.approx(b.plot.position[1])
        assert b.volume.color == 0xAA4A44

    def test_plot_is_unit_square_in_area_color(self):
        b = build_building(_component("X"), Coordinate(1.0, 2.0), 12.0, {"A": 0xE0E0E0})
        assert b.plot.side == 12.0
        assert b.plot.position == pytest.approx((1.0, 0.02, 2.0))
        assert b.plot.rotation == FLAT_ON_GROUND
        assert b.plot.color == 0xE0E0E0

    def test_unknown_area_falls_back_to_gradient_start(self):
        b = build_building(_component("X", area="missing"), Coordinate(0, 0), 10.0, {})
        assert b.plot.color == ColorConfig().gradient_start

    def test_back_reference_to_component(self):
        component = _component("X", requires=["Y"])
        b = build_building(component, Coordinate(0, 0), 10.0, {"A": 1})
        assert b.component is component
        assert b.name == "X"

    def test_plane_offset_is_configurable(self):
        b = build_building(
            _component("X", height=2.0), Coordinate(0, 0), 10.0, {"A": 1},
            config=LayoutConfig(plane_offset=0.5),
        )
        assert b.plot.position[1] == pytest.approx(1.0)
        assert b.volume.position[1] == pytest.approx(2.0)

    def test_extract_buildings_one_per_pair(self):
        placed = [(_component(f"c{i}"), Coordinate(i, 0)) for i in range(5)]
        buildings = extract_buildings(placed, 10.0, {"A": 1})
        assert [b.name for b in buildings] == [f"c{i}" for i in range(5)]


class TestRouteStreet:
    def test_same_row(self):
        a = _building("X", -5.0, 0.0)
        b = _building("Y", 5.0, 0.0)
        street = route_street(a, b, 10.0)
        y = 0.03 + 0.5

        assert street.source == "X" and street.target == "Y"
        assert street.lane_z == pytest.approx(5.0)

        assert street.source_stub.length == pytest.approx(5.0)
        assert street.source_stub.position == pytest.approx((-5.0, y, 2.5))
        assert street.target_stub.length == pytest.approx(5.0)
        assert street.target_stub.position == pytest.approx((5.0, y, 2.5))

        assert street.connector.width == pytest.approx(7.0)
        assert street.connector.length == pytest.approx(3.0)
        assert street.connector.position == pytest.approx((0.0, y, 3.5))

    def test_stubs_meet_connector_ends(self):
        a = _building("X", -15.0, 0.0)
        b = _building("Y", 15.0, 0.0)
        street = route_street(a, b, 10.0)
        min_x, _, max_x, _ = street.connector.bounds_xz
        assert min_x == pytest.approx(street.source_stub.bounds_xz[2])
        assert max_x == pytest.approx(street.target_stub.bounds_xz[0])

    def test_different_rows_share_far_lane(self):
        a = _building("X", -10.0, -10.0)
        b = _building("Y", 10.0, 10.0)
        street = route_street(a, b, 20.0)
        assert street.lane_z == pytest.approx(20.0)
        assert street.source_stub.length == pytest.approx(30.0)
        assert street.target_stub.length == pytest.approx(10.0)
        assert street.source_stub.bounds_xz[3] == pytest.approx(street.target_stub.bounds_xz[3])

    def test_fixed_width_and_height(self):
        street = route_street(
            _building("X", 0.0, 0.0), _building("Y", 30.0, 0.0), 10.0,
            street=StreetConfig(width=2.0, height=0.5),
        )
        for seg in street.segments:
            assert seg.height == 0.5
        assert street.source_stub.width == 2.0
        assert street.connector.length == 2.0

    def test_elevation_above_planes(self):
        layout = LayoutConfig(plane_offset=0.01)
        street = route_street(_building("X", 0.0, 0.0), _building("Y", 10.0, 0.0), 10.0, layout=layout)
        for seg in street.segments:
            assert seg.bottom == pytest.approx(street_elevation(layout))
            assert seg.bottom > 2 * layout.plane_offset
            assert seg.color == 0x000000

    def test_missing_target_is_none(self, caplog):
        with caplog.at_level("WARNING"):
            assert route_street(_building("X", 0, 0), None, 10.0, target_name="Z") is None
        assert "Z" in caplog.text

    def test_stub_starts_at_building_centre(self):
        a = _building("X", -5.0, 0.0)
        b = _building("Y", 5.0, 10.0)
        street = route_street(a, b, 10.0)
        assert street.source_stub.bounds_xz[1] == pytest.approx(a.z)
        assert street.target_stub.bounds_xz[1] == pytest.approx(b.z)
        assert street.target_stub.length == pytest.approx(5.0)

    def test_same_column_has_empty_connector(self):
        street = route_street(_building("X", 0.0, -10.0), _building("Y", 0.0, 0.0), 10.0)
        assert street.connector.width == 0.0


class TestExtractStreets:
    def test_one_street_per_resolved_edge(self):
        buildings = [
            _building("X", -5.0, 0.0, requires=["Y"]),
            _building("Y", 5.0, 0.0, requires=["X", "Z"]),
        ]
        result = extract_streets(buildings, 10.0)
        assert [(s.source, s.target) for s in result.streets] == [("X", "Y"), ("Y", "X")]
        assert result.unresolved == [("Y", "Z")]

    def test_unresolved_emits_one_diagnostic(self, caplog):
        buildings = [_building("X", 0.0, 0.0, requires=["Z"])]
        with caplog.at_level("WARNING"):
            result = extract_streets(buildings, 10.0)
        assert result.streets == []
        assert len([r for r in caplog.records if "Z" in r.getMessage()]) == 1

    def test_duplicates_rendered_by_default(self):
        buildings = [
            _building("X", -5.0, 0.0, requires=["Y", "Y"]),
            _building("Y", 5.0, 0.0),
        ]
        result = extract_streets(buildings, 10.0)
        assert len(result.streets) == 2
        assert result.duplicates == []

    def test_duplicates_collapsed_when_configured(self):
        buildings = [
            _building("X", -5.0, 0.0, requires=["Y", "Y"]),
            _building("Y", 5.0, 0.0),
        ]
        result = extract_streets(buildings, 10.0, StreetConfig(deduplicate=True))
        assert len(result.streets) == 1
        assert result.duplicates == [("X", "Y")]

    def test_self_reference_skipped_by_default(self):
        buildings = [_building("X", 0.0, 0.0, requires=["X"])]
        result = extract_streets(buildings, 10.0)
        assert result.streets == []
        assert result.self_references == ["X"]

    def test_self_reference_routed_when_enabled(self):
        buildings = [_building("X", 0.0, 0.0, requires=["X"])]
        result = extract_streets(buildings, 10.0, StreetConfig(skip_self_references=False))
        assert len(result.streets) == 1
        assert result.streets[0].connector.width == 0.0


class TestGround:
    def test_grass_and_foundation(self):
        comps = [_component(f"c{i}") for i in range(5)]
        layout = GridLayout(comps, LayoutConfig(unit_margin=5.0))
        grass, foundation = extract_ground(layout)
        assert grass.side == pytest.approx(3 * 10.0 + 250.0)
        assert foundation.side == pytest.approx(3 * 10.0 + 5.0)
        assert grass.position == (0.0, 0.0, 0.0)
        assert foundation.position[1] == pytest.approx(0.01)
        assert grass.color == 0x005500
        assert foundation.color == 0xA9A9A9

    def test_empty_layout_has_no_ground(self):
        assert extract_ground(GridLayout([])) == []

    def test_lights(self):
        point, ambient = extract_lights()
        assert point.kind == "point" and point.position == (5.0, 5.0, 5.0)
        assert ambient.kind == "ambient" and ambient.position is None


class TestStreetsFromGraph:
    def test_routes_edges_of_given_graph(self):
        buildings = [
            _building("X", -5.0, 0.0, requires=["Y"]),
            _building("Y", 5.0, 0.0),
        ]
        # graph built from components without any requires
        graph = DependencyGraph.from_components(
            [_component("X"), _component("Y", requires=["X"])]
        )
        result = extract_streets(buildings, 10.0, graph=graph)
        assert [(s.source, s.target) for s in result.streets] == [("Y", "X")]

    def test_skipped_lists_come_from_graph(self):
        buildings = [
            _building("X", -5.0, 0.0, requires=["X", "Y", "Y", "Q"]),
            _building("Y", 5.0, 0.0),
        ]
        graph = DependencyGraph.from_components(b.component for b in buildings)
        result = extract_streets(buildings, 10.0, StreetConfig(deduplicate=True), graph=graph)
        assert result.unresolved == graph.unresolved_references() == [("X", "Q")]
        assert result.self_references == graph.self_references() == ["X"]
        assert result.duplicates == graph.duplicate_edges() == [("X", "Y")]
        assert len(result.streets) == 1
