from __future__ import annotations

import pytest

from thelewale.search.config import SearchConfig
from thelewale.search.distance import (
    LOCATION_UNAVAILABLE,
    distance_label,
    distance_to,
    filter_within_radius,
    haversine_km,
    is_coordinate_query,
    parse_coordinate_query,
)
from thelewale.vendors.models import Coordinate

from conftest import DELHI, MUMBAI, ROHINI


def test_distance_is_symmetric():
    assert haversine_km(DELHI, MUMBAI) == pytest.approx(haversine_km(MUMBAI, DELHI))


def test_distance_to_self_is_zero():
    assert haversine_km(DELHI, DELHI) == 0.0


def test_delhi_to_rohini():
    assert 14.0 < haversine_km(DELHI, ROHINI) < 15.0


def test_delhi_to_mumbai():
    assert haversine_km(DELHI, MUMBAI) == pytest.approx(1148, rel=0.01)


def test_filter_keeps_vendors_within_radius(make_vendor):
    near = make_vendor("Rohini Rolls", location=ROHINI)
    far = make_vendor("Bombay Vada Pav", location=MUMBAI)
    result = filter_within_radius(DELHI, [near, far])
    assert [v.id for v, _ in result] == [near.id]
    assert result[0][1] == pytest.approx(14.4, abs=0.2)


def test_filter_excludes_vendors_without_location(make_vendor):
    nowhere = make_vendor("Mystery Cart")
    assert filter_within_radius(DELHI, [nowhere]) == []


def test_filter_orders_nearest_first(make_vendor):
    rohini = make_vendor("Rohini Rolls", location=ROHINI)
    cp = make_vendor("CP Chaat", location=Coordinate(latitude=28.6315, longitude=77.2167))
    result = filter_within_radius(DELHI, [rohini, cp])
    assert [v.id for v, _ in result] == [cp.id, rohini.id]


def test_radius_is_configurable(make_vendor):
    rohini = make_vendor("Rohini Rolls", location=ROHINI)
    assert filter_within_radius(DELHI, [rohini], SearchConfig(radius_km=10.0)) == []


def test_display_distance_unavailable(make_vendor):
    located = make_vendor("Rohini Rolls", location=ROHINI)
    unlocated = make_vendor("Mystery Cart")
    assert distance_to(None, located) is None
    assert distance_to(DELHI, unlocated) is None
    assert distance_label(None) == LOCATION_UNAVAILABLE
    assert distance_label(distance_to(DELHI, located)) == "14.4 km"


class TestCoordinateQuery:
    def test_parses_browser_location_string(self):
        coord = parse_coordinate_query("Lat: 28.6139, Lng: 77.209")
        assert coord == Coordinate(latitude=28.6139, longitude=77.209)

    def test_negative_values(self):
        coord = parse_coordinate_query("lat:-33.86, lng:151.2")
        assert coord.latitude == -33.86

    def test_plain_place_name(self):
        assert parse_coordinate_query("Chandni Chowk") is None

    def test_out_of_range(self):
        assert parse_coordinate_query("Lat: 123, Lng: 77") is None

    def test_empty(self):
        assert parse_coordinate_query("") is None
        assert parse_coordinate_query(None) is None

    def test_shape_detected_even_when_out_of_range(self):
        assert is_coordinate_query("Lat: 95, Lng: 200")
        assert is_coordinate_query("Lat: 28.6, Lng: 77.2")
        assert not is_coordinate_query("Chandni Chowk")
        assert not is_coordinate_query(None)
