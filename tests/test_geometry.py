import math

import pytest

from zpolyline.geometry import (
    EARTH_RADIUS,
    LatLng,
    LatLngEle,
    average,
    average_bearing,
    average_z,
    bearing,
    distance,
    lat_lngs,
    normalize_bearing,
    path_length,
)
from zpolyline.polyline import decode_polyline

START = LatLng(37.4021463, -122.2451293)
END = LatLng(37.3721483, -122.2083962)


def test_distance_known_values():
    # Paris to London
    paris = LatLng(48.8566, 2.3522)
    london = LatLng(51.5074, -0.1278)
    assert distance(paris, london) == pytest.approx(343_560, abs=1000)

    # One degree of longitude on the equator
    assert distance(LatLng(0.0, 0.0), LatLng(0.0, 1.0)) == pytest.approx(
        EARTH_RADIUS * math.pi / 180
    )


def test_distance_zero_and_symmetric():
    assert distance(START, START) == 0.0
    assert distance(START, END) == pytest.approx(distance(END, START), abs=1e-9)


def test_distance_antipodal_points():
    d = distance(LatLng(0.0, 0.0), LatLng(0.0, 180.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS)


@pytest.mark.parametrize("lng", range(0, 360, 7))
def test_distance_near_antipodal_points(lng):
    # rounding pushes the haversine term just past 1 for many of these pairs
    for i in range(-100, 101):
        lat = i * 0.9
        d = distance(LatLng(lat, lng), LatLng(-lat, lng + 180))
        assert d == pytest.approx(math.pi * EARTH_RADIUS)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_coordinates_give_nan(bad):
    good = LatLng(1.0, 1.0)
    for p in (LatLng(bad, 0.0), LatLng(0.0, bad)):
        assert math.isnan(distance(p, good))
        assert math.isnan(distance(good, p))
        assert math.isnan(bearing(p, good))
        assert math.isnan(bearing(good, p))
        assert math.isnan(average_bearing([LatLng(0.0, 0.0), p, good]))
        assert all(math.isnan(v) for v in average([good, p]))
        lles = [good.to_lat_lng_ele(0.0), p.to_lat_lng_ele(0.0)]
        assert math.isnan(average_z(lles).lat)


def test_overflowing_coordinate_difference_gives_nan():
    assert math.isnan(distance(LatLng(0.0, 1e308), LatLng(0.0, -1e308)))
    assert math.isnan(bearing(LatLng(0.0, 1e308), LatLng(0.0, -1e308)))


def test_normalize_bearing_passes_non_finite_through():
    assert math.isnan(normalize_bearing(math.nan))
    assert normalize_bearing(math.inf) == math.inf


def test_distance_ignores_elevation():
    a = LatLngEle(START.lat, START.lng, 0.0)
    b = LatLngEle(END.lat, END.lng, 1000.0)
    assert distance(a, b) == distance(START, END)


def test_bearing_known_value():
    assert bearing(START, END) == pytest.approx(135.77, abs=0.01)


def test_bearing_cardinal_directions():
    origin = LatLng(0.0, 0.0)
    assert bearing(origin, LatLng(1.0, 0.0)) == pytest.approx(0.0)
    assert bearing(origin, LatLng(0.0, 1.0)) == pytest.approx(90.0)
    assert bearing(origin, LatLng(-1.0, 0.0)) == pytest.approx(180.0)
    assert bearing(origin, LatLng(0.0, -1.0)) == pytest.approx(270.0)


def test_bearing_identical_points_falls_through_to_zero():
    assert bearing(START, START) == 0.0


def test_normalize_bearing():
    assert normalize_bearing(0.0) == 0.0
    assert normalize_bearing(-90.0) == 270.0
    assert normalize_bearing(360.0) == 0.0
    assert normalize_bearing(725.0) == 5.0
    assert normalize_bearing(-1e-15) == 0.0


def test_average_bearing_of_two_points_is_bearing():
    assert average_bearing([START, END]) == pytest.approx(bearing(START, END))


def test_average_bearing_wraps_around_north():
    # Legs at roughly 354 and 6 degrees; a naive mean would give 180
    path = [LatLng(0.0, 0.0), LatLng(1.0, -0.1), LatLng(2.0, 0.0)]
    result = average_bearing(path)
    assert 0.0 <= result < 360.0
    assert min(result, 360.0 - result) < 0.1


def test_average_bearing_degenerate_paths():
    assert average_bearing([]) == 0.0
    assert average_bearing([START]) == 0.0


def test_average_bearing_of_decoded_route():
    path = decode_polyline("kbhcF`_ciV|Bt@nBDrA_@")
    result = average_bearing(path)
    assert 0.0 <= result < 360.0
    # Legs of about 199, 182 and 163 degrees average to just west of south
    assert 180.0 < result < 185.0


def test_average_bearing_accepts_elevation_points():
    path = [LatLngEle(START.lat, START.lng, 1.0), LatLngEle(END.lat, END.lng, 2.0)]
    assert average_bearing(path) == average_bearing(lat_lngs(path))


def test_average_degenerate_inputs():
    assert average([]) == LatLng(0.0, 0.0)
    assert average([START]) == START
    assert average_z([]) == LatLngEle(0.0, 0.0, 0.0)
    point = LatLngEle(1.23456789, 2.3456789, 3.456789)
    assert average_z([point]) == point


def test_average_on_equator():
    mid = average([LatLng(0.0, 0.0), LatLng(0.0, 90.0)])
    assert mid.lat == pytest.approx(0.0, abs=1e-12)
    assert mid.lng == pytest.approx(45.0)


def test_average_across_antimeridian():
    mid = average([LatLng(0.0, 179.0), LatLng(0.0, -179.0)])
    assert mid.lat == pytest.approx(0.0, abs=1e-12)
    assert abs(mid.lng) == pytest.approx(180.0)


def test_average_near_pole():
    mid = average([LatLng(89.0, 0.0), LatLng(89.0, 180.0)])
    assert mid.lat == pytest.approx(90.0, abs=1e-6)


def test_average_z_means_elevation():
    mid = average_z([LatLngEle(0.0, 0.0, 10.0), LatLngEle(0.0, 90.0, 30.0)])
    assert mid.lat == pytest.approx(0.0, abs=1e-12)
    assert mid.lng == pytest.approx(45.0)
    assert mid.ele == pytest.approx(20.0)


def test_average_z_matches_average_for_lat_lng():
    lles = [LatLngEle(10.0, 20.0, 1.0), LatLngEle(11.0, 21.0, 2.0), LatLngEle(12.0, 19.0, 3.0)]
    mid = average_z(lles)
    assert mid.lat_lng() == average(lat_lngs(lles))


def test_path_length():
    path = [LatLng(0.0, 0.0), LatLng(0.0, 1.0), LatLng(0.0, 2.0)]
    assert path_length(path) == pytest.approx(2 * distance(path[0], path[1]))
    assert path_length([]) == 0.0
    assert path_length([START]) == 0.0


def test_lifting_and_projection():
    lle = START.to_lat_lng_ele(12.5)
    assert lle == LatLngEle(START.lat, START.lng, 12.5)
    assert lle.lat_lng() == START
    assert lat_lngs([lle]) == [START]
