import io

import gpxpy.gpx
import pytest

from zpolyline.geometry import LatLng, LatLngEle
from zpolyline.gpx import load_gpx, parse_gpx, to_gpx_xml

GPX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <trkseg>
{points}
    </trkseg>
  </trk>
</gpx>
"""


def _gpx(*points):
    lines = []
    for lat, lng, ele in points:
        if ele is None:
            lines.append(f'      <trkpt lat="{lat}" lon="{lng}"></trkpt>')
        else:
            lines.append(
                f'      <trkpt lat="{lat}" lon="{lng}"><ele>{ele}</ele></trkpt>'
            )
    return GPX_TEMPLATE.format(points="\n".join(lines))


def test_parse_gpx_with_elevation():
    data = _gpx((47.12322, -122.85051, 30.84), (47.12308, -122.85048, 30.96))
    points = parse_gpx(io.StringIO(data))
    assert points == [
        LatLngEle(47.12322, -122.85051, 30.84),
        LatLngEle(47.12308, -122.85048, 30.96),
    ]


def test_parse_gpx_without_elevation():
    data = _gpx((47.12322, -122.85051, None), (47.12308, -122.85048, None))
    points = parse_gpx(io.StringIO(data))
    assert points == [LatLng(47.12322, -122.85051), LatLng(47.12308, -122.85048)]


def test_parse_gpx_with_partial_elevation_drops_it():
    data = _gpx((47.12322, -122.85051, 30.84), (47.12308, -122.85048, None))
    points = parse_gpx(io.StringIO(data))
    assert all(isinstance(p, LatLng) for p in points)
    assert len(points) == 2


def test_parse_gpx_without_tracks():
    data = GPX_TEMPLATE.format(points="")
    assert parse_gpx(io.StringIO(data)) == []


def test_parse_gpx_malformed():
    with pytest.raises(gpxpy.gpx.GPXException):
        parse_gpx(io.StringIO("this is not gpx"))


def test_load_gpx_from_file(tmp_path):
    path = tmp_path / "route.gpx"
    path.write_text(_gpx((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)), encoding="utf-8")
    assert load_gpx(str(path)) == [LatLngEle(1.0, 2.0, 3.0), LatLngEle(4.0, 5.0, 6.0)]


def test_load_gpx_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_gpx(str(tmp_path / "missing.gpx"))


def test_to_gpx_xml_round_trip():
    lles = [LatLngEle(38.5, -120.2, 100.0), LatLngEle(40.7, -120.95, 150.5)]
    assert parse_gpx(io.StringIO(to_gpx_xml(lles, name="test"))) == lles

    lls = [LatLng(38.5, -120.2), LatLng(40.7, -120.95)]
    assert parse_gpx(io.StringIO(to_gpx_xml(lls))) == lls
