#!/usr/bin/env python3
"""
Coordinate records and spherical geometry.

All calculations treat the Earth as a sphere of radius EARTH_RADIUS. No
range validation is done on latitudes or longitudes: out-of-range values
produce whatever the formulas give.

See: http://www.movable-type.co.uk/scripts/latlong.html
"""

from typing import List, NamedTuple, Sequence, Union
import math

EARTH_RADIUS = 6371008.8  # m
DEGREES_TO_RADIANS = math.pi / 180.0
RADIANS_TO_DEGREES = 180.0 / math.pi


class LatLng(NamedTuple):
    """Represents a 'latitude,longitude' pair in decimal degrees."""

    lat: float
    lng: float

    def to_lat_lng_ele(self, ele: float) -> "LatLngEle":
        """Lift this pair to a triple with the given elevation in metres."""
        return LatLngEle(lat=self.lat, lng=self.lng, ele=ele)

    def almost_equal(self, other: "LatLng", eps: float) -> bool:
        return abs(self.lat - other.lat) <= eps and abs(self.lng - other.lng) <= eps


class LatLngEle(NamedTuple):
    """Represents a 'latitude,longitude,elevation' triple.

    Latitude and longitude are in decimal degrees, elevation in metres.
    """

    lat: float
    lng: float
    ele: float

    def lat_lng(self) -> LatLng:
        """Return the 2D projection of this triple."""
        return LatLng(lat=self.lat, lng=self.lng)

    def almost_equal(self, other: "LatLngEle", eps: float) -> bool:
        return (
            abs(self.lat - other.lat) <= eps
            and abs(self.lng - other.lng) <= eps
            and abs(self.ele - other.ele) <= eps
        )


Point = Union[LatLng, LatLngEle]


def lat_lngs(lles: Sequence[LatLngEle]) -> List[LatLng]:
    """Convert LatLngEle triples to LatLng pairs, dropping elevation."""
    return [lle.lat_lng() for lle in lles]


def _is_finite(*points: Point) -> bool:
    # math.sin and math.cos raise on infinities instead of returning NaN
    return all(math.isfinite(p.lat) and math.isfinite(p.lng) for p in points)


def distance(p1: Point, p2: Point) -> float:
    """
    Calculate the haversine (great-circle) distance between two points.

    Elevation, if present, is ignored.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Distance in metres, or NaN if a coordinate is not finite
    """
    if not _is_finite(p1, p2):
        return math.nan

    dlat = (p2.lat - p1.lat) * DEGREES_TO_RADIANS
    dlng = (p2.lng - p1.lng) * DEGREES_TO_RADIANS
    # differences of huge finite values can overflow
    if not (math.isfinite(dlat) and math.isfinite(dlng)):
        return math.nan

    lat1 = p1.lat * DEGREES_TO_RADIANS
    lat2 = p2.lat * DEGREES_TO_RADIANS

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    )
    # rounding can leave a just outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS * c


def normalize_bearing(b: float) -> float:
    """Normalize a bearing in degrees into [0, 360); NaN and Inf pass through."""
    if not math.isfinite(b):
        return b
    b = b + math.ceil(-b / 360) * 360
    # tiny negative inputs round up to exactly 360
    if b >= 360.0:
        b -= 360.0
    return b


def bearing(p1: Point, p2: Point) -> float:
    """
    Calculate the initial bearing (direction) to travel from p1 to p2.

    Args:
        p1: Start point
        p2: End point

    Returns:
        Bearing in degrees clockwise from true north, in [0, 360), or NaN
        if a coordinate is not finite
    """
    if not _is_finite(p1, p2):
        return math.nan

    dlng = (p2.lng - p1.lng) * DEGREES_TO_RADIANS
    if not math.isfinite(dlng):
        return math.nan

    lat1 = p1.lat * DEGREES_TO_RADIANS
    lat2 = p2.lat * DEGREES_TO_RADIANS

    y = math.sin(dlng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        dlng
    )

    return normalize_bearing(math.atan2(y, x) * RADIANS_TO_DEGREES)


def average_bearing(points: Sequence[Point]) -> float:
    """
    Calculate the mean bearing (average direction) along a path.

    The bearings between consecutive points are averaged as circular
    quantities, so that e.g. 350 and 10 degrees average to 0, not 180.
    See: https://en.wikipedia.org/wiki/Mean_of_circular_quantities

    Args:
        points: Ordered path points; elevation, if present, is ignored

    Returns:
        Mean bearing in degrees in [0, 360), 0.0 for fewer than two points,
        or NaN if a coordinate is not finite
    """
    if len(points) <= 1:
        return 0.0

    x = 0.0
    y = 0.0
    for prev, curr in zip(points, points[1:]):
        a = bearing(prev, curr) * DEGREES_TO_RADIANS
        x += math.cos(a)
        y += math.sin(a)

    return normalize_bearing(math.atan2(y, x) * RADIANS_TO_DEGREES)


def path_length(points: Sequence[Point]) -> float:
    """Return the total haversine length of a path in metres."""
    return sum(distance(prev, curr) for prev, curr in zip(points, points[1:]))


def _spherical_mean(points: Sequence[Point]) -> LatLng:
    """Average points as unit vectors and convert the mean vector back."""
    if not _is_finite(*points):
        return LatLng(lat=math.nan, lng=math.nan)

    x = 0.0
    y = 0.0
    z = 0.0

    for p in points:
        lat = p.lat * DEGREES_TO_RADIANS
        lng = p.lng * DEGREES_TO_RADIANS

        x += math.cos(lat) * math.cos(lng)
        y += math.cos(lat) * math.sin(lng)
        z += math.sin(lat)

    total = float(len(points))
    x /= total
    y /= total
    z /= total

    lng = math.atan2(y, x)
    lat = math.atan2(z, math.sqrt(x * x + y * y))

    return LatLng(lat=lat * RADIANS_TO_DEGREES, lng=lng * RADIANS_TO_DEGREES)


def average(points: Sequence[LatLng]) -> LatLng:
    """
    Calculate the spherical average of a set of points.

    Also known as the centroid or geographic midpoint. Unlike the arithmetic
    mean of latitudes and longitudes, this is correct across the
    antimeridian and near the poles.

    Args:
        points: Points to average

    Returns:
        The average point; LatLng(0, 0) for no points, and the point itself
        for a single point
    """
    if not points:
        return LatLng(0.0, 0.0)
    if len(points) == 1:
        return points[0]

    return _spherical_mean(points)


def average_z(points: Sequence[LatLngEle]) -> LatLngEle:
    """
    Calculate the spherical average of a set of points with elevation.

    Latitude and longitude are averaged as in average(); elevation is the
    arithmetic mean of the elevations.

    Args:
        points: Points to average

    Returns:
        The average point; LatLngEle(0, 0, 0) for no points, and the point
        itself for a single point
    """
    if not points:
        return LatLngEle(0.0, 0.0, 0.0)
    if len(points) == 1:
        return points[0]

    mean = _spherical_mean(points)
    ele = sum(p.ele for p in points) / len(points)

    return mean.to_lat_lng_ele(ele)
