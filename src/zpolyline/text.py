#!/usr/bin/env python3
"""
Parsing and formatting of 'lat,lng' and 'lat,lng,ele' text.

Multiple records are joined with '|', e.g. "12.34,56.78|14.89,123.89".
"""

from decimal import Decimal
from typing import Callable, List, Sequence, TypeVar
import math

from .geometry import LatLng, LatLngEle

T = TypeVar("T")


class CoordinateParseError(ValueError):
    """Raised when a coordinate record cannot be parsed."""

    pass


def format_coordinate(value: float) -> str:
    """
    Format a float as the shortest decimal that reads back the same value.

    No exponent and no fixed width are used: 12.0 formats as "12" and
    1e-05 as "0.00001".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    formatted = format(Decimal(repr(value)), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def format_lat_lng(ll: LatLng) -> str:
    return f"{format_coordinate(ll.lat)},{format_coordinate(ll.lng)}"


def format_lat_lng_ele(lle: LatLngEle) -> str:
    return (
        f"{format_coordinate(lle.lat)},"
        f"{format_coordinate(lle.lng)},"
        f"{format_coordinate(lle.ele)}"
    )


def format_lat_lngs(lls: Sequence[LatLng]) -> str:
    return "|".join(format_lat_lng(ll) for ll in lls)


def format_lat_lng_eles(lles: Sequence[LatLngEle]) -> str:
    return "|".join(format_lat_lng_ele(lle) for lle in lles)


def _parse_fields(s: str, count: int) -> List[float]:
    fields = s.strip().split(",")
    if len(fields) != count:
        raise CoordinateParseError(
            f"Expected {count} comma-separated values, got {len(fields)}: {s!r}"
        )

    try:
        return [float(field) for field in fields]
    except ValueError as e:
        raise CoordinateParseError(f"Invalid coordinate {s!r}: {e}") from e


def parse_lat_lng(s: str) -> LatLng:
    """Parse a 'lat,lng' pair."""
    lat, lng = _parse_fields(s, 2)
    return LatLng(lat=lat, lng=lng)


def parse_lat_lng_ele(s: str) -> LatLngEle:
    """Parse a 'lat,lng,ele' triple."""
    lat, lng, ele = _parse_fields(s, 3)
    return LatLngEle(lat=lat, lng=lng, ele=ele)


def _parse_records(s: str, parse: Callable[[str], T]) -> List[T]:
    return [parse(record) for record in s.split("|")]


def parse_lat_lngs(s: str) -> List[LatLng]:
    """
    Parse '|' separated 'lat,lng' pairs.

    Raises:
        CoordinateParseError: If any record is malformed
    """
    return _parse_records(s, parse_lat_lng)


def parse_lat_lng_eles(s: str) -> List[LatLngEle]:
    """
    Parse '|' separated 'lat,lng,ele' triples.

    Raises:
        CoordinateParseError: If any record is malformed
    """
    return _parse_records(s, parse_lat_lng_ele)
