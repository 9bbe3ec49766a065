#!/usr/bin/env python3
"""
Encoded polyline and z-polyline codec.

A polyline is a list of 'lat,lng' points encoded as a printable ASCII string
using the Google polyline algorithm. A z-polyline extends the same scheme
with a third value per point carrying elevation.

See: https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple
import math

from .geometry import LatLng, LatLngEle

PRECISION = 1e5

# Products within this distance of an integer are taken to be that integer
# before truncation, so points decoded from a polyline re-encode unchanged.
_QUANTIZE_TOLERANCE = 1e-6

_OFFSET = 63
_CONTINUATION = 0x20
_PAYLOAD_MASK = 0x1F
_MIN_CHAR = 63
_MAX_CHAR = 126


class PolylineError(ValueError):
    """Base class for errors decoding an encoded polyline."""

    pass


class MalformedVarintError(PolylineError):
    """Raised when the input ends in the middle of an encoded value."""

    pass


class IncompleteGroupError(PolylineError):
    """Raised when the input ends before all values of a point are read."""

    pass


class InvalidCharacterError(PolylineError):
    """Raised when the input contains a character outside ASCII 63-126."""

    pass


def _quantize(value: float) -> int:
    """
    Scale a coordinate to an integer, truncating toward zero.

    Unlike a plain int(value * 1e5), a product within _QUANTIZE_TOLERANCE of
    an integer is snapped to it first. Values on the 1e-5 grid are not exact
    in binary, so their product can land just below the integer and would
    otherwise truncate a unit low, making decoded polylines re-encode
    differently.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot encode non-finite value {value!r}")

    scaled = value * PRECISION
    nearest = round(scaled)
    if abs(scaled - nearest) < _QUANTIZE_TOLERANCE:
        return int(nearest)
    return math.trunc(scaled)


def _encode_int(v: int, out: List[str]) -> None:
    """Append the encoding of a signed integer to out."""
    v = ~(v << 1) if v < 0 else v << 1

    while v >= _CONTINUATION:
        out.append(chr((_CONTINUATION | (v & _PAYLOAD_MASK)) + _OFFSET))
        v >>= 5
    out.append(chr(v + _OFFSET))


def _decode_int(s: str, index: int) -> Tuple[int, int]:
    """
    Decode one signed integer starting at s[index].

    Returns:
        Tuple of (value, index of the next unread character)

    Raises:
        MalformedVarintError: If s ends before the value is terminated
        InvalidCharacterError: If a character is outside the alphabet
    """
    result = 0
    shift = 0

    while True:
        if index >= len(s):
            raise MalformedVarintError(
                f"Polyline ends inside an encoded value at position {index}"
            )

        raw = ord(s[index])
        if raw < _MIN_CHAR or raw > _MAX_CHAR:
            raise InvalidCharacterError(
                f"Invalid character {s[index]!r} at position {index}"
            )
        index += 1

        b = raw - _OFFSET
        result |= (b & _PAYLOAD_MASK) << shift
        shift += 5

        if b < _CONTINUATION:
            break

    if result & 1:
        return ~(result >> 1), index
    return result >> 1, index


def _encode(rows: Iterable[Sequence[float]], dimensions: int) -> str:
    previous = [0] * dimensions
    out: List[str] = []

    for row in rows:
        for i in range(dimensions):
            value = _quantize(row[i])
            _encode_int(value - previous[i], out)
            previous[i] = value

    return "".join(out)


def _decode(s: str, dimensions: int) -> Iterator[List[float]]:
    """Yield absolute coordinate groups of the given size from s."""
    totals = [0] * dimensions
    index = 0

    while index < len(s):
        for i in range(dimensions):
            if i > 0 and index >= len(s):
                raise IncompleteGroupError(
                    f"Polyline ends after {i} of {dimensions} values of point "
                    f"at position {index}"
                )
            delta, index = _decode_int(s, index)
            totals[i] += delta

        yield [total / PRECISION for total in totals]


def encode_polyline(lls: Iterable[LatLng]) -> str:
    """
    Encode 'lat,lng' points as a polyline string.

    Coordinates are truncated to 5 decimal places.

    Args:
        lls: Ordered points to encode

    Returns:
        Encoded polyline; the empty string for no points

    Raises:
        ValueError: If a coordinate is NaN or infinite
    """
    return _encode(((ll.lat, ll.lng) for ll in lls), 2)


def decode_polyline(s: str) -> List[LatLng]:
    """
    Decode a polyline string into 'lat,lng' points.

    Args:
        s: Encoded polyline

    Returns:
        Decoded points; an empty list for the empty string

    Raises:
        PolylineError: If s is not a well-formed polyline
    """
    return [LatLng(lat, lng) for lat, lng in _decode(s, 2)]


def encode_zpolyline(lles: Iterable[LatLngEle]) -> str:
    """
    Encode 'lat,lng,ele' points as a z-polyline string.

    Coordinates and elevations are truncated to 5 decimal places.

    Raises:
        ValueError: If a coordinate or elevation is NaN or infinite
    """
    return _encode(((lle.lat, lle.lng, lle.ele) for lle in lles), 3)


def decode_zpolyline(s: str) -> List[LatLngEle]:
    """
    Decode a z-polyline string into 'lat,lng,ele' points.

    Raises:
        PolylineError: If s is not a well-formed z-polyline
    """
    return [LatLngEle(lat, lng, ele) for lat, lng, ele in _decode(s, 3)]


@dataclass(frozen=True)
class Polyline:
    """A list of 'lat,lng' points held in encoded form."""

    points: str

    @classmethod
    def from_points(cls, lls: Iterable[LatLng]) -> "Polyline":
        return cls(points=encode_polyline(lls))

    def decode(self) -> List[LatLng]:
        return decode_polyline(self.points)


@dataclass(frozen=True)
class ZPolyline:
    """A list of 'lat,lng,ele' points held in encoded form."""

    points: str

    @classmethod
    def from_points(cls, lles: Iterable[LatLngEle]) -> "ZPolyline":
        return cls(points=encode_zpolyline(lles))

    def decode(self) -> List[LatLngEle]:
        return decode_zpolyline(self.points)
