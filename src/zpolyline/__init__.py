#!/usr/bin/env python3
"""
zpolyline - Polyline and z-polyline encoding with spherical geometry.

This package encodes and decodes paths in the Google polyline format and
its elevation-carrying z-polyline extension, and measures distance, bearing
and centroids of the decoded points on a spherical Earth.
"""
import importlib.metadata

__version__ = importlib.metadata.version("zpolyline")

# Import main functions for public API
from .geometry import (
    LatLng,
    LatLngEle,
    average,
    average_bearing,
    average_z,
    bearing,
    distance,
    lat_lngs,
    path_length,
)
from .polyline import (
    IncompleteGroupError,
    InvalidCharacterError,
    MalformedVarintError,
    Polyline,
    PolylineError,
    ZPolyline,
    decode_polyline,
    decode_zpolyline,
    encode_polyline,
    encode_zpolyline,
)

__all__ = [
    "LatLng",
    "LatLngEle",
    "average",
    "average_bearing",
    "average_z",
    "bearing",
    "distance",
    "lat_lngs",
    "path_length",
    "IncompleteGroupError",
    "InvalidCharacterError",
    "MalformedVarintError",
    "Polyline",
    "PolylineError",
    "ZPolyline",
    "decode_polyline",
    "decode_zpolyline",
    "encode_polyline",
    "encode_zpolyline",
]
