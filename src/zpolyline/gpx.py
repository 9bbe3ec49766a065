#!/usr/bin/env python3
"""
GPX file reading and writing for coordinate paths.
"""

from typing import List, Optional, Sequence, TextIO, Union
import sys
import logging
import gpxpy
import gpxpy.gpx

from .geometry import LatLng, LatLngEle, Point

logger = logging.getLogger(__name__)


def parse_gpx(file_input: TextIO) -> Union[List[LatLng], List[LatLngEle]]:
    """
    Parse GPX data and concatenate all tracks/segments into a single path.

    Args:
        file_input: File-like object containing GPX data

    Returns:
        LatLngEle points if every track point has an elevation, otherwise
        LatLng points

    Raises:
        gpxpy.gpx.GPXException: If the GPX data is malformed
    """
    gpx_data = gpxpy.parse(file_input)

    points = [
        point
        for track in gpx_data.tracks
        for segment in track.segments
        for point in segment.points
    ]

    if not points:
        logger.warning("No track points found in GPX data")
        return []

    logger.debug(f"Parsed {len(points)} track points from GPX data")

    if all(point.elevation is not None for point in points):
        return [
            LatLngEle(lat=point.latitude, lng=point.longitude, ele=point.elevation)
            for point in points
        ]

    if any(point.elevation is not None for point in points):
        logger.info("Some track points have no elevation; ignoring elevations")
    return [LatLng(lat=point.latitude, lng=point.longitude) for point in points]


def load_gpx(filename: str) -> Union[List[LatLng], List[LatLngEle]]:
    """
    Load and parse a GPX file into a path.

    Args:
        filename: Path to GPX file, or "-" for stdin

    Raises:
        FileNotFoundError: If file doesn't exist
        PermissionError: If file can't be read
        gpxpy.gpx.GPXException: If the GPX data is malformed
    """
    if filename == "-":
        logger.debug("Reading GPX data from stdin")
        return parse_gpx(sys.stdin)
    else:
        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return parse_gpx(f)


def to_gpx_xml(points: Sequence[Point], name: Optional[str] = None) -> str:
    """
    Write points as a single-track GPX document.

    Elevation is written for LatLngEle points only.
    """
    gpx_data = gpxpy.gpx.GPX()
    track = gpxpy.gpx.GPXTrack(name=name)
    segment = gpxpy.gpx.GPXTrackSegment()

    for point in points:
        segment.points.append(
            gpxpy.gpx.GPXTrackPoint(
                latitude=point.lat,
                longitude=point.lng,
                elevation=getattr(point, "ele", None),
            )
        )

    track.segments.append(segment)
    gpx_data.tracks.append(track)
    return gpx_data.to_xml()
