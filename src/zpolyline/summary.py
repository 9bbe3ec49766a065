"""
Module for summarizing and logging the shape of a decoded path.
"""

import logging
from typing import NamedTuple, Optional, Sequence, Union

from .geometry import (
    LatLng,
    LatLngEle,
    Point,
    average,
    average_bearing,
    average_z,
    path_length,
)
from .text import format_coordinate, format_lat_lng, format_lat_lng_ele

logger = logging.getLogger(__name__)


class PathSummary(NamedTuple):
    """Container for path summary data."""

    points: int
    length: float
    average_bearing: float
    centroid: Union[LatLng, LatLngEle]
    min_ele: Optional[float]
    max_ele: Optional[float]


def summarize(points: Sequence[Point]) -> PathSummary:
    """
    Collect summary values for a path.

    A path is treated as 3D only if it is non-empty and every point is a
    LatLngEle.

    Args:
        points: Ordered path points

    Returns:
        PathSummary for the path
    """
    is_3d = bool(points) and all(isinstance(p, LatLngEle) for p in points)

    if is_3d:
        elevations = [p.ele for p in points]  # type: ignore[union-attr]
        centroid: Union[LatLng, LatLngEle] = average_z(points)  # type: ignore[arg-type]
        min_ele: Optional[float] = min(elevations)
        max_ele: Optional[float] = max(elevations)
    else:
        centroid = average([LatLng(p.lat, p.lng) for p in points])
        min_ele = max_ele = None

    return PathSummary(
        points=len(points),
        length=path_length(points),
        average_bearing=average_bearing(points),
        centroid=centroid,
        min_ele=min_ele,
        max_ele=max_ele,
    )


def format_summary(summary: PathSummary) -> str:
    """Format a summary as human-readable lines."""
    if isinstance(summary.centroid, LatLngEle):
        centroid = format_lat_lng_ele(summary.centroid)
    else:
        centroid = format_lat_lng(summary.centroid)

    lines = [
        f"Points: {summary.points}",
        f"Length: {summary.length / 1000:.3f} km",
        f"Average bearing: {summary.average_bearing:.2f}°",
        f"Centroid: {centroid}",
    ]
    if summary.min_ele is not None and summary.max_ele is not None:
        lines.append(
            f"Elevation: {format_coordinate(summary.min_ele)} to "
            f"{format_coordinate(summary.max_ele)} m"
        )
    return "\n".join(lines)


def log_summary(summary: PathSummary) -> None:
    """Log summary values as structured key=value lines."""
    logger.debug("=== ZPOLYLINE_SUMMARY ===")
    logger.debug(f"points={summary.points}")
    logger.debug(f"length_m={summary.length:.3f}")
    logger.debug(f"average_bearing={summary.average_bearing:.6f}")
    logger.debug(f"centroid_lat={summary.centroid.lat:.6f}")
    logger.debug(f"centroid_lng={summary.centroid.lng:.6f}")
    if summary.min_ele is not None:
        logger.debug(f"min_ele={summary.min_ele}")
        logger.debug(f"max_ele={summary.max_ele}")
    logger.debug("=== END_ZPOLYLINE_SUMMARY ===")
