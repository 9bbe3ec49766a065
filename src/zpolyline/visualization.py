#!/usr/bin/env python3
"""
Path visualization using folium maps.
"""

from math import cos, radians
from typing import Sequence, Tuple
import logging
import folium

from .config import ZPolylineConfig
from .geometry import LatLngEle, Point
from .summary import summarize

logger = logging.getLogger(__name__)


def get_bbox(
    points: Sequence[Point], buffer: float = 0.0
) -> Tuple[float, float, float, float]:
    """
    Get the bounding box of a path, optionally with a buffer.

    Args:
        points: Path points (must not be empty)
        buffer: Buffer distance in metres (default: 0.0)

    Returns:
        Tuple of (south, west, north, east) in decimal degrees
    """
    latitudes = [p.lat for p in points]
    longitudes = [p.lng for p in points]

    min_lat, max_lat = min(latitudes), max(latitudes)
    min_lng, max_lng = min(longitudes), max(longitudes)

    # 1 degree latitude ≈ 111 km; longitude degrees shrink with latitude
    avg_lat = (min_lat + max_lat) / 2
    lat_buffer = buffer / 111000.0
    lng_buffer = buffer / (111000.0 * max(abs(cos(radians(avg_lat))), 1e-6))

    south = max(-90.0, min_lat - lat_buffer)
    north = min(90.0, max_lat + lat_buffer)
    west = max(-180.0, min_lng - lng_buffer)
    east = min(180.0, max_lng + lng_buffer)

    return (south, west, north, east)


def create_path_map(
    points: Sequence[Point],
    output_filename: str,
    config: ZPolylineConfig,
) -> None:
    """
    Create an interactive map showing the path, save as HTML.

    Args:
        points: Path points to draw
        output_filename: Path where HTML map file should be saved
        config: ZPolylineConfig containing settings like bbox_buffer

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot create map for empty path")

    south, west, north, east = get_bbox(points, config.bbox_buffer)

    center_lat = (south + north) / 2
    center_lng = (west + east) / 2

    logger.debug(f"Creating map centered at ({center_lat:.4f}, {center_lng:.4f})")

    path_map = folium.Map(
        location=[center_lat, center_lng],
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(path_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(path_map)

    folium.LayerControl().add_to(path_map)

    summary = summarize(points)
    popup = (
        f"{summary.points} points; {summary.length / 1000:.2f} km; "
        f"mean bearing {summary.average_bearing:.1f}°"
    )

    folium.PolyLine(
        [[p.lat, p.lng] for p in points],
        color="#2E86AB",
        weight=3,
        opacity=0.8,
        popup=popup,
    ).add_to(path_map)

    folium.Marker(
        [points[0].lat, points[0].lng],
        popup="Start",
        icon=folium.Icon(color="green", icon="play"),
    ).add_to(path_map)

    folium.Marker(
        [points[-1].lat, points[-1].lng],
        popup="End",
        icon=folium.Icon(color="red", icon="stop"),
    ).add_to(path_map)

    centroid = summary.centroid
    centroid_popup = "Centroid"
    if isinstance(centroid, LatLngEle):
        centroid_popup += f" (mean elevation {centroid.ele:.1f} m)"
    folium.CircleMarker(
        [centroid.lat, centroid.lng],
        radius=5,
        color="#D23C4C",
        fill=True,
        popup=centroid_popup,
    ).add_to(path_map)

    path_map.fit_bounds([[south, west], [north, east]])

    path_map.save(output_filename)

    logger.debug(f"Map saved to {output_filename} with {len(points)} points")
