#!/usr/bin/env python3
"""
Command-line interface for encoding, decoding and measuring polylines.

Requirements:
    pip install requests gpxpy folium

"""

from typing import List, Optional, Sequence
import webbrowser
import argparse
import logging
import sys
import os
import requests
from gpxpy import gpx

from . import __version__
from . import visualization
from .config import ZPolylineConfig
from .elevation import ElevationClient, ElevationError
from .file_utils import generate_output_filename
from .geometry import LatLngEle, Point, bearing, distance, lat_lngs
from .gpx import load_gpx, to_gpx_xml
from .polyline import (
    PolylineError,
    decode_polyline,
    decode_zpolyline,
    encode_polyline,
    encode_zpolyline,
)
from .summary import format_summary, log_summary, summarize
from .text import (
    CoordinateParseError,
    format_lat_lng_eles,
    format_lat_lngs,
    parse_lat_lng,
    parse_lat_lng_eles,
    parse_lat_lngs,
)

logger = logging.getLogger("zpolyline")

_HANDLER_NAME = "zpolyline-console"


def _add_z_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-z",
        "--with-elevation",
        dest="z",
        action="store_true",
        help="Use the z-polyline format ('lat,lng,ele' points)",
    )


def _add_polyline_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "polyline",
        type=str,
        help="Encoded polyline, or - to read it from stdin",
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="zpolyline",
        description="Encode, decode and measure polylines and z-polylines",
        epilog=(
            "Quote coordinates that start with '-' with a leading space, "
            "e.g. zpolyline distance ' -33.86,151.2' ' -37.81,144.96'"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"zpolyline {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    encode = subparsers.add_parser(
        "encode", help="Encode '|' separated coordinates or a GPX track"
    )
    _add_z_argument(encode)
    encode.add_argument(
        "points",
        type=str,
        nargs="?",
        help="Points such as '38.5,-120.2|40.7,-120.95', or - for stdin",
    )
    encode.add_argument(
        "--gpx",
        type=str,
        default=None,
        help="Read points from a GPX file instead (- for stdin)",
    )
    encode.set_defaults(handler=run_encode)

    decode = subparsers.add_parser("decode", help="Decode an encoded polyline")
    _add_z_argument(decode)
    _add_polyline_argument(decode)
    decode.add_argument(
        "--format",
        type=str,
        default="text",
        choices=["text", "gpx"],
        help="Output format (default: text)",
    )
    decode.set_defaults(handler=run_decode)

    for name, handler, help_text in (
        ("distance", run_distance, "Great-circle distance in metres"),
        ("bearing", run_bearing, "Initial bearing in degrees"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("start", type=str, help="Start point as 'lat,lng'")
        sub.add_argument("end", type=str, help="End point as 'lat,lng'")
        sub.set_defaults(handler=handler)

    info = subparsers.add_parser(
        "info", help="Summarize length, bearing and centroid of a polyline"
    )
    _add_z_argument(info)
    _add_polyline_argument(info)
    info.set_defaults(handler=run_info)

    elevation = subparsers.add_parser(
        "elevation", help="Add elevations to a polyline, producing a z-polyline"
    )
    _add_polyline_argument(elevation)
    elevation.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Google Maps API key (default: $GOOGLE_MAPS_API_KEY)",
    )
    elevation.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    elevation.add_argument(
        "--batch-size",
        type=int,
        default=512,
        help="Maximum points per elevation request (default: 512)",
    )
    elevation.set_defaults(handler=run_elevation)

    map_parser = subparsers.add_parser("map", help="Draw a polyline on an HTML map")
    _add_z_argument(map_parser)
    map_parser.add_argument(
        "polyline",
        type=str,
        nargs="?",
        help="Encoded polyline, or - to read it from stdin",
    )
    map_parser.add_argument(
        "--gpx",
        type=str,
        default=None,
        help="Draw a GPX file instead of a polyline",
    )
    map_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output HTML map file (default: auto-generated)",
    )
    map_parser.add_argument(
        "--bbox-buffer",
        type=float,
        default=50.0,
        help="Map margin around the path in metres (default: 50)",
    )
    map_parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML file in browser",
    )
    map_parser.set_defaults(handler=run_map)

    return parser


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler.set_name(_HANDLER_NAME)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Suppress overly verbose third-party logging
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def config_from_args(args: argparse.Namespace) -> ZPolylineConfig:
    """Build the configuration from parsed arguments."""
    config = ZPolylineConfig(log_level=args.log_level)
    if getattr(args, "api_key", None):
        config.api_key = args.api_key
    if getattr(args, "timeout", None) is not None:
        config.timeout = args.timeout
    if getattr(args, "batch_size", None) is not None:
        config.max_locations_per_request = args.batch_size
    if getattr(args, "bbox_buffer", None) is not None:
        config.bbox_buffer = args.bbox_buffer
    return config


def _read_argument(value: str) -> str:
    """Return value, or the contents of stdin if value is '-'."""
    if value == "-":
        return sys.stdin.read().strip()
    return value.strip()


def _decode(encoded: str, z: bool) -> Sequence[Point]:
    if z:
        return decode_zpolyline(encoded)
    return decode_polyline(encoded)


def _load_gpx_points(filename: str, z: bool) -> Sequence[Point]:
    points = load_gpx(filename)
    has_elevation = bool(points) and isinstance(points[0], LatLngEle)
    if not z:
        return lat_lngs(points) if has_elevation else points  # type: ignore[arg-type]
    if points and not has_elevation:
        raise ValueError(f"GPX file {filename} has no elevation for every point")
    return points


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except webbrowser.Error as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def run_encode(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    if args.gpx is not None:
        points = _load_gpx_points(args.gpx, args.z)
    elif args.points is not None:
        text = _read_argument(args.points)
        points = parse_lat_lng_eles(text) if args.z else parse_lat_lngs(text)
    else:
        raise ValueError("Either points or --gpx is required")

    logger.info(f"Encoding {len(points)} points")
    if args.z:
        print(encode_zpolyline(points))  # type: ignore[arg-type]
    else:
        print(encode_polyline(points))  # type: ignore[arg-type]


def run_decode(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    points = _decode(_read_argument(args.polyline), args.z)
    logger.info(f"Decoded {len(points)} points")

    if args.format == "gpx":
        print(to_gpx_xml(points))
    elif args.z:
        print(format_lat_lng_eles(points))  # type: ignore[arg-type]
    else:
        print(format_lat_lngs(points))  # type: ignore[arg-type]


def run_distance(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    start, end = parse_lat_lng(args.start), parse_lat_lng(args.end)
    print(f"{distance(start, end):.3f}")


def run_bearing(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    start, end = parse_lat_lng(args.start), parse_lat_lng(args.end)
    print(f"{bearing(start, end):.6f}")


def run_info(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    points = _decode(_read_argument(args.polyline), args.z)
    summary = summarize(points)
    log_summary(summary)
    print(format_summary(summary))


def run_elevation(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    lls = decode_polyline(_read_argument(args.polyline))
    client = ElevationClient(
        api_key=config.api_key,
        timeout=config.timeout,
        max_locations_per_request=config.max_locations_per_request,
    )
    lles = client.elevation(lls)
    logger.info(f"Received elevations for {len(lles)} points")
    print(encode_zpolyline(lles))


def run_map(args: argparse.Namespace, config: ZPolylineConfig) -> None:
    if args.gpx is not None:
        points = _load_gpx_points(args.gpx, args.z)
        base_name = args.gpx if args.gpx != "-" else "stdin"
    elif args.polyline is not None:
        points = _decode(_read_argument(args.polyline), args.z)
        base_name = "polyline"
    else:
        raise ValueError("Either a polyline or --gpx is required")

    if args.output is not None:
        output_filename = args.output
    else:
        output_filename = generate_output_filename(base_name)
    logger.debug(f"Output filename: {output_filename}")

    visualization.create_path_map(points, output_filename, config)
    print(output_filename)

    if not args.no_open:
        open_file_in_browser(output_filename)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments and runs the selected command.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args)
    config = config_from_args(args)

    try:
        args.handler(args, config)
    except PolylineError as e:
        logger.error(f"Invalid polyline: {e}")
        sys.exit(1)
    except CoordinateParseError as e:
        logger.error(f"Invalid coordinates: {e}")
        sys.exit(1)
    except ElevationError as e:
        logger.error(f"Elevation lookup failed: {e}")
        sys.exit(1)
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        sys.exit(1)
    except PermissionError as e:
        logger.error(f"Permission denied: {e.filename}")
        sys.exit(1)
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
        sys.exit(1)
    except (RuntimeError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
