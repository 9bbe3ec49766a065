#!/usr/bin/env python3
"""
Filename utilities for generating output filenames.
"""

import os
import logging

logger = logging.getLogger(__name__)

MAX_NUMBERED_VARIANTS = 99


def generate_output_filename(input_filename: str) -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Strategy:
    1. If input ends with .gpx (case-insensitive), drop it
    2. Append " map.html"
    3. If file exists, try " (1).html", " (2).html", etc.
    4. Use exclusive open (`open(path, 'x')`) to reserve the name.

    Args:
        input_filename: Path to the input GPX file, or a bare base name

    Returns:
        Filename that has been created as an empty file to reserve its name

    Raises:
        RuntimeError: If every numbered variant is taken
        ValueError: If a file cannot be created (e.g. permissions)
    """
    input_dir = os.path.dirname(input_filename)
    input_base = os.path.basename(input_filename)

    if input_base.lower().endswith(".gpx"):
        base_name = input_base[:-4]
    else:
        base_name = input_base

    base_output = os.path.join(input_dir, base_name + " map")
    candidates = [base_output + ".html"] + [
        f"{base_output} ({i}).html" for i in range(1, MAX_NUMBERED_VARIANTS + 1)
    ]

    for candidate in candidates:
        try:
            with open(candidate, "x"):
                pass
            return candidate
        except FileExistsError:
            continue
        except OSError as e:
            logger.error(f"Cannot create file {candidate}: {e}")
            raise ValueError(f"Cannot create file: {e}")

    logger.error(
        f"Could not find an available filename after {len(candidates)} attempts. "
        f"Please clean up your output directory or specify --output explicitly."
    )
    raise RuntimeError(
        f"No available filename found after {len(candidates)} attempts"
    )
