"""
Elevation lookup through the Google Maps Elevation API.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging
import os
import time

import requests

from .geometry import LatLng, LatLngEle
from .polyline import encode_polyline

ELEVATION_API_URL = "https://maps.googleapis.com/maps/api/elevation/json"
API_KEY_ENV_VAR = "GOOGLE_MAPS_API_KEY"
DEFAULT_API_TIMEOUT = 30.0

# Maximum number of 'lat,lng' pairs the API allows in a single request
MAX_LOCATIONS_PER_REQUEST = 512

logger = logging.getLogger(__name__)


class ElevationError(Exception):
    """Raised when the elevation service cannot be used or reports an error."""

    pass


def _is_retryable_error(e: requests.exceptions.HTTPError) -> bool:
    """Check if an HTTP error is retryable."""
    if e.response is not None:
        return e.response.status_code == 429 or e.response.status_code >= 500
    return False


def _parse_results(payload: Dict[str, Any]) -> List[LatLngEle]:
    status = payload.get("status")
    if status != "OK":
        message = payload.get("error_message", "no error message")
        raise ElevationError(f"Elevation API returned {status}: {message}")

    return [
        LatLngEle(
            lat=result["location"]["lat"],
            lng=result["location"]["lng"],
            ele=result["elevation"],
        )
        for result in payload.get("results", [])
    ]


class ElevationClient:
    """Looks up elevations for 'lat,lng' points in batches."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_API_TIMEOUT,
        max_locations_per_request: int = MAX_LOCATIONS_PER_REQUEST,
        base_url: str = ELEVATION_API_URL,
        max_retries: int = 3,
        base_delay: float = 2.0,
    ):
        """Initializes an ElevationClient.

        Args:
            api_key: API key; defaults to the GOOGLE_MAPS_API_KEY variable
            timeout: Per-request timeout in seconds
            max_locations_per_request: Batch size for each request
            base_url: Elevation API endpoint
            max_retries: Retries for rate limiting and server errors
            base_delay: First retry delay in seconds, doubled on each retry

        Raises:
            ElevationError: If no API key is available
            ValueError: If max_locations_per_request is not positive
        """
        key = api_key or os.environ.get(API_KEY_ENV_VAR)
        if not key:
            raise ElevationError(
                f"No API key given and {API_KEY_ENV_VAR} is not set"
            )
        if max_locations_per_request < 1:
            raise ValueError("max_locations_per_request must be at least 1")

        self.api_key = key
        self.timeout = timeout
        self.max_locations_per_request = max_locations_per_request
        self.base_url = base_url
        self.max_retries = max_retries
        self.base_delay = base_delay

    def elevation(self, lls: Sequence[LatLng]) -> List[LatLngEle]:
        """
        Determine the elevation for each 'lat,lng' pair in lls.

        Args:
            lls: Points to look up, in order

        Returns:
            One LatLngEle per input point, in the same order

        Raises:
            ElevationError: If the API reports an error
            requests.exceptions.RequestException: On network or HTTP errors
                after retries
        """
        lles: List[LatLngEle] = []
        per = self.max_locations_per_request

        for start in range(0, len(lls), per):
            batch = lls[start : start + per]
            logger.debug(
                f"Requesting elevation for points {start}-{start + len(batch) - 1}"
            )
            lles.extend(self._fetch(batch))

        return lles

    def _fetch(self, lls: Sequence[LatLng]) -> List[LatLngEle]:
        # the encoded form keeps a full batch well inside the URL length limit
        params = {"locations": "enc:" + encode_polyline(lls), "key": self.api_key}
        attempt = 0

        while True:
            try:
                response = requests.get(
                    self.base_url, params=params, timeout=self.timeout
                )
                response.raise_for_status()
                lles = _parse_results(response.json())
                if len(lles) != len(lls):
                    raise ElevationError(
                        f"Requested {len(lls)} elevations, received {len(lles)}"
                    )
                return lles

            except requests.exceptions.HTTPError as e:
                status_code = e.response.status_code if e.response is not None else None
                if _is_retryable_error(e) and attempt < self.max_retries:
                    delay = self.base_delay * (2**attempt)
                    error_type = (
                        "Server error"
                        if status_code and status_code >= 500
                        else "Rate limited"
                    )
                    logger.warning(
                        f"{error_type} ({status_code}), retrying in {delay:.0f}s "
                        f"(attempt {attempt + 1} of {self.max_retries + 1})"
                    )
                    time.sleep(delay)
                    attempt += 1
                    continue
                logger.debug(f"Not retrying: status={status_code}, attempt={attempt}")
                raise
