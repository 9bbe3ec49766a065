from dataclasses import dataclass
from typing import Optional


@dataclass
class ZPolylineConfig:
    """Configuration for the zpolyline CLI."""

    api_key: Optional[str] = None
    timeout: float = 30.0
    max_locations_per_request: int = 512
    bbox_buffer: float = 50.0
    log_level: str = "WARNING"
