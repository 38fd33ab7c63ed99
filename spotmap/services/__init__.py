"""
Services package for the spot map engine.
"""

from .record_parser import parse_records
from .location_catalog import LocationCatalog, ingest
from .dataset_client import DatasetClient
from .positioning_service import LocationPlatform, PositioningService
from .navigation_service import nearest, haversine_m, map_search_url
from .viewport_controller import MapSurface, ViewportController
from .tile_health import TileHealthMonitor
from .tile_source import TileSource
from .map_session import MapSession

__all__ = [
    "parse_records",
    "LocationCatalog",
    "ingest",
    "DatasetClient",
    "LocationPlatform",
    "PositioningService",
    "nearest",
    "haversine_m",
    "map_search_url",
    "MapSurface",
    "ViewportController",
    "TileHealthMonitor",
    "TileSource",
    "MapSession",
]
