"""Nearest-spot search and outbound navigation links."""
import math
from typing import Iterable, Tuple

from spotmap.core.exceptions import EmptyCatalogError
from spotmap.models.internal_models import Coordinate
from spotmap.schemas.location import LocationRecord, NearestResult

EARTH_RADIUS_M = 6371008.8
MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={query}"


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in metres on a spherical Earth."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = phi2 - phi1
    dlam = math.radians(b.lng - a.lng)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def _same_distance(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-12, abs_tol=1e-9)


def nearest(fix: Coordinate, catalog: Iterable[LocationRecord]) -> Tuple[LocationRecord, float]:
    """
    Return the record closest to ``fix`` and its distance in metres.

    Linear scan; when two distances are equal within floating-point noise
    the earlier record wins.

    Raises:
        EmptyCatalogError: If the catalog has no records
    """
    best = None
    best_d = math.inf
    for record in catalog:
        d = haversine_m(fix, record.coordinate)
        if best is None or (d < best_d and not _same_distance(d, best_d)):
            best, best_d = record, d
    if best is None:
        raise EmptyCatalogError()
    return best, best_d


def map_search_url(coordinate: Coordinate) -> str:
    """Link handed to the external launcher for turn-by-turn navigation."""
    return MAPS_SEARCH_URL.format(query=coordinate.as_query())


def format_distance(distance_m: float) -> str:
    if distance_m < 1000:
        return f"{distance_m:.0f} m"
    return f"{distance_m / 1000:.1f} km"


def describe_nearest(fix: Coordinate, catalog: Iterable[LocationRecord]) -> NearestResult:
    record, distance = nearest(fix, catalog)
    return NearestResult(
        record=record,
        distance_m=distance,
        distance_text=format_distance(distance),
        maps_url=map_search_url(record.coordinate),
    )
