# runroutes/services/geo.py
import math
from typing import Optional

from runroutes.models.route import Coordinate, Route

EARTH_RADIUS_MILES = 3958.8


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute great-circle distance between two points (lat/lon in degrees), in miles.

    Coordinates are not validated: out-of-range input gives a meaningless
    but finite result.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push h just past 1 for antipodal points
    h = min(h, 1.0)
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_between(a: Coordinate, b: Coordinate) -> float:
    return haversine_miles(a.lat, a.lon, b.lat, b.lon)


def route_start(route: Route) -> Optional[Coordinate]:
    """
    Coordinate of the first point of the route geometry, or None if it has no points.
    """
    coords = route.geojson.coordinates
    if not coords:
        return None
    # GeoJSON order is (lon, lat)
    lon, lat = coords[0][0], coords[0][1]
    return Coordinate(lat=lat, lon=lon)
