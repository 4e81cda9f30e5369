# runroutes/models/route.py

from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

SurfaceType = Literal["paved", "trail", "mixed"]
RouteShape = Literal["loop", "point-to-point", "out-and-back"]


class Coordinate(BaseModel):
    """
    Simple latitude/longitude coordinate.
    """
    lat: float
    lon: float


class RouteGeometry(BaseModel):
    """
    Path of a route as a GeoJSON-like LineString.

    coordinates is a list of (lon, lat) pairs, GeoJSON order, e.g.:
    [
        (-87.6298, 41.8781),
        (-87.6301, 41.8795),
        ...
    ]
    The first pair is where the route starts.
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["LineString"] = "LineString"
    coordinates: List[Tuple[float, float]]


class Route(BaseModel):
    """
    One runnable path, either a generated candidate or a catalog entry.

    Routes are read-only once built: scoring wraps them, it never edits them.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None

    distance: float = Field(gt=0, description="Length in miles")
    elevation_gain: float = Field(ge=0, description="Total climb in feet")
    surface_type: SurfaceType
    route_shape: RouteShape
    has_lighting: bool

    safety_score: float = Field(ge=0, le=100)
    scenic_score: float = Field(ge=0, le=100)
    popularity: float = Field(ge=0, le=100)
    weather_comfort: float = Field(ge=0, le=100)

    geojson: RouteGeometry
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
