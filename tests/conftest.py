# tests/conftest.py
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import runroutes" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from runroutes.models.route import Route, RouteGeometry  # noqa: E402

# Downtown Chicago, used as the user location in most tests
USER_LAT = 41.8781
USER_LNG = -87.6298


def build_route(route_id="r1", start=(USER_LNG, USER_LAT), **overrides) -> Route:
    """
    Route with middling attributes; pass keyword overrides for what a test cares about.
    `start` is a (lon, lat) pair, or None for a route with no geometry.
    """
    coordinates = [] if start is None else [start, (start[0] + 0.001, start[1] + 0.001)]
    fields = {
        "id": route_id,
        "name": f"Route {route_id}",
        "distance": 4.0,
        "elevation_gain": 100.0,
        "surface_type": "paved",
        "route_shape": "loop",
        "has_lighting": True,
        "safety_score": 70,
        "scenic_score": 70,
        "popularity": 50,
        "weather_comfort": 80,
        "geojson": RouteGeometry(coordinates=coordinates),
    }
    fields.update(overrides)
    return Route(**fields)


@pytest.fixture
def make_route():
    return build_route


@pytest.fixture
def mixed_routes():
    """
    A handful of routes spread around the user location.
    """
    return [
        build_route("paved-lit-near", surface_type="paved", has_lighting=True, scenic_score=80),
        build_route("trail-dark-near", surface_type="trail", has_lighting=False, scenic_score=95),
        build_route(
            "mixed-lit-far",
            surface_type="mixed",
            has_lighting=True,
            # about 6.9 miles north
            start=(USER_LNG, USER_LAT + 0.1),
        ),
        build_route("paved-dark-near", surface_type="paved", has_lighting=False, safety_score=40),
        build_route("trail-lit-mid", surface_type="trail", has_lighting=True, start=(USER_LNG, USER_LAT + 0.03)),
        build_route("no-geometry", start=None, surface_type="paved", popularity=90),
    ]
