# runroutes/services/scoring.py
from typing import Optional

from runroutes.models.recommendation import (
    RecommendationPreferences,
    ScoreBreakdown,
    ScoredRoute,
)
from runroutes.models.route import Route

# Elevation gain (feet) at which the normalised climb saturates at 1.0
ELEVATION_SATURATION_FT = 200.0

# Proximity cap (miles) used when the caller sets no max distance
DEFAULT_PROXIMITY_CAP_MILES = 10.0

NEUTRAL_SCORE = 0.5
SURFACE_MATCH_BONUS = 0.1


def lighting_score(has_lighting: bool, night_mode: bool) -> float:
    if night_mode:
        return 1.0 if has_lighting else 0.2
    return 0.7 if has_lighting else 0.5


def elevation_score(elevation_gain: float, prefer_hills: Optional[bool]) -> float:
    if prefer_hills is None:
        return NEUTRAL_SCORE
    normalised = min(elevation_gain / ELEVATION_SATURATION_FT, 1.0)
    return normalised if prefer_hills else 1.0 - normalised


def distance_match_score(
    distance: float,
    target: Optional[float],
    tolerance: float,
) -> float:
    """
    How well a route length matches the target.

    1.0 on target, 0.5 at the edge of the tolerance band, then a linear
    falloff reaching 0 at twice the tolerance.
    """
    if target is None:
        return 1.0

    diff = abs(distance - target)
    if diff <= tolerance:
        return 1.0 - (diff / tolerance) * 0.5
    return max(0.0, 1.0 - (diff - tolerance) / tolerance)


def proximity_score(
    proximity_miles: Optional[float],
    max_distance_miles: Optional[float],
) -> float:
    """
    1.0 at the user's location, 0.5 at the cap, 0 beyond it.
    """
    if proximity_miles is None:
        return NEUTRAL_SCORE

    cap = max_distance_miles if max_distance_miles else DEFAULT_PROXIMITY_CAP_MILES
    if proximity_miles > cap:
        return 0.0
    return 1.0 - (proximity_miles / cap) * 0.5


def score_route(
    route: Route,
    preferences: RecommendationPreferences,
    proximity_miles: Optional[float] = None,
) -> ScoredRoute:
    """
    Score a single route against the preferences.

    Every sub-score lands in [0, 1] before weighting. The weighted sum plus
    the surface bonus is scaled to 0-100 and capped at 100; there is no
    lower clamp. `proximity_miles` is the distance from the user to the
    route start, when known.
    """
    weights = preferences.resolved_weights()

    scenic = route.scenic_score / 100.0
    safety = route.safety_score / 100.0
    lighting = lighting_score(route.has_lighting, bool(preferences.night_mode))
    elevation = elevation_score(route.elevation_gain, preferences.prefer_hills)
    popularity = route.popularity / 100.0
    distance = distance_match_score(
        route.distance, preferences.target_distance, preferences.tolerance
    )

    surface = preferences.surface_filter
    surface_bonus = 0.0
    if surface is not None and route.surface_type == surface:
        surface_bonus = SURFACE_MATCH_BONUS

    proximity = proximity_score(proximity_miles, preferences.max_distance_miles)

    weighted = (
        scenic * weights.scenic
        + safety * weights.safety
        + lighting * weights.lighting
        + elevation * weights.elevation
        + popularity * weights.popularity
        + proximity * weights.proximity
        + distance * weights.distance
        + surface_bonus
    )

    return ScoredRoute(
        # Only the base route fields; the input may itself be a ScoredRoute
        **{name: getattr(route, name) for name in Route.model_fields},
        score=min(100.0, weighted * 100.0),
        score_breakdown=ScoreBreakdown(
            scenic=scenic * 100.0,
            safety=safety * 100.0,
            lighting=lighting * 100.0,
            elevation=elevation * 100.0,
            popularity=popularity * 100.0,
            distance=distance * 100.0,
            proximity=proximity * 100.0,
        ),
    )
