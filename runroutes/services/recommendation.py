# runroutes/services/recommendation.py
from typing import List, Optional, Sequence, Tuple

from runroutes.core.logger import logger
from runroutes.models.recommendation import RecommendationPreferences, ScoredRoute
from runroutes.models.route import Route
from runroutes.services.geo import haversine_miles, route_start
from runroutes.services.scoring import score_route


def _proximity_to_start(
    route: Route,
    preferences: RecommendationPreferences,
) -> Optional[float]:
    """
    Miles from the user's location to the route start.

    None when the user gave no location or the route has no geometry.
    """
    if not preferences.has_location:
        return None

    start = route_start(route)
    if start is None:
        return None

    return haversine_miles(preferences.user_lat, preferences.user_lng, start.lat, start.lon)


def recommend(
    routes: Sequence[Route],
    preferences: RecommendationPreferences,
    limit: int,
) -> List[ScoredRoute]:
    """
    Filter, score and rank candidate routes, returning at most `limit` of them.

    1. Drop routes whose surface differs from the preferred one (unless "any").
    2. In night mode, drop unlit routes.
    3. With a user location, measure the distance to each route start and
       drop routes farther than max_distance_miles (when set).
    4. Score the survivors.
    5. Sort by score, highest first. Ties keep their input order.
    6. Truncate to `limit`.

    `routes` is never modified; the result is a new list.
    """
    surface = preferences.surface_filter

    candidates: List[Tuple[Route, Optional[float]]] = []
    for route in routes:
        if surface is not None and route.surface_type != surface:
            continue
        if preferences.night_mode and not route.has_lighting:
            continue

        proximity = _proximity_to_start(route, preferences)
        if (
            proximity is not None
            and preferences.max_distance_miles is not None
            and proximity > preferences.max_distance_miles
        ):
            continue

        candidates.append((route, proximity))

    scored = [score_route(route, preferences, proximity) for route, proximity in candidates]
    # sorted() is stable, so equal scores stay in input order
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)

    logger.debug(
        "Ranked {} of {} candidate routes (limit={})",
        len(ranked),
        len(routes),
        limit,
    )

    return ranked[: max(limit, 0)]
