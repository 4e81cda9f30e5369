# runroutes/services/candidate_source.py
import random
from typing import Any, Dict, List, Optional, Protocol, Tuple

import httpx
from pydantic import ValidationError

from runroutes.core.config import Settings
from runroutes.core.errors import CandidateSourceError
from runroutes.core.logger import logger
from runroutes.models.recommendation import CandidateShape, RecommendationPreferences
from runroutes.models.route import Route, RouteGeometry

METERS_PER_MILE = 1609.34
FEET_PER_METER = 3.28084


class CandidateSource(Protocol):
    """
    Anything able to produce unscored candidate routes around a location.
    """

    def generate_candidates(
        self,
        user_lat: float,
        user_lng: float,
        target_distance_miles: float,
        num_candidates: Optional[int] = None,
        route_type: CandidateShape = "loop",
        preferences: Optional[RecommendationPreferences] = None,
    ) -> List[Route]:
        ...


class TrailRouterClient:
    """
    Candidate source backed by the TrailRouter experimental routes API.

    TrailRouter query parameters:
    - coordinates: "lng,lat" (longitude first)
    - roundtrip: true for loops, false for out-and-back
    - target_distance: metres
    - green_preference: 0..1, from the scenic weight
    - hills_preference: -1..1 (-1 avoid hills, 0 neutral, 1 prefer hills)
    - avoid_unlit_streets: from night mode
    - avoid_unsafe_streets: when the safety weight is above 0.5
    - avoid_repetition: always true

    Each candidate is a separate request with the target distance varied by
    up to 15% either way, so the service returns different routes.
    """

    DEFAULT_NUM_CANDIDATES: int = 6
    DISTANCE_VARIATION: float = 0.15

    DEFAULT_GREEN_PREFERENCE: float = 0.3
    DEFAULT_SAFETY_WEIGHT: float = 0.3
    HILLS_PREFERENCE: float = 0.7

    def __init__(
        self,
        http_client: httpx.Client,
        base_url: Optional[str],
        api_key: Optional[str] = None,
        num_candidates: int = DEFAULT_NUM_CANDIDATES,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.http_client = http_client
        self.base_url = base_url
        self.api_key = api_key
        self.num_candidates = num_candidates
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.Client) -> "TrailRouterClient":
        return cls(
            http_client=http_client,
            base_url=settings.TRAILROUTER_API_BASE,
            api_key=settings.TRAILROUTER_API_KEY,
            num_candidates=settings.TRAILROUTER_NUM_CANDIDATES,
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def generate_candidates(
        self,
        user_lat: float,
        user_lng: float,
        target_distance_miles: float,
        num_candidates: Optional[int] = None,
        route_type: CandidateShape = "loop",
        preferences: Optional[RecommendationPreferences] = None,
    ) -> List[Route]:
        """
        Request candidate routes around (user_lat, user_lng).

        Candidates whose request or response is unusable are skipped. Raises
        CandidateSourceError only if every request failed.
        """
        if not self.base_url:
            logger.warning("TRAILROUTER_API_BASE not configured. Skipping TrailRouter route generation.")
            return []

        count = self.num_candidates if num_candidates is None else num_candidates
        distance_m = target_distance_miles * METERS_PER_MILE
        base_params = self._preference_params(route_type, preferences)

        candidates: List[Route] = []
        failures = 0

        for i in range(count):
            variation = 1.0 + (self.rng.random() * 2 * self.DISTANCE_VARIATION - self.DISTANCE_VARIATION)
            params = {
                "coordinates": f"{user_lng},{user_lat}",
                "target_distance": f"{distance_m * variation:.0f}",
                **base_params,
            }

            logger.debug("[TrailRouter] Candidate {} request params: {}", i + 1, params)

            try:
                response = self.http_client.get(self.base_url, params=params, headers=self._headers())
            except httpx.HTTPError as exc:
                logger.warning("TrailRouter candidate {} request failed: {}", i + 1, exc)
                failures += 1
                continue

            if not response.is_success:
                logger.warning(
                    "TrailRouter candidate {} failed: {} {}",
                    i + 1,
                    response.status_code,
                    response.text[:200],
                )
                failures += 1
                continue

            try:
                payload = response.json()
            except ValueError:
                logger.warning("TrailRouter candidate {}: response is not JSON", i + 1)
                continue

            route = self._parse_route(payload, i, user_lat, user_lng, route_type)
            if route is not None:
                candidates.append(route)

        if count > 0 and failures == count:
            raise CandidateSourceError(f"All {count} TrailRouter requests failed")

        logger.info("TrailRouter produced {} of {} requested candidates", len(candidates), count)
        return candidates

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _preference_params(
        self,
        route_type: CandidateShape,
        preferences: Optional[RecommendationPreferences],
    ) -> Dict[str, str]:
        """
        Map recommendation preferences onto TrailRouter's routing knobs.
        """
        prefs = preferences or RecommendationPreferences()

        green = prefs.scenic_weight if prefs.scenic_weight is not None else self.DEFAULT_GREEN_PREFERENCE
        if prefs.prefer_hills is None:
            hills = 0.0
        else:
            hills = self.HILLS_PREFERENCE if prefs.prefer_hills else -self.HILLS_PREFERENCE
        safety = prefs.safety_weight if prefs.safety_weight is not None else self.DEFAULT_SAFETY_WEIGHT

        return {
            "roundtrip": _bool_param(route_type == "loop"),
            "green_preference": f"{green:.2f}",
            "hills_preference": f"{hills:.2f}",
            "avoid_unlit_streets": _bool_param(bool(prefs.night_mode)),
            "avoid_unsafe_streets": _bool_param(safety > 0.5),
            "avoid_repetition": "true",
        }

    def _parse_route(
        self,
        payload: Any,
        index: int,
        user_lat: float,
        user_lng: float,
        route_type: CandidateShape,
    ) -> Optional[Route]:
        """
        Build a Route from the first route in a TrailRouter response.

        TrailRouter does not report surface, lighting or quality metrics, so
        those get fixed placeholder values.
        """
        routes = payload.get("routes") if isinstance(payload, dict) else None
        data = routes[0] if isinstance(routes, list) and routes else None
        if not isinstance(data, dict):
            logger.warning("TrailRouter candidate {}: no routes in response", index + 1)
            return None

        geometry = data.get("geometry")
        coordinates = _coordinates_2d(geometry.get("coordinates") if isinstance(geometry, dict) else None)
        if not coordinates:
            logger.warning("TrailRouter candidate {}: no valid geometry coordinates", index + 1)
            return None

        try:
            distance_miles = float(data.get("distance") or 0) / METERS_PER_MILE
            elevation_gain_ft = float(data.get("ascent") or 0) * FEET_PER_METER
        except (TypeError, ValueError):
            logger.warning("TrailRouter candidate {}: non-numeric distance or ascent", index + 1)
            return None

        label = "Loop" if route_type == "loop" else "Out & Back"

        try:
            return Route(
                id=f"trailrouter-{user_lat:.4f}-{user_lng:.4f}-{index}",
                name=f"TrailRouter {label} #{index + 1} ({distance_miles:.1f} mi)",
                description=f"Generated route near {user_lat:.4f}, {user_lng:.4f}",
                distance=distance_miles,
                elevation_gain=elevation_gain_ft,
                surface_type="mixed",
                route_shape=route_type,
                has_lighting=True,
                safety_score=75,
                scenic_score=75,
                popularity=70,
                weather_comfort=80,
                geojson=RouteGeometry(coordinates=coordinates),
            )
        except ValidationError as exc:
            logger.warning("TrailRouter candidate {}: invalid route data: {}", index + 1, exc)
            return None


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def _coordinates_2d(raw: Any) -> List[Tuple[float, float]]:
    """
    Keep (lng, lat) from 2-D or 3-D positions, dropping anything malformed.
    """
    if not isinstance(raw, list):
        return []

    coords: List[Tuple[float, float]] = []
    for point in raw:
        if not isinstance(point, (list, tuple)) or len(point) < 2:
            continue
        try:
            coords.append((float(point[0]), float(point[1])))
        except (TypeError, ValueError):
            continue
    return coords
