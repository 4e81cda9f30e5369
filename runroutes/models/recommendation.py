# runroutes/models/recommendation.py

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from runroutes.core.config import settings
from runroutes.models.route import Route

PreferredSurface = Literal["paved", "trail", "mixed", "any"]
CandidateShape = Literal["loop", "out-and-back"]

DEFAULT_DISTANCE_TOLERANCE = 2.0


class ScoringWeights(BaseModel):
    """
    Per-factor weights with every default filled in.

    Weights conventionally sum to about 1.0 but nothing enforces it.
    The distance-match weight is fixed and cannot be set by callers.
    """
    model_config = ConfigDict(frozen=True)

    scenic: float = 0.25
    safety: float = 0.25
    lighting: float = 0.15
    elevation: float = 0.10
    popularity: float = 0.10
    proximity: float = 0.15
    distance: float = 0.15


class RecommendationPreferences(BaseModel):
    """
    What the caller wants from a route. Every field is optional.
    """
    # Distance preference, miles
    target_distance: Optional[float] = None
    distance_tolerance: Optional[float] = None

    # Weights (0-1)
    scenic_weight: Optional[float] = None
    safety_weight: Optional[float] = None
    lighting_weight: Optional[float] = None
    elevation_weight: Optional[float] = None
    popularity_weight: Optional[float] = None
    proximity_weight: Optional[float] = None

    night_mode: Optional[bool] = None
    # True = favour climbing, False = favour flat, None = neutral
    prefer_hills: Optional[bool] = None
    preferred_surface: Optional[PreferredSurface] = None

    # Where the user starts, and how far they are willing to travel to a route start
    user_lat: Optional[float] = None
    user_lng: Optional[float] = None
    max_distance_miles: Optional[float] = None

    def resolved_weights(self) -> ScoringWeights:
        """
        Fill in the default for every weight the caller left unset.
        """
        overrides = {
            "scenic": self.scenic_weight,
            "safety": self.safety_weight,
            "lighting": self.lighting_weight,
            "elevation": self.elevation_weight,
            "popularity": self.popularity_weight,
            "proximity": self.proximity_weight,
        }
        return ScoringWeights(**{k: v for k, v in overrides.items() if v is not None})

    @property
    def tolerance(self) -> float:
        # Non-positive tolerances would invert or divide by zero in the falloff
        if self.distance_tolerance is None or self.distance_tolerance <= 0:
            return DEFAULT_DISTANCE_TOLERANCE
        return self.distance_tolerance

    @property
    def surface_filter(self) -> Optional[str]:
        """
        The surface a route must have, or None when any surface is acceptable.
        """
        if self.preferred_surface is None or self.preferred_surface == "any":
            return None
        return self.preferred_surface

    @property
    def has_location(self) -> bool:
        return self.user_lat is not None and self.user_lng is not None


class ScoreBreakdown(BaseModel):
    """
    Each factor's sub-score on a 0-100 scale, before weighting.

    Diagnostic only: the total is not recomputed from these.
    """
    scenic: float
    safety: float
    lighting: float
    elevation: float
    popularity: float
    distance: float
    proximity: Optional[float] = None


class ScoredRoute(Route):
    """
    A route together with its recommendation score (0-100).
    """
    score: float
    score_breakdown: ScoreBreakdown


class RecommendRequest(RecommendationPreferences):
    """
    Request body for POST /recommend.

    Same fields as the preferences, except that a starting location and a
    target distance are required to generate candidates.
    """
    user_lat: float = Field(ge=-90, le=90)
    user_lng: float = Field(ge=-180, le=180)
    target_distance: float = Field(gt=0)
    limit: int = Field(
        default=settings.DEFAULT_RECOMMENDATION_LIMIT,
        ge=1,
        le=settings.MAX_RECOMMENDATION_LIMIT,
    )
    route_shape: CandidateShape = "loop"

    def to_preferences(self) -> RecommendationPreferences:
        return RecommendationPreferences(
            **self.model_dump(exclude={"limit", "route_shape"})
        )


class RecommendResponse(BaseModel):
    """
    Response for the /recommend endpoint.
    """
    routes: List[ScoredRoute]
    count: int
    preferences: RecommendationPreferences
    message: Optional[str] = None
