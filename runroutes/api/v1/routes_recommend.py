# runroutes/api/v1/routes_recommend.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from runroutes.core.config import settings
from runroutes.core.errors import CandidateSourceError
from runroutes.core.logger import logger
from runroutes.models.recommendation import (
    PreferredSurface,
    RecommendRequest,
    RecommendResponse,
)
from runroutes.services.recommendation_service import RecommendationService

router = APIRouter(
    prefix="/recommend",
    tags=["recommend"],
)


def get_recommendation_service(request: Request) -> RecommendationService:
    """
    Build the service around the candidate source created at app startup.
    """
    return RecommendationService(candidate_source=request.app.state.candidate_source)


def _run(service: RecommendationService, body: RecommendRequest) -> RecommendResponse:
    try:
        return service.recommend(body)
    except CandidateSourceError as exc:
        logger.error("Candidate source error: {}", exc)
        raise HTTPException(status_code=502, detail="Failed to generate routes. Please try again.")


@router.post(
    "/",
    response_model=RecommendResponse,
    summary="Recommend running routes near a starting location",
)
def recommend_routes(
    body: RecommendRequest,
    limit: Optional[int] = Query(
        None,
        ge=1,
        le=settings.MAX_RECOMMENDATION_LIMIT,
        description="Overrides the limit in the body",
    ),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendResponse:
    """
    Generate candidate routes around the user and return the best matches.

    - Candidates come from the TrailRouter route generator.
    - Routes are filtered by surface, lighting and distance to start, then
      ranked by a weighted score (0-100).
    """
    if limit is not None:
        body = body.model_copy(update={"limit": limit})
    return _run(service, body)


@router.get(
    "/",
    response_model=RecommendResponse,
    summary="Recommend running routes (query-string variant)",
)
def recommend_routes_query(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    target_distance: float = Query(..., gt=0),
    distance_tolerance: Optional[float] = None,
    scenic_weight: Optional[float] = None,
    safety_weight: Optional[float] = None,
    night_mode: Optional[bool] = None,
    prefer_hills: Optional[bool] = None,
    preferred_surface: Optional[PreferredSurface] = None,
    radius: Optional[float] = Query(None, description="Max miles from the user to a route start"),
    limit: int = Query(
        settings.DEFAULT_RECOMMENDATION_LIMIT,
        ge=1,
        le=settings.MAX_RECOMMENDATION_LIMIT,
    ),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendResponse:
    body = RecommendRequest(
        user_lat=lat,
        user_lng=lng,
        target_distance=target_distance,
        distance_tolerance=distance_tolerance,
        scenic_weight=scenic_weight,
        safety_weight=safety_weight,
        night_mode=night_mode,
        prefer_hills=prefer_hills,
        preferred_surface=preferred_surface,
        max_distance_miles=radius,
        limit=limit,
    )
    return _run(service, body)
