# runroutes/services/recommendation_service.py

from time import perf_counter

from runroutes.core.logger import logger
from runroutes.models.recommendation import RecommendRequest, RecommendResponse
from runroutes.services.candidate_source import CandidateSource
from runroutes.services.recommendation import recommend

NO_ROUTES_MESSAGE = "No routes found. Please try a different starting location."


class RecommendationService:
    """
    High-level recommendation service:
    - asks the candidate source for routes near the user
    - filters, scores and ranks them
    """

    def __init__(self, candidate_source: CandidateSource) -> None:
        self.candidate_source = candidate_source

    def recommend(self, request: RecommendRequest) -> RecommendResponse:
        """
        Main entry point for the /recommend endpoint.

        Raises CandidateSourceError when the candidate source fails outright.
        """
        t0 = perf_counter()
        preferences = request.to_preferences()

        logger.info(
            "Received recommendation request at ({:.6f}, {:.6f}), target={:.2f} mi, limit={}",
            request.user_lat,
            request.user_lng,
            request.target_distance,
            request.limit,
        )

        candidates = self.candidate_source.generate_candidates(
            user_lat=request.user_lat,
            user_lng=request.user_lng,
            target_distance_miles=request.target_distance,
            route_type=request.route_shape,
            preferences=preferences,
        )
        t_fetch = perf_counter()
        logger.info(
            "Candidate source returned {} routes in {:.2f} ms",
            len(candidates),
            (t_fetch - t0) * 1000.0,
        )

        if not candidates:
            return RecommendResponse(
                routes=[],
                count=0,
                preferences=preferences,
                message=NO_ROUTES_MESSAGE,
            )

        ranked = recommend(candidates, preferences, request.limit)

        logger.info(
            "Returning {} recommendations (top score {:.1f}) in {:.2f} ms",
            len(ranked),
            ranked[0].score if ranked else 0.0,
            (perf_counter() - t0) * 1000.0,
        )

        return RecommendResponse(
            routes=ranked,
            count=len(ranked),
            preferences=preferences,
        )
