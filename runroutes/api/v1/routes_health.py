# runroutes/api/v1/routes_health.py
from fastapi import APIRouter
from runroutes.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Health check: confirms the API is up and whether a candidate source is configured.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "candidate_source_configured": bool(settings.TRAILROUTER_API_BASE),
    }
