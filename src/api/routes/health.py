"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core import config


def store_configured() -> bool:
    """The Notion key and both database ids are set."""
    return bool(
        config.NOTION_API_KEY and config.NOTION_TIME_TRACKING_DB_ID and config.NOTION_CALENDAR_DB_ID
    )


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if unhealthy.
    """
    configured = store_configured()
    timestamp = datetime.now(timezone.utc).isoformat()

    if configured:
        return HealthResponse(
            status="healthy",
            version=config.API_VERSION,
            store_configured=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=config.API_VERSION,
                store_configured=False,
                timestamp=timestamp,
                error="Notion store not configured",
            ).model_dump(),
        )
