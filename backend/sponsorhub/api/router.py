from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.api.endpoints import (
    auth,
    profiles,
    events,
    proposals,
    sponsorship,
    collaborations,
    messages,
    documents,
    notifications,
)
from sponsorhub.api.endpoints.admin import admin_router
from sponsorhub.core.config import settings
from sponsorhub.core.database import get_db
from sponsorhub.core.logging_config import logger

api_router = APIRouter()


@api_router.get("", tags=["Health"])
async def api_root():
    """API root - service name, version and entry points"""
    return {
        "success": True,
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "health": f"{settings.API_PREFIX}/health",
    }


@api_router.get("/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check endpoint for load balancers"""
    database = "connected"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check database ping failed: {e}")
        database = "unavailable"

    return {
        "success": True,
        "status": "healthy" if database == "connected" else "degraded",
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": database,
        "timestamp": datetime.utcnow().isoformat(),
    }


api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profiles.organizer_router, prefix="/organizer", tags=["Organizer"])
api_router.include_router(profiles.sponsor_router, prefix="/sponsor", tags=["Sponsor"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(proposals.router, prefix="/proposals", tags=["Proposals"])
api_router.include_router(sponsorship.router, prefix="/sponsorship", tags=["Sponsorship Requests"])
api_router.include_router(collaborations.router, prefix="/collaborations", tags=["Collaborations"])
api_router.include_router(messages.router, prefix="/messages", tags=["Messages"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(admin_router)
