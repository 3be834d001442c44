"""
Admin Analytics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.database import get_db
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_admin
from sponsorhub.schemas.admin import AnalyticsOverview, AnalyticsTrends
from sponsorhub.schemas.common import APIResponse
from sponsorhub.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/overview", response_model=APIResponse[AnalyticsOverview])
async def get_overview(
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """Platform-wide KPIs for the dashboard"""
    overview = await AnalyticsService(db).overview()
    return {"success": True, "data": overview}


@router.get("/trends", response_model=APIResponse[AnalyticsTrends])
async def get_trends(
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """New users and events per month over the last six months"""
    trends = await AnalyticsService(db).trends()
    return {"success": True, "data": trends}
