"""
Admin API endpoints for the SponsorHub moderation dashboard.
All endpoints require the admin role.
"""
from fastapi import APIRouter

from sponsorhub.api.endpoints.admin import users, events, analytics, audit_logs

admin_router = APIRouter(prefix="/admin", tags=["Admin Dashboard"])

# Include all admin sub-routers
admin_router.include_router(users.router, prefix="/users", tags=["Admin Users"])
admin_router.include_router(events.router, prefix="/events", tags=["Admin Events"])
admin_router.include_router(analytics.router, prefix="/analytics", tags=["Admin Analytics"])
admin_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["Admin Audit Logs"])
