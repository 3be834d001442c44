"""
Admin Audit Logs endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_
from datetime import datetime
from typing import Optional

from sponsorhub.core.database import get_db
from sponsorhub.models.audit_log import AuditLog
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_admin
from sponsorhub.schemas.admin import AuditLogResponse
from sponsorhub.schemas.common import PaginatedResponse, to_naive_utc
from sponsorhub.utils.ids import ensure_valid_id
from sponsorhub.utils.pagination import paginate, MAX_PAGE_SIZE

router = APIRouter()


@router.get("", response_model=PaginatedResponse[AuditLogResponse])
async def list_audit_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    action: Optional[str] = None,
    target_type: Optional[str] = None,
    admin_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
):
    """List audit logs with filtering and pagination"""
    query = select(AuditLog)

    conditions = []
    if action:
        conditions.append(AuditLog.action == action)
    if target_type:
        conditions.append(AuditLog.target_type == target_type)
    if admin_id:
        conditions.append(AuditLog.admin_id == ensure_valid_id(admin_id, "admin"))
    if start_date:
        conditions.append(AuditLog.created_at >= to_naive_utc(start_date))
    if end_date:
        conditions.append(AuditLog.created_at <= to_naive_utc(end_date))
    if search:
        search_term = f"%{search}%"
        conditions.append(or_(
            AuditLog.action.ilike(search_term),
            AuditLog.target_type.ilike(search_term)
        ))

    if conditions:
        query = query.where(and_(*conditions))

    logs, pagination = await paginate(db, query.order_by(AuditLog.created_at.desc()), page, limit)
    return {
        "success": True,
        "data": [AuditLogResponse.model_validate(log) for log in logs],
        "pagination": pagination,
    }
