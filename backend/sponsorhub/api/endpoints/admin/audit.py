from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.logging_config import logger
from sponsorhub.models.audit_log import AuditLog


async def log_admin_action(
    db: AsyncSession,
    admin_id: str,
    action: str,
    target_type: str,
    target_id: str = None,
    details: dict = None,
    request: Request = None
):
    """Log an admin action to audit log"""
    log = AuditLog(
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=details,
        ip_address=request.client.host if request and request.client else None,
        user_agent=request.headers.get("user-agent") if request else None
    )
    db.add(log)
    await db.commit()
    logger.info(f"Admin action: {action} on {target_type} {target_id} by {admin_id}")
