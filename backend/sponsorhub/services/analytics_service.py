"""
Analytics Service - admin dashboard aggregations

All figures are computed with GROUP BY queries. Queries run sequentially
because an AsyncSession does not support concurrent use.
"""

import calendar
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import select, func, case, extract

from sponsorhub.models.collaboration import Collaboration
from sponsorhub.models.event import Event, EventStatus
from sponsorhub.models.proposal import SponsorshipProposal
from sponsorhub.models.user import User, UserRole
from sponsorhub.services.base import BaseService

TREND_MONTHS = 6


def months_ago(now: datetime, months: int) -> datetime:
    """Same day-of-month ``months`` earlier, clamped to the month's length"""
    month_index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def _flag_sum(condition):
    return func.sum(case((condition, 1), else_=0))


def _key(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


class AnalyticsService(BaseService):

    async def overview(self) -> Dict[str, Any]:
        user_rows = await self.db.execute(
            select(
                User.role,
                func.count(User.id),
                _flag_sum(User.is_active.is_(True)),
                _flag_sum(User.is_verified.is_(True)),
            ).group_by(User.role)
        )
        users = {"total": 0, "by_role": {}}
        for role, count, active, verified in user_rows.all():
            users["total"] += count
            users["by_role"][_key(role)] = {
                "total": count,
                "active": int(active or 0),
                "verified": int(verified or 0),
            }

        event_rows = await self.db.execute(
            select(
                Event.status,
                func.count(Event.id),
                _flag_sum(Event.is_approved.is_(True)),
            ).group_by(Event.status)
        )
        events = {"total": 0, "by_status": {}, "total_approved": 0}
        for status, count, approved in event_rows.all():
            approved = int(approved or 0)
            events["total"] += count
            events["by_status"][_key(status)] = {"total": count, "approved": approved}
            events["total_approved"] += approved

        return {
            "users": users,
            "events": events,
            "proposals": await self._status_counts(SponsorshipProposal),
            "collaborations": await self._status_counts(Collaboration),
            "generated_at": datetime.utcnow(),
        }

    async def _status_counts(self, model) -> Dict[str, Any]:
        rows = await self.db.execute(
            select(model.status, func.count(model.id)).group_by(model.status)
        )
        counts = {"total": 0, "by_status": {}}
        for status, count in rows.all():
            counts["total"] += count
            counts["by_status"][_key(status)] = count
        return counts

    async def trends(self, now: datetime = None) -> Dict[str, Any]:
        now = now or datetime.utcnow()
        since = months_ago(now, TREND_MONTHS)

        user_year = extract("year", User.created_at)
        user_month = extract("month", User.created_at)
        user_rows = await self.db.execute(
            select(
                user_year,
                user_month,
                func.count(User.id),
                _flag_sum(User.role == UserRole.ORGANIZER),
                _flag_sum(User.role == UserRole.SPONSOR),
                _flag_sum(User.role == UserRole.ADMIN),
            )
            .where(User.created_at >= since)
            .group_by(user_year, user_month)
            .order_by(user_year, user_month)
        )
        user_trends: List[Dict[str, Any]] = []
        for year, month, count, organizers, sponsors, admins in user_rows.all():
            year, month = int(year), int(month)
            user_trends.append({
                "period": f"{calendar.month_name[month]} {year}",
                "year": year,
                "month": month,
                "total": count,
                "organizers": int(organizers or 0),
                "sponsors": int(sponsors or 0),
                "admins": int(admins or 0),
            })

        event_year = extract("year", Event.created_at)
        event_month = extract("month", Event.created_at)
        event_rows = await self.db.execute(
            select(
                event_year,
                event_month,
                func.count(Event.id),
                _flag_sum(Event.status == EventStatus.DRAFT),
                _flag_sum(Event.status == EventStatus.PUBLISHED),
                _flag_sum(Event.is_approved.is_(True)),
            )
            .where(Event.created_at >= since)
            .group_by(event_year, event_month)
            .order_by(event_year, event_month)
        )
        event_trends: List[Dict[str, Any]] = []
        for year, month, count, draft, published, approved in event_rows.all():
            year, month = int(year), int(month)
            event_trends.append({
                "period": f"{calendar.month_name[month]} {year}",
                "year": year,
                "month": month,
                "total": count,
                "draft": int(draft or 0),
                "published": int(published or 0),
                "approved": int(approved or 0),
            })

        return {
            "user_trends": user_trends,
            "event_trends": event_trends,
            "period_start": since,
            "generated_at": now,
        }
