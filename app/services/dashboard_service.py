"""Dashboard service.

Read-only views that merge memberships, registrations and payments with
the clubs and events they reference. Referenced rows are fetched in one
query per table and merged by id.
"""
from typing import Dict, Iterable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timeutils import utcnow
from app.models.club import Club, CLUB_PENDING, CLUB_APPROVED
from app.models.event import Event, EventRegistration
from app.models.membership import Membership, MEMBERSHIP_ACTIVE
from app.models.payment import Payment
from app.models.user import User
from app.schemas.dashboard import AdminStats, ManagerStats, MemberOverview
from app.schemas.membership import MemberClubItem
from app.schemas.event import MemberEventItem
from app.schemas.payment import MemberPaymentItem, PaymentInDB
from app.services.event_service import event_service
from app.services.ownership import owned_club_ids

UPCOMING_EVENTS_LIMIT = 5


async def _clubs_by_id(db: AsyncSession, ids: Iterable[str]) -> Dict[str, Club]:
    ids = {i for i in ids if i}
    if not ids:
        return {}
    result = await db.execute(select(Club).where(Club.id.in_(ids)))
    return {club.id: club for club in result.scalars().all()}


async def _events_by_id(db: AsyncSession, ids: Iterable[str]) -> Dict[str, Event]:
    ids = {i for i in ids if i}
    if not ids:
        return {}
    result = await db.execute(select(Event).where(Event.id.in_(ids)))
    return {event.id: event for event in result.scalars().all()}


async def _count(db: AsyncSession, query) -> int:
    result = await db.execute(query)
    return result.scalar_one() or 0


class DashboardService:
    """Service for member, manager and admin dashboards."""

    async def member_overview(self, db: AsyncSession, email: str) -> MemberOverview:
        """
        Summarize a member's activity.

        Upcoming events are those of clubs the member actively belongs
        to, dated from now on, soonest first.
        """
        active_club_ids = (
            await db.execute(
                select(Membership.club_id).where(
                    Membership.user_email == email,
                    Membership.status == MEMBERSHIP_ACTIVE,
                )
            )
        ).scalars().all()

        total_events = await _count(
            db,
            select(func.count(EventRegistration.id)).where(EventRegistration.user_email == email),
        )
        total_payments = (
            await db.execute(
                select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.user_email == email)
            )
        ).scalar_one()

        upcoming = []
        if active_club_ids:
            result = await db.execute(
                select(Event)
                .where(Event.club_id.in_(active_club_ids), Event.event_date >= utcnow())
                .order_by(Event.event_date.asc())
                .limit(UPCOMING_EVENTS_LIMIT)
            )
            upcoming = await event_service.with_club_fields(db, result.scalars().all())

        return MemberOverview(
            total_clubs=len(set(active_club_ids)),
            total_events=total_events,
            total_payments=float(total_payments or 0),
            upcoming_events=upcoming,
        )

    async def member_clubs(self, db: AsyncSession, email: str) -> List[MemberClubItem]:
        """The member's memberships with club details."""
        result = await db.execute(
            select(Membership)
            .where(Membership.user_email == email)
            .order_by(Membership.joined_at.desc())
        )
        memberships = result.scalars().all()
        clubs = await _clubs_by_id(db, (m.club_id for m in memberships))

        items = []
        for membership in memberships:
            item = MemberClubItem.model_validate(membership)
            club = clubs.get(membership.club_id)
            if club:
                item.club_name = club.club_name
                item.location = club.location
                item.category = club.category
                item.membership_fee = club.membership_fee
            items.append(item)
        return items

    async def member_events(self, db: AsyncSession, email: str) -> List[MemberEventItem]:
        """The member's event registrations with event details."""
        result = await db.execute(
            select(EventRegistration)
            .where(EventRegistration.user_email == email)
            .order_by(EventRegistration.registered_at.desc())
        )
        registrations = result.scalars().all()
        events = await _events_by_id(db, (r.event_id for r in registrations))
        clubs = await _clubs_by_id(db, (r.club_id for r in registrations))

        items = []
        for registration in registrations:
            item = MemberEventItem.model_validate(registration)
            event = events.get(registration.event_id)
            if event:
                item.title = event.title
                item.event_date = event.event_date
                item.event_time = event.event_time
                item.location = event.location
                item.is_paid = event.is_paid
                item.event_fee = event.event_fee
                item.club_name = event.club_name
            club = clubs.get(registration.club_id)
            if club:
                item.club_name = club.club_name
            items.append(item)
        return items

    async def member_payments(self, db: AsyncSession, email: str) -> List[MemberPaymentItem]:
        """The member's ledger rows with what each one paid for."""
        result = await db.execute(
            select(Payment)
            .where(Payment.user_email == email)
            .order_by(Payment.created_at.desc())
        )
        payments = result.scalars().all()
        clubs = await _clubs_by_id(db, (p.club_id for p in payments))
        events = await _events_by_id(db, (p.event_id for p in payments))

        items = []
        for payment in payments:
            item = MemberPaymentItem.model_validate(payment)
            club = clubs.get(payment.club_id)
            if club:
                item.club_name = club.club_name
            event = events.get(payment.event_id)
            if event:
                item.event_title = event.title
            items.append(item)
        return items

    async def manager_stats(self, db: AsyncSession, email: str) -> ManagerStats:
        """Totals over the clubs a manager owns."""
        club_ids = await owned_club_ids(db, email)
        if not club_ids:
            return ManagerStats(total_clubs=0, total_members=0, total_events=0, total_revenue=0)

        total_members = await _count(
            db,
            select(func.count(Membership.id)).where(
                Membership.club_id.in_(club_ids),
                Membership.status == MEMBERSHIP_ACTIVE,
            ),
        )
        total_events = await _count(
            db, select(func.count(Event.id)).where(Event.club_id.in_(club_ids))
        )
        total_revenue = (
            await db.execute(
                select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.club_id.in_(club_ids))
            )
        ).scalar_one()

        return ManagerStats(
            total_clubs=len(club_ids),
            total_members=total_members,
            total_events=total_events,
            total_revenue=float(total_revenue or 0),
        )

    async def admin_stats(self, db: AsyncSession) -> AdminStats:
        """Platform-wide totals."""
        total_revenue = (
            await db.execute(select(func.coalesce(func.sum(Payment.amount), 0)))
        ).scalar_one()

        return AdminStats(
            total_users=await _count(db, select(func.count(User.id))),
            total_clubs=await _count(db, select(func.count(Club.id))),
            pending_clubs=await _count(
                db, select(func.count(Club.id)).where(Club.status == CLUB_PENDING)
            ),
            approved_clubs=await _count(
                db, select(func.count(Club.id)).where(Club.status == CLUB_APPROVED)
            ),
            total_memberships=await _count(
                db,
                select(func.count(Membership.id)).where(Membership.status == MEMBERSHIP_ACTIVE),
            ),
            total_events=await _count(db, select(func.count(Event.id))),
            total_revenue=float(total_revenue or 0),
        )

    async def list_payments(self, db: AsyncSession) -> List[PaymentInDB]:
        """The whole ledger, newest first."""
        result = await db.execute(select(Payment).order_by(Payment.created_at.desc()))
        return [PaymentInDB.model_validate(p) for p in result.scalars().all()]


# Singleton instance
dashboard_service = DashboardService()
