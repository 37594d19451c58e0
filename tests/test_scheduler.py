"""
Membership expiry scheduler tests
"""
from datetime import timedelta

from sqlalchemy import select

from app.core.timeutils import utcnow
from app.models import Membership
from app.services.scheduler import MembershipExpiryScheduler


async def _add(session_factory, email, expires_at, status="active"):
    async with session_factory() as db:
        membership = Membership(
            user_email=email,
            club_id="c" * 32,
            status=status,
            payment_id="pi_test",
            expires_at=expires_at,
        )
        db.add(membership)
        await db.commit()
        return membership.id


async def _status(session_factory, membership_id):
    async with session_factory() as db:
        result = await db.execute(select(Membership.status).where(Membership.id == membership_id))
        return result.scalar_one()


class TestMembershipExpiry:
    """MembershipExpiryScheduler.expire_memberships"""

    async def test_expires_only_overdue_memberships(self, session_factory):
        now = utcnow()
        overdue = await _add(session_factory, "late@example.com", now - timedelta(days=1))
        current = await _add(session_factory, "current@example.com", now + timedelta(days=10))
        free = await _add(session_factory, "free@example.com", None)

        scheduler = MembershipExpiryScheduler(session_factory=session_factory)
        expired = await scheduler.expire_memberships()

        assert expired == 1
        assert await _status(session_factory, overdue) == "expired"
        assert await _status(session_factory, current) == "active"
        assert await _status(session_factory, free) == "active"

    async def test_sweep_is_repeatable(self, session_factory):
        await _add(session_factory, "late@example.com", utcnow() - timedelta(hours=1))

        scheduler = MembershipExpiryScheduler(session_factory=session_factory)
        assert await scheduler.expire_memberships() == 1
        assert await scheduler.expire_memberships() == 0

    async def test_start_and_stop(self, session_factory):
        scheduler = MembershipExpiryScheduler(session_factory=session_factory)

        await scheduler.start()
        assert scheduler.running
        assert scheduler.scheduler.get_job("membership_expiry_job") is not None

        await scheduler.stop()
        assert not scheduler.running
