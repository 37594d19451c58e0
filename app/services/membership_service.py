"""Membership service."""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.core.ids import parse_id
from app.core.timeutils import utcnow
from app.models.club import Club
from app.models.membership import (
    Membership,
    MEMBERSHIP_ACTIVE,
    MEMBERSHIP_EXPIRED,
    FREE_JOIN_PAYMENT_ID,
)
from app.models.user import User
from app.schemas.membership import ClubMemberItem
from app.services.club_service import club_service
from app.services.ownership import get_owned_club

logger = logging.getLogger(__name__)

ALREADY_MEMBER = "You are already an active member of this club."


class MembershipService:
    """Service for joining clubs and managing membership status."""

    async def get_active_membership(
        self, db: AsyncSession, email: str, club_id: str
    ) -> Optional[Membership]:
        """Return the user's active membership in a club, if any."""
        result = await db.execute(
            select(Membership).where(
                Membership.user_email == email,
                Membership.club_id == club_id,
                Membership.status == MEMBERSHIP_ACTIVE,
            )
        )
        return result.scalar_one_or_none()

    def add_membership(
        self,
        db: AsyncSession,
        club: Club,
        email: str,
        payment_id: str,
        expires_at: Optional[datetime] = None,
    ) -> Membership:
        """
        Stage a new active membership and add the user to the club's member set.

        The caller commits. A concurrent duplicate fails at commit on the
        active-membership unique index.
        """
        membership = Membership(
            user_email=email,
            club_id=club.id,
            status=MEMBERSHIP_ACTIVE,
            payment_id=payment_id,
            joined_at=utcnow(),
            expires_at=expires_at,
        )
        db.add(membership)
        club_service.add_member(club, email)
        return membership

    def paid_expiry(self, joined_at: Optional[datetime] = None) -> datetime:
        """Expiry timestamp for a membership bought now."""
        return (joined_at or utcnow()) + timedelta(days=settings.MEMBERSHIP_DURATION_DAYS)

    async def join_free(self, db: AsyncSession, email: str, club_id: str) -> Membership:
        """
        Join an approved club that charges no membership fee.

        Args:
            db: Database session
            email: Joining member
            club_id: Club id

        Returns:
            The new active membership
        """
        club = await club_service.get_approved(db, club_id)

        if float(club.membership_fee or 0) > 0:
            raise BadRequestError("This club requires a membership fee. Please complete payment to join.")

        if await self.get_active_membership(db, email, club.id):
            raise DuplicateError(ALREADY_MEMBER)

        membership = self.add_membership(db, club, email, FREE_JOIN_PAYMENT_ID)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicateError(ALREADY_MEMBER)

        logger.info(f"{email} joined club {club.id} for free")
        return membership

    async def expire_membership(
        self, db: AsyncSession, membership_id: str, manager_email: str
    ) -> Tuple[Membership, bool]:
        """
        Mark a membership as expired.

        Only the manager of the membership's club may do this.

        Returns:
            The membership and whether its status changed
        """
        membership_id = parse_id(membership_id, "membership id")
        result = await db.execute(select(Membership).where(Membership.id == membership_id))
        membership = result.scalar_one_or_none()
        if not membership:
            raise NotFoundError("Membership not found.")

        try:
            await get_owned_club(db, membership.club_id, manager_email)
        except NotFoundError:
            raise NotFoundError("Membership not found.")

        if membership.status == MEMBERSHIP_EXPIRED:
            return membership, False

        membership.status = MEMBERSHIP_EXPIRED
        await db.commit()

        logger.info(f"Membership {membership.id} expired by {manager_email}")
        return membership, True

    async def list_club_members(
        self, db: AsyncSession, club_id: str, manager_email: str
    ) -> List[ClubMemberItem]:
        """List a managed club's memberships with each member's profile."""
        club = await get_owned_club(db, club_id, manager_email)

        result = await db.execute(
            select(Membership, User)
            .outerjoin(User, User.email == Membership.user_email)
            .where(Membership.club_id == club.id)
            .order_by(Membership.joined_at.desc())
        )

        items = []
        for membership, user in result.all():
            item = ClubMemberItem.model_validate(membership)
            if user:
                item.user_name = user.name
                item.photo_url = user.photo_url
            items.append(item)
        return items

    async def expire_overdue(self, db: AsyncSession, now: Optional[datetime] = None) -> int:
        """
        Expire paid memberships whose term has ended.

        Returns:
            Number of memberships expired
        """
        now = now or utcnow()
        result = await db.execute(
            update(Membership)
            .where(
                Membership.status == MEMBERSHIP_ACTIVE,
                Membership.expires_at.is_not(None),
                Membership.expires_at < now,
            )
            .values(status=MEMBERSHIP_EXPIRED)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return result.rowcount or 0


# Singleton instance
membership_service = MembershipService()
