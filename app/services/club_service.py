"""Club lifecycle service."""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.ids import parse_id
from app.models.club import Club, ClubMember, CLUB_PENDING, CLUB_APPROVED, CLUB_REJECTED
from app.schemas.club import ClubCreate, ClubUpdate
from app.services.ownership import get_owned_club

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    "fee_asc": (Club.membership_fee.asc(), Club.created_at.desc()),
    "fee_desc": (Club.membership_fee.desc(), Club.created_at.desc()),
    "newest": (Club.created_at.desc(),),
    "oldest": (Club.created_at.asc(),),
}
DEFAULT_SORT = "newest"


class ClubService:
    """Service for creating, reviewing and browsing clubs."""

    async def register_club(
        self, db: AsyncSession, manager_email: str, data: ClubCreate
    ) -> Club:
        """
        Submit a new club for admin review.

        The club starts as pending with its manager as the only member.

        Args:
            db: Database session
            manager_email: Email of the submitting manager
            data: Validated club fields

        Returns:
            The created club
        """
        club = Club(
            club_name=data.name,
            description=data.description,
            category=data.category,
            location=data.location,
            banner_image=data.banner_image or None,
            membership_fee=data.membership_fee,
            meeting_schedule=data.meeting_schedule or "TBD",
            manager_email=manager_email,
            status=CLUB_PENDING,
            events_count=0,
        )
        club.members = [ClubMember(user_email=manager_email)]
        db.add(club)
        await db.commit()
        await db.refresh(club)

        logger.info(f"Club {club.id} ({club.club_name}) submitted by {manager_email}")
        return club

    async def list_all(self, db: AsyncSession) -> List[Club]:
        """List every club, newest first."""
        result = await db.execute(select(Club).order_by(Club.created_at.desc()))
        return list(result.scalars().all())

    async def list_for_manager(self, db: AsyncSession, manager_email: str) -> List[Club]:
        """List clubs managed by ``manager_email``, newest first."""
        result = await db.execute(
            select(Club)
            .where(Club.manager_email == manager_email)
            .order_by(Club.created_at.desc())
        )
        return list(result.scalars().all())

    async def set_status(self, db: AsyncSession, club_id: str, status: str) -> Club:
        """
        Record an admin review decision.

        Args:
            db: Database session
            club_id: Club id
            status: approved or rejected

        Returns:
            The updated club
        """
        if status not in (CLUB_APPROVED, CLUB_REJECTED):
            raise BadRequestError("Status must be 'approved' or 'rejected'.")

        club = await self._get(db, club_id)
        club.status = status
        await db.commit()
        await db.refresh(club)

        logger.info(f"Club {club.id} status set to {status}")
        return club

    async def update_club(
        self, db: AsyncSession, club_id: str, manager_email: str, data: ClubUpdate
    ) -> Club:
        """Apply a partial update to a club owned by ``manager_email``."""
        club = await get_owned_club(db, club_id, manager_email)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("No fields to update.")

        for field, value in update_data.items():
            if value is None and field not in ("banner_image", "meeting_schedule"):
                continue
            setattr(club, field, value)

        await db.commit()
        await db.refresh(club)

        logger.info(f"Club {club.id} updated by {manager_email}: {sorted(update_data)}")
        return club

    async def delete_club(
        self, db: AsyncSession, club_id: str, manager_email: Optional[str] = None
    ) -> None:
        """
        Delete a club and its member set.

        With ``manager_email`` the club must be managed by that manager;
        without it (admin path) any club may be deleted. Events and
        memberships that reference the club are not removed.
        """
        if manager_email is None:
            club = await self._get(db, club_id)
        else:
            club = await get_owned_club(db, club_id, manager_email)

        await db.delete(club)
        await db.commit()

        logger.info(f"Club {club_id} deleted by {manager_email or 'admin'}")

    async def list_approved(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Club]:
        """
        List approved clubs for public browsing.

        Args:
            db: Database session
            search: Case-insensitive substring of the club name
            category: Exact category
            sort: fee_asc, fee_desc, newest or oldest

        Returns:
            Matching clubs
        """
        query = select(Club).where(Club.status == CLUB_APPROVED)

        if search:
            query = query.where(Club.club_name.ilike(f"%{search.strip()}%"))
        if category:
            query = query.where(Club.category == category)

        order = SORT_ORDERS.get(sort or DEFAULT_SORT, SORT_ORDERS[DEFAULT_SORT])
        result = await db.execute(query.order_by(*order))
        return list(result.scalars().all())

    async def get_approved(self, db: AsyncSession, club_id: str) -> Club:
        """Get a club that is visible to the public."""
        club_id = parse_id(club_id, "club id")
        result = await db.execute(
            select(Club).where(Club.id == club_id, Club.status == CLUB_APPROVED)
        )
        club = result.scalar_one_or_none()
        if not club:
            raise NotFoundError("Club not found or not approved.")
        return club

    async def list_categories(self, db: AsyncSession) -> List[str]:
        """Distinct categories among approved clubs."""
        result = await db.execute(
            select(Club.category)
            .where(Club.status == CLUB_APPROVED)
            .distinct()
            .order_by(Club.category)
        )
        return list(result.scalars().all())

    def add_member(self, club: Club, email: str) -> None:
        """Add ``email`` to the club's member set. Adding twice is a no-op."""
        if email not in club.member_emails:
            club.members.append(ClubMember(user_email=email))

    async def _get(self, db: AsyncSession, club_id: str) -> Club:
        club_id = parse_id(club_id, "club id")
        result = await db.execute(select(Club).where(Club.id == club_id))
        club = result.scalar_one_or_none()
        if not club:
            raise NotFoundError("Club not found.")
        return club


# Singleton instance
club_service = ClubService()
