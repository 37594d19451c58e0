"""Member dashboard endpoints."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_member
from app.core.database import get_db
from app.models.user import User
from app.schemas.dashboard import MemberOverview
from app.schemas.event import MemberEventItem
from app.schemas.membership import MemberClubItem
from app.schemas.payment import MemberPaymentItem
from app.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/member", tags=["member"])


@router.get("/stats-and-upcoming-events", response_model=MemberOverview)
async def get_member_overview(
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Member dashboard summary.

    Returns counts of active clubs, event registrations and total paid,
    plus up to five upcoming events from the member's active clubs.
    """
    return await dashboard_service.member_overview(db, member.email)


@router.get("/clubs", response_model=List[MemberClubItem])
async def list_my_clubs(
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """List the member's memberships with club details."""
    return await dashboard_service.member_clubs(db, member.email)


@router.get("/events", response_model=List[MemberEventItem])
async def list_my_events(
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """List the member's event registrations with event details."""
    return await dashboard_service.member_events(db, member.email)


@router.get("/payments", response_model=List[MemberPaymentItem])
async def list_my_payments(
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """List the member's payments."""
    return await dashboard_service.member_payments(db, member.email)
