"""Admin endpoints: club review and platform overview."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.core.database import get_db
from app.schemas.club import ClubInDB, ClubStatusUpdate
from app.schemas.common import MessageResponse
from app.schemas.dashboard import AdminStats
from app.schemas.payment import PaymentInDB
from app.services.club_service import club_service
from app.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/clubs", response_model=List[ClubInDB])
async def list_all_clubs(db: AsyncSession = Depends(get_db)):
    """List every club regardless of status, newest first."""
    return await club_service.list_all(db)


@router.patch("/clubs/status/{club_id}", response_model=ClubInDB)
async def set_club_status(
    club_id: str,
    data: ClubStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Approve or reject a club.

    Args:
        club_id: Club ID
        data: New status (approved or rejected)
        db: Database session

    Returns:
        Updated club
    """
    return await club_service.set_status(db, club_id, data.status)


@router.delete("/clubs/{club_id}", response_model=MessageResponse)
async def delete_any_club(
    club_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete any club."""
    await club_service.delete_club(db, club_id)
    return MessageResponse(message="Club deleted successfully.")


@router.get("/stats", response_model=AdminStats)
async def get_admin_stats(db: AsyncSession = Depends(get_db)):
    """Platform-wide totals."""
    return await dashboard_service.admin_stats(db)


@router.get("/payments", response_model=List[PaymentInDB])
async def list_payments(db: AsyncSession = Depends(get_db)):
    """The full payment ledger, newest first."""
    return await dashboard_service.list_payments(db)
