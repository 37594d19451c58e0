"""Club endpoints: public browsing, manager submissions and free joins."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_manager, require_member
from app.core.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.club import (
    ClubCreate,
    ClubCreateResponse,
    ClubInDB,
    ClubPublic,
    ClubUpdate,
)
from app.schemas.membership import JoinClubResponse, MembershipInDB
from app.services.club_service import club_service
from app.services.membership_service import membership_service

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.get("", response_model=List[ClubPublic])
async def list_clubs(
    search: Optional[str] = Query(default=None, description="Case-insensitive club name search"),
    category: Optional[str] = Query(default=None, description="Exact category"),
    sort: Optional[str] = Query(default="newest", description="fee_asc, fee_desc, newest or oldest"),
    db: AsyncSession = Depends(get_db),
):
    """
    List approved clubs.

    Pending and rejected clubs are never included.

    Args:
        search: Substring of the club name
        category: Category filter
        sort: Sort key
        db: Database session

    Returns:
        List of approved clubs
    """
    return await club_service.list_approved(db, search=search, category=category, sort=sort)


@router.get("/categories", response_model=List[str])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """List categories that have at least one approved club."""
    return await club_service.list_categories(db)


@router.get("/{club_id}", response_model=ClubPublic)
async def get_club(
    club_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Get an approved club by ID.

    Args:
        club_id: Club ID
        db: Database session

    Returns:
        Club details
    """
    return await club_service.get_approved(db, club_id)


@router.post("", response_model=ClubCreateResponse, status_code=201)
async def create_club(
    data: ClubCreate,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """
    Submit a new club for admin approval.

    Args:
        data: Club fields
        manager: Signed-in club manager
        db: Database session

    Returns:
        The pending club
    """
    club = await club_service.register_club(db, manager.email, data)
    return ClubCreateResponse(
        message="Club creation request submitted successfully! Awaiting Admin approval.",
        club_id=club.id,
        club=ClubInDB.model_validate(club),
    )


@router.patch("/{club_id}", response_model=ClubInDB)
async def update_club(
    club_id: str,
    data: ClubUpdate,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a club the signed-in manager owns.

    Args:
        club_id: Club ID
        data: Fields to update
        manager: Signed-in club manager
        db: Database session

    Returns:
        Updated club
    """
    return await club_service.update_club(db, club_id, manager.email, data)


@router.delete("/{club_id}", response_model=MessageResponse)
async def delete_club(
    club_id: str,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """Delete a club the signed-in manager owns."""
    await club_service.delete_club(db, club_id, manager_email=manager.email)
    return MessageResponse(message="Club deleted successfully.")


@router.post("/join/{club_id}", response_model=JoinClubResponse, status_code=201)
async def join_club(
    club_id: str,
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Join a free club.

    Clubs with a membership fee must be joined through checkout.

    Args:
        club_id: Club ID
        member: Signed-in member
        db: Database session

    Returns:
        The new membership
    """
    membership = await membership_service.join_free(db, member.email, club_id)
    return JoinClubResponse(
        message="Successfully joined the club!",
        membership=MembershipInDB.model_validate(membership),
    )
