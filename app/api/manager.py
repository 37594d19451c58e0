"""Manager endpoints: own clubs, their members and their events."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_manager
from app.core.database import get_db
from app.models.user import User
from app.schemas.club import ClubInDB
from app.schemas.common import MessageResponse
from app.schemas.dashboard import ManagerStats
from app.schemas.event import (
    EventCreate,
    EventCreateResponse,
    EventInDB,
    EventRegistrationItem,
    EventUpdate,
)
from app.schemas.membership import ClubMemberItem, MembershipInDB, MembershipStatusResponse
from app.services.club_service import club_service
from app.services.dashboard_service import dashboard_service
from app.services.event_service import event_service
from app.services.membership_service import membership_service

router = APIRouter(prefix="/manager", tags=["manager"])


@router.get("/clubs", response_model=List[ClubInDB])
async def list_my_clubs(
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """List clubs the signed-in manager owns, in any status."""
    return await club_service.list_for_manager(db, manager.email)


@router.get("/stats", response_model=ManagerStats)
async def get_manager_stats(
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """Totals over the signed-in manager's clubs."""
    return await dashboard_service.manager_stats(db, manager.email)


@router.get("/clubs/{club_id}/members", response_model=List[ClubMemberItem])
async def list_club_members(
    club_id: str,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """
    List memberships of one of the manager's clubs.

    Args:
        club_id: Club ID
        manager: Signed-in club manager
        db: Database session

    Returns:
        Memberships with member name and photo
    """
    return await membership_service.list_club_members(db, club_id, manager.email)


@router.patch("/memberships/{membership_id}", response_model=MembershipStatusResponse)
async def expire_membership(
    membership_id: str,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """
    Mark a membership in one of the manager's clubs as expired.

    Expiring an already expired membership succeeds without changes.
    """
    membership, changed = await membership_service.expire_membership(db, membership_id, manager.email)
    message = "Membership marked as expired." if changed else "Membership is already expired."
    return MembershipStatusResponse(message=message, membership=MembershipInDB.model_validate(membership))


@router.get("/events", response_model=List[EventInDB])
async def list_my_events(
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """List events of all the manager's clubs."""
    return await event_service.list_manager_events(db, manager.email)


@router.post("/events", response_model=EventCreateResponse, status_code=201)
async def create_event(
    data: EventCreate,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """
    Create an event for one of the manager's approved clubs.

    Args:
        data: Event fields
        manager: Signed-in club manager
        db: Database session

    Returns:
        The created event
    """
    event = await event_service.create_event(db, manager.email, data)
    created = await event_service.with_club_fields(db, [event])
    return EventCreateResponse(
        message="Event created successfully.",
        event_id=event.id,
        event=created[0],
    )


@router.get("/events/{event_id}", response_model=EventInDB)
async def get_my_event(
    event_id: str,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """Get one of the manager's events."""
    return await event_service.get_manager_event(db, event_id, manager.email)


@router.patch("/events/{event_id}", response_model=EventInDB)
async def update_event(
    event_id: str,
    data: EventUpdate,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """Update one of the manager's events."""
    event = await event_service.update_event(db, event_id, manager.email, data)
    updated = await event_service.with_club_fields(db, [event])
    return updated[0]


@router.delete("/events/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the manager's events together with its registrations."""
    await event_service.delete_event(db, event_id, manager.email)
    return MessageResponse(message="Event deleted successfully.")


@router.get("/events/{event_id}/registrations", response_model=List[EventRegistrationItem])
async def list_event_registrations(
    event_id: str,
    manager: User = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """List registrations for one of the manager's events."""
    return await event_service.list_registrations(db, event_id, manager.email)
