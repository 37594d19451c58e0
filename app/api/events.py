"""Public event endpoints and free registration."""
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_member
from app.core.database import get_db
from app.models.user import User
from app.schemas.event import EventInDB, RegisterEventResponse, RegistrationInDB
from app.services.event_service import event_service

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=List[EventInDB])
async def list_events(
    search: Optional[str] = Query(default=None, description="Case-insensitive title search"),
    sort: Optional[str] = Query(default="eventDate", description="eventDate, createdAt or eventFee"),
    order: Literal["asc", "desc"] = Query(default="asc"),
    db: AsyncSession = Depends(get_db),
):
    """
    List events.

    Args:
        search: Substring of the event title
        sort: Sort key
        order: Sort direction
        db: Database session

    Returns:
        Events with their club's name and category
    """
    return await event_service.list_events(db, search=search, sort=sort, order=order)


@router.get("/{event_id}", response_model=EventInDB)
async def get_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get an event by ID."""
    return await event_service.get_event(db, event_id)


@router.post("/register/{event_id}", response_model=RegisterEventResponse, status_code=201)
async def register_for_event(
    event_id: str,
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Register for a free event.

    Paid events must be registered through checkout.

    Args:
        event_id: Event ID
        member: Signed-in member
        db: Database session

    Returns:
        The new registration
    """
    registration = await event_service.register_free(db, member.email, event_id)
    return RegisterEventResponse(
        message="Successfully registered for the event!",
        registration=RegistrationInDB.model_validate(registration),
    )
