"""Manager ownership checks.

A club is owned by the manager whose email is stored on it; an event is
owned by whoever owns the event's club. A resource that exists but
belongs to someone else is reported exactly like a missing one.
"""
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.ids import parse_id
from app.models.club import Club
from app.models.event import Event

CLUB_NOT_OWNED = "Club not found or you are not its manager."
EVENT_NOT_OWNED = "Event not found or you are not its manager."


async def get_owned_club(db: AsyncSession, club_id: str, manager_email: str) -> Club:
    """Return the club if ``manager_email`` manages it, else raise NotFoundError."""
    club_id = parse_id(club_id, "club id")
    result = await db.execute(
        select(Club).where(Club.id == club_id, Club.manager_email == manager_email)
    )
    club = result.scalar_one_or_none()
    if not club:
        raise NotFoundError(CLUB_NOT_OWNED)
    return club


async def get_owned_event(db: AsyncSession, event_id: str, manager_email: str) -> Tuple[Event, Club]:
    """Return the event and its club if ``manager_email`` manages that club."""
    event_id = parse_id(event_id, "event id")
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()
    if not event:
        raise NotFoundError(EVENT_NOT_OWNED)

    result = await db.execute(
        select(Club).where(Club.id == event.club_id, Club.manager_email == manager_email)
    )
    club = result.scalar_one_or_none()
    if not club:
        raise NotFoundError(EVENT_NOT_OWNED)

    return event, club


async def owned_club_ids(db: AsyncSession, manager_email: str) -> List[str]:
    """Ids of every club managed by ``manager_email``."""
    result = await db.execute(select(Club.id).where(Club.manager_email == manager_email))
    return list(result.scalars().all())
