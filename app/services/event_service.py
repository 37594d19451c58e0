"""Event and event registration service."""
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.core.ids import parse_id
from app.core.timeutils import utcnow
from app.models.club import Club, CLUB_APPROVED
from app.models.event import (
    Event,
    EventRegistration,
    REGISTRATION_REGISTERED,
    FREE_REGISTRATION_PAYMENT_ID,
)
from app.models.user import User
from app.schemas.event import EventCreate, EventUpdate, EventInDB, EventRegistrationItem
from app.services.ownership import get_owned_club, get_owned_event, owned_club_ids

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "You are already registered for this event."

SORT_COLUMNS = {
    "eventDate": Event.event_date,
    "createdAt": Event.created_at,
    "eventFee": Event.event_fee,
}
DEFAULT_SORT = "eventDate"


class EventService:
    """Service for managing events and registrations."""

    async def create_event(
        self, db: AsyncSession, manager_email: str, data: EventCreate
    ) -> Event:
        """
        Create an event for an approved club the manager owns.

        Also increments the club's event counter.

        Args:
            db: Database session
            manager_email: Creating manager
            data: Validated event fields

        Returns:
            The created event
        """
        club = await get_owned_club(db, data.club_id, manager_email)
        if club.status != CLUB_APPROVED:
            raise BadRequestError("Events can only be created for approved clubs.")

        event = Event(
            club_id=club.id,
            club_name=club.club_name,
            title=data.title,
            description=data.description,
            event_date=data.event_date,
            event_time=data.event_time,
            location=data.location,
            is_paid=data.is_paid,
            event_fee=(data.event_fee or 0) if data.is_paid else 0,
            max_attendees=data.max_attendees,
            registration_count=0,
            banner_image=data.banner_image,
        )
        db.add(event)
        club.events_count = (club.events_count or 0) + 1
        await db.commit()
        await db.refresh(event)

        logger.info(f"Event {event.id} ({event.title}) created for club {club.id}")
        return event

    async def update_event(
        self, db: AsyncSession, event_id: str, manager_email: str, data: EventUpdate
    ) -> Event:
        """Apply a partial update to an event the manager owns."""
        event, _ = await get_owned_event(db, event_id, manager_email)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("No fields to update.")

        for field, value in update_data.items():
            if value is None and field not in ("event_time", "max_attendees", "banner_image"):
                continue
            setattr(event, field, value)

        if not event.is_paid:
            event.event_fee = 0

        if event.max_attendees is not None and event.max_attendees < (event.registration_count or 0):
            await db.rollback()
            raise BadRequestError("maxAttendees cannot be lower than the current number of registrations.")

        await db.commit()
        await db.refresh(event)

        logger.info(f"Event {event.id} updated by {manager_email}: {sorted(update_data)}")
        return event

    async def delete_event(self, db: AsyncSession, event_id: str, manager_email: str) -> None:
        """
        Delete an event the manager owns.

        Removes the event's registrations, then the event, then
        decrements the club's event counter.
        """
        event, club = await get_owned_event(db, event_id, manager_email)

        await db.execute(
            delete(EventRegistration).where(EventRegistration.event_id == event.id)
        )
        await db.delete(event)
        club.events_count = max((club.events_count or 0) - 1, 0)
        await db.commit()

        logger.info(f"Event {event_id} and its registrations deleted by {manager_email}")

    async def list_manager_events(self, db: AsyncSession, manager_email: str) -> List[EventInDB]:
        """List events of every club the manager owns."""
        club_ids = await owned_club_ids(db, manager_email)
        if not club_ids:
            return []

        result = await db.execute(
            select(Event)
            .where(Event.club_id.in_(club_ids))
            .order_by(Event.event_date.asc())
        )
        return await self.with_club_fields(db, result.scalars().all())

    async def get_manager_event(
        self, db: AsyncSession, event_id: str, manager_email: str
    ) -> EventInDB:
        """Get one event the manager owns."""
        event, club = await get_owned_event(db, event_id, manager_email)
        return self._to_schema(event, club)

    async def list_registrations(
        self, db: AsyncSession, event_id: str, manager_email: str
    ) -> List[EventRegistrationItem]:
        """List registrations for an event the manager owns."""
        event, _ = await get_owned_event(db, event_id, manager_email)

        result = await db.execute(
            select(EventRegistration, User)
            .outerjoin(User, User.email == EventRegistration.user_email)
            .where(EventRegistration.event_id == event.id)
            .order_by(EventRegistration.registered_at.desc())
        )

        items = []
        for registration, user in result.all():
            item = EventRegistrationItem.model_validate(registration)
            if user:
                item.user_name = user.name
                item.photo_url = user.photo_url
            items.append(item)
        return items

    async def list_events(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> List[EventInDB]:
        """
        List events for public browsing.

        Args:
            db: Database session
            search: Case-insensitive substring of the title
            sort: eventDate, createdAt or eventFee
            order: asc or desc

        Returns:
            Events with their club's name and category
        """
        query = select(Event)
        if search:
            query = query.where(Event.title.ilike(f"%{search.strip()}%"))

        column = SORT_COLUMNS.get(sort or DEFAULT_SORT, SORT_COLUMNS[DEFAULT_SORT])
        query = query.order_by(column.desc() if order == "desc" else column.asc())

        result = await db.execute(query)
        return await self.with_club_fields(db, result.scalars().all())

    async def get_event(self, db: AsyncSession, event_id: str) -> EventInDB:
        """Get one event with its club's name and category."""
        event = await self.get_model(db, event_id)
        events = await self.with_club_fields(db, [event])
        return events[0]

    async def get_active_registration(
        self, db: AsyncSession, email: str, event_id: str
    ) -> Optional[EventRegistration]:
        """Return the user's registration for an event, if any."""
        result = await db.execute(
            select(EventRegistration).where(
                EventRegistration.user_email == email,
                EventRegistration.event_id == event_id,
                EventRegistration.status == REGISTRATION_REGISTERED,
            )
        )
        return result.scalar_one_or_none()

    def ensure_capacity(self, event: Event) -> None:
        """Raise BadRequestError if the event has no seats left."""
        if event.max_attendees is not None and (event.registration_count or 0) >= event.max_attendees:
            raise BadRequestError("This event is full.")

    def add_registration(
        self, db: AsyncSession, event: Event, email: str, payment_id: str
    ) -> EventRegistration:
        """
        Stage a registration and bump the event's registration counter.

        The caller commits.
        """
        registration = EventRegistration(
            user_email=email,
            event_id=event.id,
            club_id=event.club_id,
            status=REGISTRATION_REGISTERED,
            payment_id=payment_id,
            registered_at=utcnow(),
        )
        db.add(registration)
        event.registration_count = (event.registration_count or 0) + 1
        return registration

    async def register_free(self, db: AsyncSession, email: str, event_id: str) -> EventRegistration:
        """
        Register for an event without payment.

        Paid events must go through checkout instead.
        """
        event = await self.get_model(db, event_id)

        if event.charge_amount > 0:
            raise BadRequestError("This is a paid event. Please complete payment to register.")

        if await self.get_active_registration(db, email, event.id):
            raise DuplicateError(ALREADY_REGISTERED)

        self.ensure_capacity(event)

        registration = self.add_registration(db, event, email, FREE_REGISTRATION_PAYMENT_ID)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicateError(ALREADY_REGISTERED)

        logger.info(f"{email} registered for event {event.id}")
        return registration

    async def with_club_fields(self, db: AsyncSession, events: Iterable[Event]) -> List[EventInDB]:
        """Attach club name and category with one lookup for all clubs involved."""
        events = list(events)
        club_ids = {event.club_id for event in events}
        clubs: Dict[str, Club] = {}
        if club_ids:
            result = await db.execute(select(Club).where(Club.id.in_(club_ids)))
            clubs = {club.id: club for club in result.scalars().all()}

        return [self._to_schema(event, clubs.get(event.club_id)) for event in events]

    def _to_schema(self, event: Event, club: Optional[Club]) -> EventInDB:
        item = EventInDB.model_validate(event)
        if club:
            item.club_name = club.club_name
            item.category = club.category
        return item

    async def get_model(self, db: AsyncSession, event_id: str) -> Event:
        """Load an event row, raising NotFoundError if missing."""
        event_id = parse_id(event_id, "event id")
        result = await db.execute(select(Event).where(Event.id == event_id))
        event = result.scalar_one_or_none()
        if not event:
            raise NotFoundError("Event not found.")
        return event


# Singleton instance
event_service = EventService()
