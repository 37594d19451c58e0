"""Event and event registration models."""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, DateTime, ForeignKey, Index, text

from app.core.database import Base
from app.core.ids import new_id
from app.core.timeutils import utcnow

REGISTRATION_REGISTERED = "registered"
FREE_REGISTRATION_PAYMENT_ID = "FREE_REGISTRATION"


class Event(Base):
    """An event hosted by an approved club."""

    __tablename__ = "events"

    id = Column(String(32), primary_key=True, default=new_id)
    club_id = Column(String(32), nullable=False, index=True)
    club_name = Column(String, nullable=True)  # snapshot taken at creation
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    event_date = Column(DateTime(timezone=True), nullable=False, index=True)
    event_time = Column(String, nullable=True)
    location = Column(String, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    event_fee = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    max_attendees = Column(Integer, nullable=True)
    registration_count = Column(Integer, nullable=False, default=0)  # maintained by event_service
    banner_image = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def charge_amount(self) -> float:
        """Fee actually charged for this event."""
        return float(self.event_fee or 0) if self.is_paid else 0.0


class EventRegistration(Base):
    """A user's registration for an event."""

    __tablename__ = "event_registrations"

    id = Column(String(32), primary_key=True, default=new_id)
    user_email = Column(String, nullable=False, index=True)
    event_id = Column(String(32), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    club_id = Column(String(32), nullable=False, index=True)
    status = Column(String, nullable=False, default=REGISTRATION_REGISTERED)
    payment_id = Column(String, nullable=True)
    registered_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index(
            "uq_registrations_active_user_event",
            "user_email",
            "event_id",
            unique=True,
            postgresql_where=text("status = 'registered'"),
            sqlite_where=text("status = 'registered'"),
        ),
    )
