"""Membership model."""
from sqlalchemy import Column, String, DateTime, Index, text

from app.core.database import Base
from app.core.ids import new_id
from app.core.timeutils import utcnow

MEMBERSHIP_ACTIVE = "active"
MEMBERSHIP_EXPIRED = "expired"
FREE_JOIN_PAYMENT_ID = "FREE_JOIN"


class Membership(Base):
    """A user's membership in a club."""

    __tablename__ = "memberships"

    id = Column(String(32), primary_key=True, default=new_id)
    user_email = Column(String, nullable=False, index=True)
    # Plain reference: deleting a club leaves its memberships in place
    club_id = Column(String(32), nullable=False, index=True)
    status = Column(String, nullable=False, default=MEMBERSHIP_ACTIVE)
    payment_id = Column(String, nullable=True)
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)  # null for free joins

    # At most one active membership per user and club
    __table_args__ = (
        Index(
            "uq_memberships_active_user_club",
            "user_email",
            "club_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )
