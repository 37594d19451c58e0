"""Club model."""
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.core.ids import new_id
from app.core.timeutils import utcnow

CLUB_PENDING = "pending"
CLUB_APPROVED = "approved"
CLUB_REJECTED = "rejected"


class Club(Base):
    """A club submitted by a manager and reviewed by an admin."""

    __tablename__ = "clubs"

    id = Column(String(32), primary_key=True, default=new_id)
    club_name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False)
    banner_image = Column(String, nullable=True)
    membership_fee = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    meeting_schedule = Column(String, nullable=False, default="TBD")
    manager_email = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, default=CLUB_PENDING, index=True)
    events_count = Column(Integer, nullable=False, default=0)  # maintained by event_service
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    members = relationship(
        "ClubMember",
        back_populates="club",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def members_count(self) -> int:
        return len(self.members)

    @property
    def member_emails(self):
        return [m.user_email for m in self.members]


class ClubMember(Base):
    """One entry of a club's member set."""

    __tablename__ = "club_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    club_id = Column(String(32), ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_email = Column(String, nullable=False, index=True)
    added_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    club = relationship("Club", back_populates="members")

    __table_args__ = (
        UniqueConstraint("club_id", "user_email", name="uq_club_members_club_user"),
    )
