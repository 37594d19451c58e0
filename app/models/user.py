"""User model."""
from sqlalchemy import Column, String, DateTime

from app.core.database import Base
from app.core.ids import new_id
from app.core.timeutils import utcnow

ROLE_MEMBER = "member"
ROLE_MANAGER = "clubManager"
ROLE_ADMIN = "admin"
ROLES = (ROLE_MEMBER, ROLE_MANAGER, ROLE_ADMIN)


class User(Base):
    """A registered principal and its role."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    role = Column(String, nullable=False, default=ROLE_MEMBER)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
