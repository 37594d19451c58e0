"""User and role service."""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestError, NotFoundError
from app.models.user import User, ROLES, ROLE_MEMBER
from app.schemas.user import UserRegister
from app.services.identity_client import IdentityClient

logger = logging.getLogger(__name__)


class UserService:
    """Service for the role store."""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, data: UserRegister) -> Tuple[User, bool]:
        """
        Record a user the first time they sign in.

        Returns:
            The user and whether it was created by this call
        """
        email = data.email.lower()
        existing = await self.get_by_email(db, email)
        if existing:
            return existing, False

        user = User(email=email, name=data.name, photo_url=data.photo_url, role=ROLE_MEMBER)
        db.add(user)
        await db.commit()

        logger.info(f"Registered user {email}")
        return user, True

    async def list_users(self, db: AsyncSession) -> List[User]:
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def update_role(self, db: AsyncSession, email: str, role: str) -> User:
        """
        Change a user's role.

        Raises:
            BadRequestError: If the role is not one of the known roles
            NotFoundError: If the user is missing or already has the role
        """
        if role not in ROLES:
            raise BadRequestError("Invalid role specified.")

        user = await self.get_by_email(db, email)
        if not user or user.role == role:
            raise NotFoundError("User not found or role already set.")

        user.role = role
        await db.commit()

        logger.info(f"Role of {user.email} set to {role}")
        return user

    async def delete_user(self, db: AsyncSession, identity: IdentityClient, email: str) -> str:
        """
        Delete a user from the identity provider and the role store.

        Returns:
            A message describing what was deleted
        """
        user = await self.get_by_email(db, email)
        if not user:
            raise NotFoundError("User not found in database.")

        provider_deleted = await identity.delete_user(user.email)

        await db.delete(user)
        await db.commit()

        if provider_deleted:
            logger.info(f"Deleted user {user.email} from identity provider and database")
            return f"{user.email} deleted successfully from the identity provider and DB."

        logger.warning(f"Deleted user {user.email} from database; no identity provider account found")
        return f"{user.email} deleted from DB (was missing in the identity provider)."


# Singleton instance
user_service = UserService()
