"""Request dependencies: external clients, authentication and role guards.

Authentication resolves the bearer token to an email through the
identity provider. The role guards then look the email up in the role
store. Roles are independent; an admin does not pass the manager guard.
"""
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.models.user import User, ROLE_ADMIN, ROLE_MANAGER, ROLE_MEMBER
from app.services.identity_client import IdentityClient, identity_client
from app.services.payment_client import PaymentClient, payment_client


def get_identity_client() -> IdentityClient:
    """Identity provider client used by this request."""
    return identity_client


def get_payment_client() -> PaymentClient:
    """Checkout provider client used by this request."""
    return payment_client


async def get_current_email(
    authorization: Optional[str] = Header(None),
    identity: IdentityClient = Depends(get_identity_client),
) -> str:
    """Verify the bearer token and return the principal's email."""
    if not authorization:
        raise UnauthorizedError("Unauthorized Access!")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Unauthorized Access!")

    return await identity.verify_token(token.strip())


def require_role(role: str, message: str):
    """Build a guard that admits only users whose stored role is ``role``."""

    async def _check(
        email: str = Depends(get_current_email),
        db: AsyncSession = Depends(get_db),
    ) -> User:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if not user or user.role != role:
            raise ForbiddenError(message)
        return user

    return _check


require_admin = require_role(ROLE_ADMIN, "Forbidden access: Not an Admin.")
require_manager = require_role(ROLE_MANAGER, "Forbidden access: Not a club manager.")
require_member = require_role(ROLE_MEMBER, "Forbidden access: Not a member.")
