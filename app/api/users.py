"""User endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_email, get_identity_client, require_admin
from app.core.database import get_db
from app.core.exceptions import AppError, NotFoundError
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import (
    RoleResponse,
    RoleUpdate,
    UserInDB,
    UserRegister,
    UserRegisterResponse,
)
from app.services.identity_client import IdentityClient
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserRegisterResponse, status_code=201)
async def register_user(
    data: UserRegister,
    db: AsyncSession = Depends(get_db),
):
    """
    Record a user in the role store after sign-up.

    New users get the member role. Registering an existing email is not
    an error; the stored role is returned with status 200.

    Args:
        data: Name, email and photo URL
        db: Database session

    Returns:
        Acknowledgement and the user's role
    """
    user, created = await user_service.register(db, data)
    if not created:
        body = UserRegisterResponse(message="User already exists in DB", role=user.role)
        return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))

    return UserRegisterResponse(message="User registered in DB successfully", role=user.role)


@router.get("/role", response_model=RoleResponse)
async def get_my_role(
    email: str = Depends(get_current_email),
    db: AsyncSession = Depends(get_db),
):
    """Get the signed-in user's role."""
    user = await user_service.get_by_email(db, email)
    if not user:
        raise NotFoundError("User not found in database.")
    return RoleResponse(role=user.role)


@router.get("", response_model=List[UserInDB])
async def list_users(
    _: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List all users (admin only)."""
    return await user_service.list_users(db)


@router.patch("/role/{email}", response_model=MessageResponse)
async def update_user_role(
    email: str,
    data: RoleUpdate,
    _: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Change a user's role (admin only).

    Args:
        email: Target user's email
        data: New role
        db: Database session
    """
    user = await user_service.update_role(db, email, data.role)
    return MessageResponse(message=f"{user.email} role updated to {user.role} successfully.")


@router.delete("/{email}", response_model=MessageResponse)
async def delete_user(
    email: str,
    _: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
):
    """
    Delete a user from the identity provider and the database (admin only).

    Args:
        email: Target user's email
        db: Database session
        identity: Identity provider client
    """
    try:
        message = await user_service.delete_user(db, identity, email)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete user {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete user.")

    return MessageResponse(message=message)
