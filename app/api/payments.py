"""Checkout endpoints for paid memberships and paid events."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_payment_client, require_member
from app.core.database import get_db
from app.core.exceptions import AppError
from app.models.user import User
from app.schemas.payment import (
    CheckoutSessionResponse,
    EventCheckoutRequest,
    MembershipCheckoutRequest,
    PaymentSuccessResponse,
)
from app.services.payment_client import PaymentClient
from app.services.payment_service import payment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/payment/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_membership_checkout(
    data: MembershipCheckoutRequest,
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
    payments: PaymentClient = Depends(get_payment_client),
):
    """
    Start checkout for a paid club membership.

    The email in the body must be the signed-in member's email.

    Args:
        data: Club ID and buyer email
        member: Signed-in member
        db: Database session
        payments: Checkout provider client

    Returns:
        Redirect URL to the hosted checkout page
    """
    try:
        return await payment_service.create_membership_checkout(db, payments, member.email, data)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create membership checkout: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create checkout session.")


@router.post("/event-payment/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_event_checkout(
    data: EventCheckoutRequest,
    member: User = Depends(require_member),
    db: AsyncSession = Depends(get_db),
    payments: PaymentClient = Depends(get_payment_client),
):
    """Start checkout for a paid event."""
    try:
        return await payment_service.create_event_checkout(db, payments, member.email, data)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create event checkout: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create checkout session.")


@router.get("/payment/success", response_model=PaymentSuccessResponse)
async def payment_success(
    session_id: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    payments: PaymentClient = Depends(get_payment_client),
):
    """
    Reconcile a completed checkout session.

    Called by the frontend after the provider redirects back. No bearer
    token is required; the session id is verified with the provider.
    Calling it again for the same session creates nothing new.

    Args:
        session_id: Checkout session id
        db: Database session
        payments: Checkout provider client

    Returns:
        What was created, or that the session was already processed
    """
    try:
        return await payment_service.reconcile(db, payments, session_id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to reconcile checkout {session_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process payment.")
