"""Payment schemas."""
from pydantic import BaseModel, EmailStr, Field
from typing import Dict, Optional
from datetime import datetime

from app.schemas.common import CamelModel


class MembershipCheckoutRequest(CamelModel):
    """Schema for starting a paid club membership."""

    club_id: str = Field(..., min_length=1)
    user_email: EmailStr


class EventCheckoutRequest(CamelModel):
    """Schema for starting a paid event registration."""

    event_id: str = Field(..., min_length=1)
    user_email: EmailStr


class CheckoutSessionResponse(CamelModel):
    """Schema for a created checkout session."""

    url: str
    session_id: str


class CheckoutSession(BaseModel):
    """The parts of a provider checkout session the application reads."""

    id: str
    url: Optional[str] = None
    payment_status: str
    payment_intent: Optional[str] = None
    amount_total: Optional[int] = None
    metadata: Dict[str, str] = {}


class PaymentSuccessResponse(CamelModel):
    """Schema for the outcome of reconciling a checkout session."""

    message: str
    type: str
    already_processed: bool = False
    membership_id: Optional[str] = None
    registration_id: Optional[str] = None
    payment_id: Optional[str] = None


class PaymentInDB(CamelModel):
    """Schema for payment ledger row."""

    id: str
    user_email: str
    amount: float
    type: str
    stripe_payment_intent_id: Optional[str] = None
    transaction_id: str
    payment_status: str
    club_id: Optional[str] = None
    event_id: Optional[str] = None
    created_at: datetime


class MemberPaymentItem(PaymentInDB):
    """A ledger row together with what it paid for."""

    club_name: Optional[str] = None
    event_title: Optional[str] = None
