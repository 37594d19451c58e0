"""Payment bridge: checkout session creation and reconciliation.

A purchase is two requests. The buyer first asks for a checkout session
and is redirected to the provider. After paying, the provider redirects
back with the session id, and reconciliation turns the paid session into
a membership or event registration plus one ledger row.

Reconciliation may be replayed any number of times; only the first
successful call writes anything. The unique ledger transaction id and
the active-membership/registration unique indexes back this up when two
replays race.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import BadRequestError, DuplicateError, ForbiddenError
from app.models.club import Club
from app.models.event import Event
from app.models.payment import (
    Payment,
    PAYMENT_TYPE_MEMBERSHIP,
    PAYMENT_TYPE_EVENT,
    PAYMENT_STATUS_PAID,
)
from app.schemas.payment import (
    CheckoutSession,
    CheckoutSessionResponse,
    EventCheckoutRequest,
    MembershipCheckoutRequest,
    PaymentSuccessResponse,
)
from app.services.club_service import club_service
from app.services.event_service import event_service, ALREADY_REGISTERED
from app.services.membership_service import membership_service, ALREADY_MEMBER
from app.services.payment_client import PaymentClient

logger = logging.getLogger(__name__)

ALREADY_PROCESSED = "Payment already processed."


def to_minor_units(amount: float) -> int:
    """Convert a fee to integer cents."""
    return int(round(float(amount) * 100))


class PaymentService:
    """Service for paid memberships and paid event registrations."""

    async def create_membership_checkout(
        self,
        db: AsyncSession,
        payments: PaymentClient,
        caller_email: str,
        request: MembershipCheckoutRequest,
    ) -> CheckoutSessionResponse:
        """
        Start checkout for a paid club membership.

        Args:
            db: Database session
            payments: Checkout provider client
            caller_email: Verified principal
            request: Club id and the email the buyer claims

        Returns:
            Redirect URL and session id
        """
        user_email = request.user_email.lower()
        if user_email != caller_email:
            raise ForbiddenError("Forbidden: email does not match the signed-in user.")

        club = await club_service.get_approved(db, request.club_id)
        fee = float(club.membership_fee or 0)
        if fee <= 0:
            raise BadRequestError("This club is free to join. Use the join endpoint instead.")

        if await membership_service.get_active_membership(db, user_email, club.id):
            raise DuplicateError(ALREADY_MEMBER)

        session = await payments.create_checkout_session(
            amount_cents=to_minor_units(fee),
            product_name=f"Membership: {club.club_name}",
            customer_email=user_email,
            metadata={
                "type": PAYMENT_TYPE_MEMBERSHIP,
                "clubId": club.id,
                "userEmail": user_email,
                "amount": str(fee),
            },
            success_url=f"{settings.FRONTEND_URL}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.FRONTEND_URL}/clubs/{club.id}",
        )

        logger.info(f"Membership checkout {session.id} created for {user_email} in club {club.id}")
        return CheckoutSessionResponse(url=session.url or "", session_id=session.id)

    async def create_event_checkout(
        self,
        db: AsyncSession,
        payments: PaymentClient,
        caller_email: str,
        request: EventCheckoutRequest,
    ) -> CheckoutSessionResponse:
        """Start checkout for a paid event registration."""
        user_email = request.user_email.lower()
        if user_email != caller_email:
            raise ForbiddenError("Forbidden: email does not match the signed-in user.")

        event = await event_service.get_model(db, request.event_id)
        fee = event.charge_amount
        if fee <= 0:
            raise BadRequestError("This event is free. Use the register endpoint instead.")

        if await event_service.get_active_registration(db, user_email, event.id):
            raise DuplicateError(ALREADY_REGISTERED)

        event_service.ensure_capacity(event)

        session = await payments.create_checkout_session(
            amount_cents=to_minor_units(fee),
            product_name=f"Event: {event.title}",
            customer_email=user_email,
            metadata={
                "type": PAYMENT_TYPE_EVENT,
                "eventId": event.id,
                "clubId": event.club_id,
                "userEmail": user_email,
                "amount": str(fee),
            },
            success_url=f"{settings.FRONTEND_URL}/payment-success?session_id={{CHECKOUT_SESSION_ID}}&type=event",
            cancel_url=f"{settings.FRONTEND_URL}/events/{event.id}",
        )

        logger.info(f"Event checkout {session.id} created for {user_email} for event {event.id}")
        return CheckoutSessionResponse(url=session.url or "", session_id=session.id)

    async def reconcile(
        self, db: AsyncSession, payments: PaymentClient, session_id: str
    ) -> PaymentSuccessResponse:
        """
        Turn a paid checkout session into durable state.

        Args:
            db: Database session
            payments: Checkout provider client
            session_id: Session id from the success redirect

        Returns:
            What was created, or that the session was already processed
        """
        if not session_id:
            raise BadRequestError("Missing session_id.")

        session = await payments.retrieve_checkout_session(session_id)
        if session.payment_status != PAYMENT_STATUS_PAID:
            raise BadRequestError("Payment not completed.")

        payment_type = session.metadata.get("type")
        if payment_type not in (PAYMENT_TYPE_MEMBERSHIP, PAYMENT_TYPE_EVENT):
            raise BadRequestError("Unknown payment type.")

        existing = await db.execute(select(Payment).where(Payment.transaction_id == session.id))
        if existing.scalar_one_or_none():
            return PaymentSuccessResponse(message=ALREADY_PROCESSED, type=payment_type, already_processed=True)

        try:
            if payment_type == PAYMENT_TYPE_MEMBERSHIP:
                response = await self._reconcile_membership(db, session)
            else:
                response = await self._reconcile_event(db, session)
        except IntegrityError:
            await db.rollback()
            logger.info(f"Checkout {session.id} reconciled concurrently; treating as processed")
            return PaymentSuccessResponse(message=ALREADY_PROCESSED, type=payment_type, already_processed=True)

        return response

    async def _reconcile_membership(
        self, db: AsyncSession, session: CheckoutSession
    ) -> PaymentSuccessResponse:
        user_email = session.metadata.get("userEmail", "").lower()
        club_id = session.metadata.get("clubId")
        if not user_email or not club_id:
            raise BadRequestError("Payment session is missing membership details.")

        if await membership_service.get_active_membership(db, user_email, club_id):
            return PaymentSuccessResponse(
                message=ALREADY_PROCESSED, type=PAYMENT_TYPE_MEMBERSHIP, already_processed=True
            )

        # Club status is not rechecked at reconciliation
        result = await db.execute(select(Club).where(Club.id == club_id))
        club = result.scalar_one_or_none()
        if not club:
            raise BadRequestError("Club for this payment no longer exists.")

        membership = membership_service.add_membership(
            db,
            club,
            user_email,
            payment_id=session.payment_intent or session.id,
            expires_at=membership_service.paid_expiry(),
        )
        payment = self._ledger_row(session, PAYMENT_TYPE_MEMBERSHIP, user_email, club_id=club.id)
        db.add(payment)
        await db.commit()

        logger.info(f"Checkout {session.id}: membership {membership.id} for {user_email} in club {club.id}")
        return PaymentSuccessResponse(
            message="Payment successful. Membership activated.",
            type=PAYMENT_TYPE_MEMBERSHIP,
            membership_id=membership.id,
            payment_id=payment.id,
        )

    async def _reconcile_event(
        self, db: AsyncSession, session: CheckoutSession
    ) -> PaymentSuccessResponse:
        user_email = session.metadata.get("userEmail", "").lower()
        event_id = session.metadata.get("eventId")
        if not user_email or not event_id:
            raise BadRequestError("Payment session is missing event details.")

        if await event_service.get_active_registration(db, user_email, event_id):
            return PaymentSuccessResponse(
                message=ALREADY_PROCESSED, type=PAYMENT_TYPE_EVENT, already_processed=True
            )

        result = await db.execute(select(Event).where(Event.id == event_id))
        event = result.scalar_one_or_none()
        if not event:
            raise BadRequestError("Event for this payment no longer exists.")

        registration = event_service.add_registration(
            db, event, user_email, payment_id=session.payment_intent or session.id
        )
        payment = self._ledger_row(
            session, PAYMENT_TYPE_EVENT, user_email, club_id=event.club_id, event_id=event.id
        )
        db.add(payment)
        await db.commit()

        logger.info(f"Checkout {session.id}: registration {registration.id} for {user_email} in event {event.id}")
        return PaymentSuccessResponse(
            message="Payment successful. You are registered for the event.",
            type=PAYMENT_TYPE_EVENT,
            registration_id=registration.id,
            payment_id=payment.id,
        )

    def _ledger_row(
        self,
        session: CheckoutSession,
        payment_type: str,
        user_email: str,
        club_id: str,
        event_id: Optional[str] = None,
    ) -> Payment:
        if session.amount_total is not None:
            amount = session.amount_total / 100
        else:
            amount = float(session.metadata.get("amount") or 0)

        return Payment(
            user_email=user_email,
            amount=amount,
            type=payment_type,
            stripe_payment_intent_id=session.payment_intent,
            transaction_id=session.id,
            payment_status=PAYMENT_STATUS_PAID,
            club_id=club_id,
            event_id=event_id,
        )


# Singleton instance
payment_service = PaymentService()
