"""Checkout provider client.

Thin wrapper over Stripe Checkout. Only the fields the application
reads are copied out of the provider objects, so callers never touch
``stripe`` types directly.
"""
import logging
from typing import Dict, Optional

import stripe

from app.core.config import settings
from app.core.exceptions import BadRequestError
from app.schemas.payment import CheckoutSession

logger = logging.getLogger(__name__)


def _to_checkout_session(session) -> CheckoutSession:
    payment_intent = session.get("payment_intent")
    if payment_intent is not None and not isinstance(payment_intent, str):
        payment_intent = payment_intent.get("id")

    metadata = session.get("metadata") or {}

    return CheckoutSession(
        id=session["id"],
        url=session.get("url"),
        payment_status=session.get("payment_status") or "unpaid",
        payment_intent=payment_intent,
        amount_total=session.get("amount_total"),
        metadata={key: str(value) for key, value in metadata.items()},
    )


class PaymentClient:
    """Client for creating and reading checkout sessions."""

    def __init__(self, api_key: Optional[str] = None, currency: Optional[str] = None):
        """Initialize the payment client from arguments or settings."""
        self.api_key = api_key if api_key is not None else settings.STRIPE_SECRET_KEY
        self.currency = currency or settings.PAYMENT_CURRENCY

    async def create_checkout_session(
        self,
        amount_cents: int,
        product_name: str,
        customer_email: str,
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """
        Create a hosted checkout session for a one-off charge.

        Args:
            amount_cents: Charge in minor currency units
            product_name: Line item label shown to the buyer
            customer_email: Buyer email prefilled on the checkout page
            metadata: Reconciliation data echoed back on retrieval
            success_url: Redirect after payment; may contain {CHECKOUT_SESSION_ID}
            cancel_url: Redirect when the buyer abandons checkout

        Returns:
            The created session, including its redirect URL
        """
        logger.info(f"Creating checkout session for {customer_email}: {amount_cents} {self.currency}")

        session = await stripe.checkout.Session.create_async(
            api_key=self.api_key,
            mode="payment",
            payment_method_types=["card"],
            customer_email=customer_email,
            line_items=[
                {
                    "price_data": {
                        "currency": self.currency,
                        "unit_amount": amount_cents,
                        "product_data": {"name": product_name},
                    },
                    "quantity": 1,
                }
            ],
            metadata=metadata,
            success_url=success_url,
            cancel_url=cancel_url,
        )
        return _to_checkout_session(session)

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """
        Fetch a checkout session by id.

        Raises:
            BadRequestError: If the provider does not know the session
        """
        try:
            session = await stripe.checkout.Session.retrieve_async(session_id, api_key=self.api_key)
        except stripe.InvalidRequestError as e:
            logger.warning(f"Unknown checkout session {session_id}: {e}")
            raise BadRequestError("Invalid payment session")

        return _to_checkout_session(session)


# Singleton instance
payment_client = PaymentClient()
