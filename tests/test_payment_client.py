"""
Checkout provider client tests
"""
import pytest
import stripe

from app.api.deps import get_payment_client
from app.core.exceptions import BadRequestError
from app.main import app as application
from app.services.payment_client import PaymentClient


@pytest.fixture
def stripe_calls(monkeypatch):
    """Record calls to the stripe Checkout Session API and answer them from a dict."""
    calls = {"create": [], "retrieve": []}
    sessions = {}

    async def fake_create(**params):
        calls["create"].append(params)
        session = {
            "id": "cs_test_abc",
            "url": "https://checkout.stripe.com/c/pay/cs_test_abc",
            "payment_status": "unpaid",
            "payment_intent": None,
            "amount_total": params["line_items"][0]["price_data"]["unit_amount"],
            "metadata": params["metadata"],
        }
        sessions[session["id"]] = session
        return session

    async def fake_retrieve(session_id, **params):
        calls["retrieve"].append((session_id, params))
        if session_id not in sessions:
            raise stripe.InvalidRequestError(f"No such checkout.session: '{session_id}'", "id")
        return sessions[session_id]

    monkeypatch.setattr(stripe.checkout.Session, "create_async", fake_create)
    monkeypatch.setattr(stripe.checkout.Session, "retrieve_async", fake_retrieve)
    calls["sessions"] = sessions
    return calls


class TestCreateCheckoutSession:
    """PaymentClient.create_checkout_session"""

    async def test_sends_one_off_line_item(self, stripe_calls):
        client = PaymentClient(api_key="sk_test_123", currency="eur")

        session = await client.create_checkout_session(
            amount_cents=2500,
            product_name="Membership: Chess Club",
            customer_email="member@example.com",
            metadata={"type": "membership", "clubId": "c" * 32, "userEmail": "member@example.com", "amount": "25.0"},
            success_url="https://app.example.com/payment-success?session_id={CHECKOUT_SESSION_ID}",
            cancel_url="https://app.example.com/clubs/x",
        )

        params = stripe_calls["create"][0]
        assert params["api_key"] == "sk_test_123"
        assert params["mode"] == "payment"
        assert params["customer_email"] == "member@example.com"
        assert params["line_items"] == [
            {
                "price_data": {
                    "currency": "eur",
                    "unit_amount": 2500,
                    "product_data": {"name": "Membership: Chess Club"},
                },
                "quantity": 1,
            }
        ]
        assert params["metadata"]["clubId"] == "c" * 32
        assert params["success_url"].endswith("{CHECKOUT_SESSION_ID}")

        assert session.id == "cs_test_abc"
        assert session.url == "https://checkout.stripe.com/c/pay/cs_test_abc"
        assert session.payment_status == "unpaid"
        assert session.amount_total == 2500


class TestRetrieveCheckoutSession:
    """PaymentClient.retrieve_checkout_session"""

    async def test_maps_expanded_session(self, stripe_calls):
        stripe_calls["sessions"]["cs_paid"] = {
            "id": "cs_paid",
            "url": None,
            "payment_status": "paid",
            "payment_intent": {"id": "pi_123", "object": "payment_intent"},
            "amount_total": 1000,
            "metadata": {"type": "event", "amount": 10},
        }
        client = PaymentClient(api_key="sk_test_123")

        session = await client.retrieve_checkout_session("cs_paid")

        assert stripe_calls["retrieve"] == [("cs_paid", {"api_key": "sk_test_123"})]
        assert session.payment_status == "paid"
        assert session.payment_intent == "pi_123"
        assert session.amount_total == 1000
        assert session.metadata == {"type": "event", "amount": "10"}

    async def test_missing_status_defaults_to_unpaid(self, stripe_calls):
        stripe_calls["sessions"]["cs_open"] = {"id": "cs_open", "payment_intent": "pi_9"}

        session = await PaymentClient(api_key="sk_test_123").retrieve_checkout_session("cs_open")

        assert session.payment_status == "unpaid"
        assert session.payment_intent == "pi_9"
        assert session.metadata == {}

    async def test_unknown_session_is_bad_request(self, stripe_calls):
        with pytest.raises(BadRequestError) as exc_info:
            await PaymentClient(api_key="sk_test_123").retrieve_checkout_session("cs_missing")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid payment session"


class TestReconcileWithStripeClient:
    """Reconciliation through the real client wrapper"""

    async def test_unknown_session_returns_400(self, client, stripe_calls):
        application.dependency_overrides[get_payment_client] = lambda: PaymentClient(api_key="sk_test_123")

        response = await client.get("/payment/success", params={"session_id": "cs_missing"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid payment session"}
