"""
Pytest configuration and fixtures for ClubSphere API tests
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SCHEDULER_ENABLED"] = "false"

from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import get_identity_client, get_payment_client
from app.core.database import Base, get_db
from app.core.exceptions import BadRequestError, UnauthorizedError
from app.main import app as application
from app.models import User
from app.schemas.payment import CheckoutSession


class FakeIdentityClient:
    """In-process stand-in for the identity provider."""

    def __init__(self):
        self.tokens: Dict[str, str] = {}
        self.accounts = set()
        self.deleted = []

    def issue(self, email: str) -> str:
        token = f"token-{email}"
        self.tokens[token] = email
        self.accounts.add(email)
        return token

    async def verify_token(self, token: str) -> str:
        email = self.tokens.get(token)
        if not email:
            raise UnauthorizedError("Unauthorized Access!")
        return email

    async def delete_user(self, email: str) -> bool:
        self.deleted.append(email)
        if email in self.accounts:
            self.accounts.remove(email)
            return True
        return False


class FakePaymentClient:
    """In-process stand-in for the checkout provider."""

    def __init__(self):
        self.sessions: Dict[str, CheckoutSession] = {}
        self.requests = []

    async def create_checkout_session(
        self, amount_cents, product_name, customer_email, metadata, success_url, cancel_url
    ) -> CheckoutSession:
        session_id = f"cs_test_{len(self.sessions) + 1}"
        session = CheckoutSession(
            id=session_id,
            url=f"https://checkout.example.com/pay/{session_id}",
            payment_status="unpaid",
            amount_total=amount_cents,
            metadata=dict(metadata),
        )
        self.sessions[session_id] = session
        self.requests.append(
            {
                "amount_cents": amount_cents,
                "product_name": product_name,
                "customer_email": customer_email,
                "metadata": dict(metadata),
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        return session

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if session_id not in self.sessions:
            raise BadRequestError("Invalid payment session")
        return self.sessions[session_id]

    def mark_paid(self, session_id: str):
        session = self.sessions[session_id]
        self.sessions[session_id] = session.model_copy(
            update={"payment_status": "paid", "payment_intent": f"pi_{session_id}"}
        )


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def identity():
    return FakeIdentityClient()


@pytest.fixture
def payments():
    return FakePaymentClient()


@pytest.fixture
async def client(session_factory, identity, payments):
    """HTTP client wired to the app with test database and fake providers."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_identity_client] = lambda: identity
    application.dependency_overrides[get_payment_client] = lambda: payments

    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    application.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory, identity):
    """Create a user with a role and return auth headers for it."""

    async def _make_user(email: str, role: str = "member", name: str = None) -> Dict[str, str]:
        async with session_factory() as db:
            db.add(User(email=email, name=name or email.split("@")[0], role=role))
            await db.commit()
        token = identity.issue(email)
        return {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest.fixture
async def admin_headers(make_user):
    return await make_user("admin@example.com", "admin")


@pytest.fixture
async def manager_headers(make_user):
    return await make_user("manager@example.com", "clubManager")


@pytest.fixture
async def other_manager_headers(make_user):
    return await make_user("other.manager@example.com", "clubManager")


@pytest.fixture
async def member_headers(make_user):
    return await make_user("member@example.com", "member")


@pytest.fixture
def club_payload():
    return {
        "name": "Chess Club",
        "description": "Weekly games and tournaments",
        "category": "Games",
        "location": "Community Hall",
        "membershipFee": 0,
        "meetingSchedule": "Fridays 6pm",
    }


@pytest.fixture
def create_club(client, club_payload):
    """Submit a club as a manager and return its JSON."""

    async def _create_club(headers, **overrides):
        payload = {**club_payload, **overrides}
        response = await client.post("/clubs", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["club"]

    return _create_club


@pytest.fixture
def approved_club(client, create_club, admin_headers, manager_headers):
    """Create a club as the default manager and approve it."""

    async def _approved_club(**overrides):
        club = await create_club(manager_headers, **overrides)
        response = await client.patch(
            f"/admin/clubs/status/{club['id']}",
            json={"status": "approved"},
            headers=admin_headers,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _approved_club


@pytest.fixture
def future_date():
    return (datetime.now(timezone.utc) + timedelta(days=7)).replace(microsecond=0)


@pytest.fixture
def create_event(client, manager_headers, future_date):
    """Create an event for a club owned by the default manager."""

    async def _create_event(club_id, **overrides):
        payload = {
            "clubId": club_id,
            "title": "Spring Open",
            "description": "Rapid tournament",
            "eventDate": future_date.isoformat(),
            "eventTime": "18:00",
            "location": "Community Hall",
            "isPaid": False,
            "eventFee": 0,
            "maxAttendees": None,
            "bannerImage": "https://images.example.com/open.png",
        }
        payload.update(overrides)
        response = await client.post("/manager/events", json=payload, headers=manager_headers)
        assert response.status_code == 201, response.text
        return response.json()["event"]

    return _create_event
