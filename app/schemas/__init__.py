"""API schemas."""
from app.schemas.common import CamelModel, MessageResponse
from app.schemas.user import (
    UserRegister,
    UserRegisterResponse,
    RoleResponse,
    RoleUpdate,
    UserInDB,
)
from app.schemas.club import (
    ClubCreate,
    ClubUpdate,
    ClubStatusUpdate,
    ClubPublic,
    ClubInDB,
    ClubCreateResponse,
)
from app.schemas.membership import (
    MembershipInDB,
    JoinClubResponse,
    MembershipStatusResponse,
    MemberClubItem,
    ClubMemberItem,
)
from app.schemas.event import (
    EventCreate,
    EventUpdate,
    EventInDB,
    EventCreateResponse,
    RegistrationInDB,
    RegisterEventResponse,
    EventRegistrationItem,
    MemberEventItem,
)
from app.schemas.payment import (
    MembershipCheckoutRequest,
    EventCheckoutRequest,
    CheckoutSessionResponse,
    CheckoutSession,
    PaymentSuccessResponse,
    PaymentInDB,
    MemberPaymentItem,
)
from app.schemas.dashboard import MemberOverview, ManagerStats, AdminStats

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserRegister",
    "UserRegisterResponse",
    "RoleResponse",
    "RoleUpdate",
    "UserInDB",
    "ClubCreate",
    "ClubUpdate",
    "ClubStatusUpdate",
    "ClubPublic",
    "ClubInDB",
    "ClubCreateResponse",
    "MembershipInDB",
    "JoinClubResponse",
    "MembershipStatusResponse",
    "MemberClubItem",
    "ClubMemberItem",
    "EventCreate",
    "EventUpdate",
    "EventInDB",
    "EventCreateResponse",
    "RegistrationInDB",
    "RegisterEventResponse",
    "EventRegistrationItem",
    "MemberEventItem",
    "MembershipCheckoutRequest",
    "EventCheckoutRequest",
    "CheckoutSessionResponse",
    "CheckoutSession",
    "PaymentSuccessResponse",
    "PaymentInDB",
    "MemberPaymentItem",
    "MemberOverview",
    "ManagerStats",
    "AdminStats",
]
