"""Payment ledger model."""
from sqlalchemy import Column, String, Numeric, DateTime

from app.core.database import Base
from app.core.ids import new_id
from app.core.timeutils import utcnow

PAYMENT_TYPE_MEMBERSHIP = "membership"
PAYMENT_TYPE_EVENT = "event"
PAYMENT_STATUS_PAID = "paid"


class Payment(Base):
    """One reconciled checkout session. Rows are never updated."""

    __tablename__ = "payments"

    id = Column(String(32), primary_key=True, default=new_id)
    user_email = Column(String, nullable=False, index=True)
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    type = Column(String, nullable=False)
    stripe_payment_intent_id = Column(String, nullable=True)
    transaction_id = Column(String, unique=True, nullable=False, index=True)
    payment_status = Column(String, nullable=False, default=PAYMENT_STATUS_PAID)
    club_id = Column(String(32), nullable=True, index=True)
    event_id = Column(String(32), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
