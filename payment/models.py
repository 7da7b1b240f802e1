# src/payment/models.py
import enum
from uuid import uuid4

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from database import Base, utcnow
from auth.models import SubscriptionTier
from datetime import datetime
from typing import Optional


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class Payment(Base):
    """Represents a simulated subscription payment."""
    __tablename__ = "payments"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    user_id: str = Column(String(64), ForeignKey("users.id"), index=True, nullable=False)
    amount: int = Column(Integer, nullable=False)  # cents
    currency: str = Column(String(3), nullable=False, default="USD")
    status: PaymentStatus = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.pending)
    subscription_tier: SubscriptionTier = Column(Enum(SubscriptionTier), nullable=False)
    subscription_months: int = Column(Integer, nullable=False, default=1)
    payment_method: Optional[str] = Column(String(50), nullable=True)
    created_at: datetime = Column(DateTime, nullable=False, default=utcnow)
    completed_at: Optional[datetime] = Column(DateTime, nullable=True)
    expiration_time: datetime = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="payments")
