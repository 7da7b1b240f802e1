# src/payment/schemas.py
from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from auth.schemas import CamelModel
from auth.models import SubscriptionTier
from payment.models import PaymentStatus


class PaymentCreate(CamelModel):
    """Schema for starting a subscription purchase."""
    tier: Literal["pro"]
    months: int = Field(ge=1, le=12)
    payment_method: Optional[str] = Field(default=None, max_length=50)


class PaymentConfirm(CamelModel):
    payment_id: str


class PaymentCreateResponse(CamelModel):
    """Schema for payment creation response."""
    payment_id: str
    amount: int
    currency: str


class PaymentResponse(CamelModel):
    """Schema for payment response."""
    id: str
    user_id: str
    amount: int
    currency: str
    status: PaymentStatus
    subscription_tier: SubscriptionTier
    subscription_months: int
    payment_method: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None
    expiration_time: datetime
