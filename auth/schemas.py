# src/auth/schemas.py
from pydantic import BaseModel, EmailStr
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from auth.models import UserRole, SubscriptionTier


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UserLogin(CamelModel):
    """Schema for user login. Unknown emails are provisioned on first login."""
    email: EmailStr
    password: str
    name: Optional[str] = None


class UserResponse(CamelModel):
    """Schema for user response."""
    id: str
    email: str
    name: Optional[str] = None
    role: UserRole
    subscription_tier: SubscriptionTier
    subscription_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    last_signed_in: Optional[datetime] = None


class Token(BaseModel):
    """Schema for token response."""
    access_token: str
    token_type: str


class AdminActionLogResponse(CamelModel):
    """Schema for admin action log response."""
    id: str
    admin_id: str
    action: str
    timestamp: datetime


class SuccessResponse(BaseModel):
    success: bool = True
