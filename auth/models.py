# src/auth/models.py
import enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base, utcnow
from datetime import datetime
from typing import Optional


class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"


class SubscriptionTier(str, enum.Enum):
    free = "free"
    pro = "pro"


class User(Base):
    """Represents a user in the system."""
    __tablename__ = "users"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    email: str = Column(String(320), unique=True, index=True, nullable=False)
    name: Optional[str] = Column(String, nullable=True)
    password_hash: str = Column(String, nullable=False)
    role: UserRole = Column(Enum(UserRole), nullable=False, default=UserRole.user)
    subscription_tier: SubscriptionTier = Column(Enum(SubscriptionTier), nullable=False, default=SubscriptionTier.free)
    subscription_expiry: Optional[datetime] = Column(DateTime, nullable=True)
    created_at: datetime = Column(DateTime, default=utcnow)
    last_signed_in: datetime = Column(DateTime, default=utcnow)

    settings = relationship("UserSettings", back_populates="user", uselist=False)
    sessions = relationship("BrowsingSession", back_populates="user")
    payments = relationship("Payment", back_populates="user")
    admin_actions = relationship("AdminActionLog", back_populates="admin")

    @property
    def is_pro(self) -> bool:
        """Pro tier that has not yet expired."""
        if self.subscription_tier != SubscriptionTier.pro:
            return False
        return self.subscription_expiry is None or self.subscription_expiry > utcnow()


class AdminActionLog(Base):
    """Represents a log of admin actions."""
    __tablename__ = "admin_action_logs"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    admin_id: str = Column(String(64), ForeignKey("users.id"), nullable=False)
    action: str = Column(String, nullable=False)
    timestamp: datetime = Column(DateTime, nullable=False, default=utcnow)

    admin = relationship("User", back_populates="admin_actions")
