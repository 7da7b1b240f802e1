# src/subscription/services.py
import logging

from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Optional
from auth.models import User, SubscriptionTier
from config import settings
from database import utcnow
from errors import NotFoundError

logger = logging.getLogger(__name__)


class SubscriptionService:
    @staticmethod
    def activate(user_id: str, tier: SubscriptionTier, db: Session) -> User:
        """Grant the tier for one subscription period from now."""
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User not found")
        user.subscription_tier = tier
        user.subscription_expiry = utcnow() + timedelta(days=settings.SUBSCRIPTION_DURATION_DAYS)
        db.commit()
        db.refresh(user)
        logger.info(f"User {user_id} upgraded to {tier.value} until {user.subscription_expiry}")
        return user

    @staticmethod
    def set_tier(user: User, tier: SubscriptionTier, expiry: Optional[datetime], db: Session) -> User:
        user.subscription_tier = tier
        user.subscription_expiry = expiry
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def expire_subscriptions(db: Session, now: Optional[datetime] = None) -> int:
        """Move users whose pro period has ended back to free."""
        now = now or utcnow()
        updated = (
            db.query(User)
            .filter(
                User.subscription_tier == SubscriptionTier.pro,
                User.subscription_expiry.isnot(None),
                User.subscription_expiry < now,
            )
            .update({User.subscription_tier: SubscriptionTier.free}, synchronize_session=False)
        )
        db.commit()
        return updated
