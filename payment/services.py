# src/payment/services.py
import logging

from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import List, Optional

from auth.models import User, SubscriptionTier
from payment.models import Payment, PaymentStatus
from payment.schemas import PaymentCreate, PaymentCreateResponse
from subscription.services import SubscriptionService
from config import settings
from database import utcnow
from errors import ConflictError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


class PaymentService:
    @staticmethod
    def create_payment(user: User, payment_data: PaymentCreate, db: Session) -> PaymentCreateResponse:
        """Record a pending payment; amount is months x the monthly price in cents."""
        now = utcnow()
        payment = Payment(
            user_id=user.id,
            amount=payment_data.months * settings.PRO_MONTHLY_PRICE,
            currency=settings.CURRENCY,
            status=PaymentStatus.pending,
            subscription_tier=SubscriptionTier(payment_data.tier),
            subscription_months=payment_data.months,
            payment_method=payment_data.payment_method,
            created_at=now,
            expiration_time=now + timedelta(minutes=settings.PAYMENT_EXPIRE_MINUTES),
        )
        db.add(payment)
        db.commit()
        db.refresh(payment)
        logger.info(f"Created payment {payment.id} for user {user.id}: {payment.amount} {payment.currency}")

        return PaymentCreateResponse(payment_id=payment.id, amount=payment.amount, currency=payment.currency)

    @staticmethod
    def get_owned_payment(payment_id: str, user_id: str, db: Session) -> Payment:
        payment = db.query(Payment).filter(Payment.id == payment_id).first()
        if payment is None:
            raise NotFoundError("Payment not found")
        if payment.user_id != user_id:
            raise UnauthorizedError("Payment belongs to another user")
        return payment

    @staticmethod
    def _transition(payment: Payment, status: PaymentStatus, db: Session, completed_at: Optional[datetime] = None) -> bool:
        """pending -> completed|failed, at most once per payment."""
        values = {Payment.status: status}
        if completed_at is not None:
            values[Payment.completed_at] = completed_at
        updated = (
            db.query(Payment)
            .filter(Payment.id == payment.id, Payment.status == PaymentStatus.pending)
            .update(values, synchronize_session=False)
        )
        db.commit()
        db.refresh(payment)
        return bool(updated)

    @staticmethod
    def confirm_payment(payment_id: str, user: User, db: Session) -> bool:
        """Simulated gateway confirmation; no real verification happens.

        Returns False when the payment was already completed.
        """
        payment = PaymentService.get_owned_payment(payment_id, user.id, db)
        if payment.status == PaymentStatus.completed:
            return False
        if payment.status == PaymentStatus.failed:
            raise ConflictError("Payment has failed and cannot be confirmed")

        now = utcnow()
        if payment.expiration_time < now:
            PaymentService._transition(payment, PaymentStatus.failed, db)
            raise ConflictError("Payment has expired")

        if not PaymentService._transition(payment, PaymentStatus.completed, db, completed_at=now):
            # Lost a race with another confirmation or the expiry sweep
            if payment.status == PaymentStatus.completed:
                return False
            raise ConflictError("Payment has failed and cannot be confirmed")

        SubscriptionService.activate(payment.user_id, payment.subscription_tier, db)
        logger.info(f"Payment {payment.id} completed")
        return True

    @staticmethod
    def get_user_payments(user_id: str, db: Optional[Session]) -> Optional[List[Payment]]:
        if db is None:
            return None
        return db.query(Payment).filter(Payment.user_id == user_id).order_by(Payment.created_at.desc()).all()

    @staticmethod
    def expire_pending(db: Session, now: Optional[datetime] = None) -> int:
        """Fail pending payments that were never confirmed in time."""
        now = now or utcnow()
        updated = (
            db.query(Payment)
            .filter(Payment.status == PaymentStatus.pending, Payment.expiration_time < now)
            .update({Payment.status: PaymentStatus.failed}, synchronize_session=False)
        )
        db.commit()
        return updated
