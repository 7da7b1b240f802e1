# src/admin/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from auth.models import User, AdminActionLog, SubscriptionTier
from auth.schemas import UserResponse, AdminActionLogResponse
from auth.routes import check_admin_role
from browse.schemas import SessionResponse
from browse.services import BrowseService
from payment.models import Payment, PaymentStatus
from payment.schemas import PaymentResponse
from subscription.services import SubscriptionService
from database import get_db, require_db
from errors import NotFoundError

router = APIRouter(prefix="/admin", tags=["admin"])


def log_action(admin: User, action: str, db: Session) -> None:
    db.add(AdminActionLog(admin_id=admin.id, action=action))
    db.commit()


@router.get("/users", response_model=List[UserResponse])
def get_users(
    subscription_tier: Optional[SubscriptionTier] = None,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(check_admin_role)
):
    """Retrieve users with optional subscription tier filter."""
    query = require_db(db).query(User)
    if subscription_tier:
        query = query.filter(User.subscription_tier == subscription_tier)
    return [UserResponse.model_validate(user) for user in query.order_by(User.created_at).all()]


@router.patch("/users/{user_id}/subscription", response_model=UserResponse)
def update_user_subscription(
    user_id: str,
    tier: SubscriptionTier,
    expiry: Optional[datetime] = None,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(check_admin_role)
):
    """Override a user's subscription tier."""
    db = require_db(db)
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    SubscriptionService.set_tier(user, tier, expiry, db)
    log_action(current_user, f"Set subscription of user {user_id} to {tier.value}", db)
    return UserResponse.model_validate(user)


@router.post("/sessions/{session_id}/terminate", response_model=SessionResponse)
def terminate_session(
    session_id: str,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(check_admin_role)
):
    """Terminate any user's active session."""
    db = require_db(db)
    session = BrowseService.terminate(session_id, db)
    log_action(current_user, f"Terminated session {session_id}", db)
    return SessionResponse.model_validate(session)


@router.get("/payments", response_model=List[PaymentResponse])
def get_payments(
    status: Optional[PaymentStatus] = None,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(check_admin_role)
):
    """Retrieve payments with optional status filter."""
    query = require_db(db).query(Payment)
    if status:
        query = query.filter(Payment.status == status)
    return [PaymentResponse.model_validate(payment) for payment in query.order_by(Payment.created_at.desc()).all()]


@router.get("/logs", response_model=List[AdminActionLogResponse])
def get_admin_logs(db: Optional[Session] = Depends(get_db), current_user: User = Depends(check_admin_role)):
    """Retrieve admin action logs."""
    logs = require_db(db).query(AdminActionLog).order_by(AdminActionLog.timestamp).all()
    return [AdminActionLogResponse.model_validate(log) for log in logs]
