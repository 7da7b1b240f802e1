# src/subscription/routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from payment.services import PaymentService
from payment.schemas import PaymentCreate, PaymentConfirm, PaymentCreateResponse, PaymentResponse
from auth.routes import get_current_user
from auth.models import User
from auth.schemas import SuccessResponse
from database import get_db, require_db, mark_unavailable

router = APIRouter(prefix="/subscription", tags=["subscription"])


@router.post("/createPayment", response_model=PaymentCreateResponse)
def create_payment(
    payment_data: PaymentCreate,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Start a subscription purchase."""
    return PaymentService.create_payment(current_user, payment_data, require_db(db))


@router.post("/confirmPayment", response_model=SuccessResponse)
def confirm_payment(
    confirm_data: PaymentConfirm,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Confirm a pending payment and upgrade the user to pro."""
    PaymentService.confirm_payment(confirm_data.payment_id, current_user, require_db(db))
    return SuccessResponse()


@router.get("/payments", response_model=List[PaymentResponse])
def get_user_payments(
    response: Response,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Caller's payments, newest first."""
    payments = PaymentService.get_user_payments(current_user.id, db)
    if payments is None:
        mark_unavailable(response)
        return []
    return [PaymentResponse.model_validate(payment) for payment in payments]
