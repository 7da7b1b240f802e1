# src/analytics/routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import Optional
from analytics.services import AnalyticsService
from analytics.schemas import StatsResponse
from auth.routes import get_current_user
from auth.models import User
from database import get_db, mark_unavailable

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    response: Response,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Session counts for the current user."""
    stats = AnalyticsService.stats(current_user.id, db)
    if stats is None:
        mark_unavailable(response)
        return StatsResponse()
    return stats
