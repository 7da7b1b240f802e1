# src/preferences/routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import Optional
from preferences.services import SettingsService
from preferences.schemas import SettingsResponse, SettingsUpdate
from auth.routes import get_current_user
from auth.models import User
from auth.schemas import SuccessResponse
from database import get_db, require_db, mark_unavailable

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/get", response_model=SettingsResponse)
def get_settings(
    response: Response,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Return the user's settings, creating defaults on first access."""
    if db is None:
        mark_unavailable(response)
    return SettingsService.get_settings(current_user.id, db)


@router.post("/update", response_model=SuccessResponse)
def update_settings(
    settings_data: SettingsUpdate,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Save a partial settings update."""
    SettingsService.update_settings(current_user.id, settings_data, require_db(db))
    return SuccessResponse()
