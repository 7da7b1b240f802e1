# src/preferences/services.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional
from preferences.models import UserSettings
from preferences.schemas import SettingsResponse, SettingsUpdate

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"preferred_vpn_country"}


class SettingsService:
    @staticmethod
    def find(user_id: str, db: Session) -> Optional[UserSettings]:
        return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()

    @staticmethod
    def get_or_create(user_id: str, db: Session) -> UserSettings:
        """Load the user's settings, creating the defaults row on first access."""
        user_settings = SettingsService.find(user_id, db)
        if user_settings is not None:
            return user_settings
        user_settings = UserSettings(user_id=user_id)
        db.add(user_settings)
        try:
            db.commit()
        except IntegrityError:
            # a concurrent first read inserted the row
            db.rollback()
            return SettingsService.find(user_id, db)
        db.refresh(user_settings)
        logger.info(f"Created default settings for user {user_id}")
        return user_settings

    @staticmethod
    def get_settings(user_id: str, db: Optional[Session]) -> SettingsResponse:
        if db is None:
            return SettingsResponse(user_id=user_id)
        return SettingsResponse.model_validate(SettingsService.get_or_create(user_id, db))

    @staticmethod
    def update_settings(user_id: str, update: SettingsUpdate, db: Session) -> UserSettings:
        """Upsert the provided fields."""
        user_settings = SettingsService.get_or_create(user_id, db)
        for key, value in update.model_dump(exclude_unset=True).items():
            if value is None and key not in NULLABLE_FIELDS:
                continue
            setattr(user_settings, key, value)
        db.commit()
        db.refresh(user_settings)
        return user_settings
