# src/preferences/schemas.py
from pydantic import Field
from datetime import datetime
from typing import Optional
from auth.schemas import CamelModel
from preferences.models import ThreatSensitivity


class SettingsResponse(CamelModel):
    """Schema for settings response."""
    user_id: str
    auto_delete_sessions: bool = True
    delete_after_minutes: int = 30
    block_trackers: bool = True
    block_ads: bool = True
    block_malware: bool = True
    enable_ai_assistant: bool = True
    preferred_vpn_country: Optional[str] = None
    threat_sensitivity: ThreatSensitivity = ThreatSensitivity.medium
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SettingsUpdate(CamelModel):
    """Partial settings update; omitted fields keep their stored value."""
    auto_delete_sessions: Optional[bool] = None
    delete_after_minutes: Optional[int] = Field(default=None, ge=1, le=7 * 24 * 60)
    block_trackers: Optional[bool] = None
    block_ads: Optional[bool] = None
    block_malware: Optional[bool] = None
    enable_ai_assistant: Optional[bool] = None
    preferred_vpn_country: Optional[str] = Field(default=None, max_length=100)
    threat_sensitivity: Optional[ThreatSensitivity] = None
