# src/preferences/models.py
import enum
from uuid import uuid4

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base, utcnow
from datetime import datetime
from typing import Optional


class ThreatSensitivity(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class UserSettings(Base):
    """Per-user browsing preferences, one row per user."""
    __tablename__ = "user_settings"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    user_id: str = Column(String(64), ForeignKey("users.id"), unique=True, nullable=False)
    auto_delete_sessions: bool = Column(Boolean, nullable=False, default=True)
    delete_after_minutes: int = Column(Integer, nullable=False, default=30)
    block_trackers: bool = Column(Boolean, nullable=False, default=True)
    block_ads: bool = Column(Boolean, nullable=False, default=True)
    block_malware: bool = Column(Boolean, nullable=False, default=True)
    enable_ai_assistant: bool = Column(Boolean, nullable=False, default=True)
    preferred_vpn_country: Optional[str] = Column(String(100), nullable=True)
    threat_sensitivity: ThreatSensitivity = Column(Enum(ThreatSensitivity), nullable=False, default=ThreatSensitivity.medium)
    created_at: datetime = Column(DateTime, default=utcnow)
    updated_at: datetime = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="settings")
