# src/browse/models.py
import enum
from uuid import uuid4

from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from database import Base, utcnow
from datetime import datetime
from typing import Optional


class ThreatLevel(str, enum.Enum):
    safe = "safe"
    warning = "warning"
    danger = "danger"


class SessionStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    terminated = "terminated"
    deleted = "deleted"


class BrowsingSession(Base):
    """A disposable browsing session. Only `active` sessions may change status."""
    __tablename__ = "sessions"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    user_id: str = Column(String(64), ForeignKey("users.id"), index=True, nullable=False)
    url: str = Column(Text, nullable=False)
    # VPN snapshot taken at start, not a reference to vpn_locations
    vpn_ip: Optional[str] = Column(String(45), nullable=True)
    vpn_location: Optional[str] = Column(String(200), nullable=True)
    vpn_country: Optional[str] = Column(String(100), nullable=True)
    vpn_latitude: Optional[str] = Column(String(20), nullable=True)
    vpn_longitude: Optional[str] = Column(String(20), nullable=True)
    threat_level: ThreatLevel = Column(Enum(ThreatLevel), nullable=False, default=ThreatLevel.safe)
    threat_details: Optional[dict] = Column(JSON, nullable=True)  # type, description, confidence
    status: SessionStatus = Column(Enum(SessionStatus), nullable=False, default=SessionStatus.active, index=True)
    auto_delete_at: Optional[datetime] = Column(DateTime, nullable=True)
    started_at: datetime = Column(DateTime, nullable=False, default=utcnow)
    ended_at: Optional[datetime] = Column(DateTime, nullable=True)
    deleted_at: Optional[datetime] = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="sessions")
    threats = relationship("Threat", back_populates="session")
    messages = relationship("ChatMessage", back_populates="session", order_by="ChatMessage.seq")

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.active


class Threat(Base):
    """Append-only log of danger verdicts."""
    __tablename__ = "threats"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    session_id: str = Column(String(64), ForeignKey("sessions.id"), index=True, nullable=False)
    threat_type: str = Column(String(100), nullable=False)
    description: str = Column(Text, nullable=False)
    confidence: int = Column(Integer, nullable=False)  # 0-100
    blocked: bool = Column(Boolean, nullable=False, default=True)
    detected_at: datetime = Column(DateTime, default=utcnow)

    session = relationship("BrowsingSession", back_populates="threats")
