# src/vpn/models.py
from uuid import uuid4

from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, CheckConstraint
from database import Base, utcnow
from datetime import datetime
from typing import List


class VpnLocation(Base):
    """A simulated VPN egress point. Seeded out-of-band, read-only at runtime."""
    __tablename__ = "vpn_locations"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    country: str = Column(String(100), nullable=False)
    country_code: str = Column(String(2), nullable=False)
    city: str = Column(String(100), nullable=False)
    latitude: str = Column(String(20), nullable=False)
    longitude: str = Column(String(20), nullable=False)
    ip_pool: List[str] = Column(JSON, nullable=False)
    latency_min: int = Column(Integer, nullable=False)
    latency_max: int = Column(Integer, nullable=False)
    is_pro: bool = Column(Boolean, nullable=False, default=False)
    created_at: datetime = Column(DateTime, default=utcnow)

    __table_args__ = (CheckConstraint("latency_min <= latency_max", name="ck_vpn_latency_range"),)
