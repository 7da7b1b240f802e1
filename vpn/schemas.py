# src/vpn/schemas.py
from typing import List, Optional
from auth.schemas import CamelModel


class LocationResponse(CamelModel):
    """Schema for a VPN location."""
    id: str
    country: str
    country_code: str
    city: str
    latitude: str
    longitude: str
    ip_pool: List[str]
    latency_min: int
    latency_max: int
    is_pro: bool


class ConnectRequest(CamelModel):
    location_id: Optional[str] = None


class ConnectResponse(CamelModel):
    """Assigned VPN identity; latency is in milliseconds."""
    ip: str
    city: str
    country: str
    country_code: str
    latitude: str
    longitude: str
    latency: int
    location_id: str
