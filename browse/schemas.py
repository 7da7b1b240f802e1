# src/browse/schemas.py
from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError
from datetime import datetime
from typing import Annotated, Optional
from auth.schemas import CamelModel
from browse.models import ThreatLevel, SessionStatus


_http_url = TypeAdapter(HttpUrl)


def validate_url(value: str) -> str:
    """Require a well-formed http(s) URL; the stripped string is kept unnormalised."""
    value = value.strip()
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL")
    return value


UrlStr = Annotated[str, Field(max_length=2048), AfterValidator(validate_url)]


class ScanRequest(CamelModel):
    url: UrlStr


class StartRequest(ScanRequest):
    """URL plus the VPN snapshot returned by vpn.connect."""
    vpn_ip: Optional[str] = Field(default=None, max_length=45)
    vpn_location: Optional[str] = Field(default=None, max_length=200)
    vpn_country: Optional[str] = Field(default=None, max_length=100)
    vpn_latitude: Optional[str] = Field(default=None, max_length=20)
    vpn_longitude: Optional[str] = Field(default=None, max_length=20)


class ThreatDetailsResponse(CamelModel):
    type: str
    description: str
    confidence: str  # "87%"


class ScanResponse(CamelModel):
    threat_level: ThreatLevel
    threat_details: Optional[ThreatDetailsResponse] = None


class StartResponse(ScanResponse):
    session_id: str


class SessionIdRequest(CamelModel):
    session_id: str


class SessionResponse(CamelModel):
    """Schema for a browsing session."""
    id: str
    user_id: str
    url: str
    vpn_ip: Optional[str] = None
    vpn_location: Optional[str] = None
    vpn_country: Optional[str] = None
    vpn_latitude: Optional[str] = None
    vpn_longitude: Optional[str] = None
    threat_level: ThreatLevel
    threat_details: Optional[ThreatDetailsResponse] = None
    status: SessionStatus
    auto_delete_at: Optional[datetime] = None
    started_at: datetime
    ended_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
