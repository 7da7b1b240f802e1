# src/vpn/routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from vpn.services import VpnService
from vpn.schemas import LocationResponse, ConnectRequest, ConnectResponse
from auth.routes import get_current_user
from auth.models import User
from database import get_db, require_db, mark_unavailable

router = APIRouter(prefix="/vpn", tags=["vpn"])


@router.get("/locations", response_model=List[LocationResponse])
def get_locations(
    response: Response,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List VPN locations visible to the caller's tier."""
    locations = VpnService.visible_locations(current_user, db)
    if locations is None:
        mark_unavailable(response)
        return []
    return [LocationResponse.model_validate(location) for location in locations]


@router.post("/connect", response_model=ConnectResponse)
def connect(
    connect_data: Optional[ConnectRequest] = None,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Pick a location and draw a random IP and latency from it."""
    location_id = connect_data.location_id if connect_data else None
    return VpnService.connect(current_user, location_id, require_db(db))
