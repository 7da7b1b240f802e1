# src/vpn/services.py
import logging
import random

from sqlalchemy.orm import Session
from typing import List, Optional
from auth.models import User
from vpn.models import VpnLocation
from vpn.schemas import ConnectResponse
from errors import ResourceExhaustedError

logger = logging.getLogger(__name__)


class VpnService:
    @staticmethod
    def visible_locations(user: User, db: Optional[Session]) -> Optional[List[VpnLocation]]:
        """Locations the user's tier may use. None means the store is unavailable."""
        if db is None:
            return None
        locations = db.query(VpnLocation).order_by(VpnLocation.country, VpnLocation.city).all()
        if user.is_pro:
            return locations
        return [location for location in locations if not location.is_pro]

    @staticmethod
    def connect(
        user: User,
        location_id: Optional[str],
        db: Optional[Session],
        rng: Optional[random.Random] = None,
    ) -> ConnectResponse:
        """Assign a simulated VPN identity.

        A requested location outside the user's tier (or unknown) falls back to a
        random visible one, so free users never land on a pro location.
        """
        rng = rng or random
        locations = VpnService.visible_locations(user, db) or []
        if not locations:
            raise ResourceExhaustedError()

        selected = None
        if location_id:
            selected = next((location for location in locations if location.id == location_id), None)
            if selected is None:
                logger.info(f"Location {location_id} not available for user {user.id}, picking at random")
        if selected is None:
            selected = rng.choice(locations)

        if not selected.ip_pool:
            raise ResourceExhaustedError(f"Location {selected.id} has an empty IP pool")

        return ConnectResponse(
            ip=rng.choice(selected.ip_pool),
            city=selected.city,
            country=selected.country,
            country_code=selected.country_code,
            latitude=selected.latitude,
            longitude=selected.longitude,
            latency=rng.randint(selected.latency_min, selected.latency_max),
            location_id=selected.id,
        )
