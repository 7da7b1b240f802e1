# src/seed_locations.py
"""Seed the VPN location pool. Safe to run repeatedly."""
import logging
import sys

from sqlalchemy.orm import Session
from config import settings
from database import Database
from vpn.models import VpnLocation

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = [
    {"country": "United States", "country_code": "US", "city": "New York", "latitude": "40.7128", "longitude": "-74.0060",
     "ip_pool": ["104.28.14.21", "104.28.14.37", "104.28.15.102"], "latency_min": 20, "latency_max": 45, "is_pro": False},
    {"country": "United Kingdom", "country_code": "GB", "city": "London", "latitude": "51.5074", "longitude": "-0.1278",
     "ip_pool": ["185.199.108.14", "185.199.109.88"], "latency_min": 30, "latency_max": 60, "is_pro": False},
    {"country": "Germany", "country_code": "DE", "city": "Frankfurt", "latitude": "50.1109", "longitude": "8.6821",
     "ip_pool": ["195.201.33.7", "195.201.33.19", "195.201.34.2"], "latency_min": 25, "latency_max": 55, "is_pro": False},
    {"country": "Japan", "country_code": "JP", "city": "Tokyo", "latitude": "35.6762", "longitude": "139.6503",
     "ip_pool": ["45.76.98.12", "45.76.99.201"], "latency_min": 90, "latency_max": 140, "is_pro": True},
    {"country": "Switzerland", "country_code": "CH", "city": "Zurich", "latitude": "47.3769", "longitude": "8.5417",
     "ip_pool": ["179.43.128.5", "179.43.128.66"], "latency_min": 35, "latency_max": 70, "is_pro": True},
    {"country": "Singapore", "country_code": "SG", "city": "Singapore", "latitude": "1.3521", "longitude": "103.8198",
     "ip_pool": ["139.162.3.44", "139.162.5.90"], "latency_min": 110, "latency_max": 180, "is_pro": True},
]


def seed_locations(db: Session, locations=None) -> int:
    """Insert locations not yet present (matched on country code and city)."""
    added = 0
    for data in locations or DEFAULT_LOCATIONS:
        exists = db.query(VpnLocation).filter(
            VpnLocation.country_code == data["country_code"],
            VpnLocation.city == data["city"],
        ).first()
        if exists:
            continue
        db.add(VpnLocation(**data))
        added += 1
    db.commit()
    return added


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    database = Database(settings.DATABASE_URL)
    if not database.connect():
        logger.error("Database connection failed")
        sys.exit(1)
    db = database.session()
    try:
        logger.info(f"Seeded {seed_locations(db)} VPN locations")
    finally:
        db.close()
