# src/analytics/services.py
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Optional
from analytics.schemas import StatsResponse
from browse.models import BrowsingSession, Threat, SessionStatus, ThreatLevel


class AnalyticsService:
    @staticmethod
    def stats(user_id: str, db: Optional[Session]) -> Optional[StatsResponse]:
        """Session and threat counts for one user. None if the store is unavailable."""
        if db is None:
            return None

        counts = dict(
            db.query(BrowsingSession.status, func.count(BrowsingSession.id))
            .filter(BrowsingSession.user_id == user_id)
            .group_by(BrowsingSession.status)
            .all()
        )
        levels = dict(
            db.query(BrowsingSession.threat_level, func.count(BrowsingSession.id))
            .filter(BrowsingSession.user_id == user_id)
            .group_by(BrowsingSession.threat_level)
            .all()
        )
        threats = (
            db.query(func.count(Threat.id))
            .join(BrowsingSession, Threat.session_id == BrowsingSession.id)
            .filter(BrowsingSession.user_id == user_id)
            .scalar()
        )

        return StatsResponse(
            total_sessions=sum(counts.values()),
            active_sessions=counts.get(SessionStatus.active, 0),
            safe_sessions=levels.get(ThreatLevel.safe, 0),
            dangerous_sessions=levels.get(ThreatLevel.danger, 0) + levels.get(ThreatLevel.warning, 0),
            threats_detected=threats or 0,
        )
