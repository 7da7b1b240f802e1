# src/browse/services.py
import logging

from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import List, Optional
from auth.models import User
from browse.models import BrowsingSession, Threat, SessionStatus
from browse.scanner import Verdict, scan_url
from browse.schemas import ScanResponse, StartRequest, StartResponse, ThreatDetailsResponse
from preferences.services import SettingsService
from database import utcnow
from errors import NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


def verdict_response(verdict: Verdict) -> ScanResponse:
    details = ThreatDetailsResponse(**verdict.details.as_dict()) if verdict.details else None
    return ScanResponse(threat_level=verdict.level, threat_details=details)


class BrowseService:
    @staticmethod
    def scan(url: str) -> ScanResponse:
        """Classify a URL without creating a session."""
        return verdict_response(scan_url(url))

    @staticmethod
    def start(user: User, data: StartRequest, db: Session) -> StartResponse:
        """Classify the URL and open an active session with the VPN snapshot."""
        verdict = scan_url(data.url)
        user_settings = SettingsService.get_or_create(user.id, db)

        now = utcnow()
        auto_delete_at: Optional[datetime] = None
        if user_settings.auto_delete_sessions:
            auto_delete_at = now + timedelta(minutes=user_settings.delete_after_minutes)

        session = BrowsingSession(
            user_id=user.id,
            url=data.url,
            vpn_ip=data.vpn_ip,
            vpn_location=data.vpn_location,
            vpn_country=data.vpn_country,
            vpn_latitude=data.vpn_latitude,
            vpn_longitude=data.vpn_longitude,
            threat_level=verdict.level,
            threat_details=verdict.details.as_dict() if verdict.details else None,
            status=SessionStatus.active,
            auto_delete_at=auto_delete_at,
            started_at=now,
        )
        db.add(session)
        db.flush()

        if verdict.is_danger:
            db.add(Threat(
                session_id=session.id,
                threat_type=verdict.details.type,
                description=verdict.details.description,
                confidence=verdict.details.confidence,
                blocked=True,
            ))
            logger.info(f"Threat '{verdict.details.type}' logged for session {session.id}")

        db.commit()
        db.refresh(session)

        scan = verdict_response(verdict)
        return StartResponse(session_id=session.id, threat_level=scan.threat_level, threat_details=scan.threat_details)

    @staticmethod
    def get_owned_session(session_id: str, user_id: str, db: Session) -> BrowsingSession:
        session = db.query(BrowsingSession).filter(BrowsingSession.id == session_id).first()
        if session is None:
            raise NotFoundError("Session not found")
        if session.user_id != user_id:
            raise UnauthorizedError("Session belongs to another user")
        return session

    @staticmethod
    def _close(session: BrowsingSession, status: SessionStatus, db: Session) -> bool:
        """Move an active session to a terminal status.

        The UPDATE is guarded on status=active, so of two concurrent callers only
        one transitions the row. Returns False when the session was already closed.
        """
        now = utcnow()
        values = {BrowsingSession.status: status, BrowsingSession.ended_at: now}
        if status == SessionStatus.deleted:
            values[BrowsingSession.deleted_at] = now
        updated = (
            db.query(BrowsingSession)
            .filter(BrowsingSession.id == session.id, BrowsingSession.status == SessionStatus.active)
            .update(values, synchronize_session=False)
        )
        db.commit()
        db.refresh(session)
        if updated:
            logger.info(f"Session {session.id} -> {status.value}")
        return bool(updated)

    @staticmethod
    def nuke(session_id: str, user: User, db: Session) -> bool:
        """Logically delete the caller's session. Repeated calls are no-ops."""
        session = BrowseService.get_owned_session(session_id, user.id, db)
        return BrowseService._close(session, SessionStatus.deleted, db)

    @staticmethod
    def end(session_id: str, user: User, db: Session) -> bool:
        """Finish the caller's session normally."""
        session = BrowseService.get_owned_session(session_id, user.id, db)
        return BrowseService._close(session, SessionStatus.completed, db)

    @staticmethod
    def terminate(session_id: str, db: Session) -> BrowsingSession:
        """Admin shutdown of any user's session."""
        session = db.query(BrowsingSession).filter(BrowsingSession.id == session_id).first()
        if session is None:
            raise NotFoundError("Session not found")
        BrowseService._close(session, SessionStatus.terminated, db)
        return session

    @staticmethod
    def list_sessions(user_id: str, db: Optional[Session]) -> Optional[List[BrowsingSession]]:
        """Caller's sessions, newest first. None means the store is unavailable."""
        if db is None:
            return None
        return (
            db.query(BrowsingSession)
            .filter(BrowsingSession.user_id == user_id)
            .order_by(BrowsingSession.started_at.desc())
            .all()
        )

    @staticmethod
    def sweep_expired(db: Session, now: Optional[datetime] = None) -> int:
        """Delete active sessions whose auto-delete deadline has passed."""
        now = now or utcnow()
        updated = (
            db.query(BrowsingSession)
            .filter(
                BrowsingSession.status == SessionStatus.active,
                BrowsingSession.auto_delete_at.isnot(None),
                BrowsingSession.auto_delete_at < now,
            )
            .update(
                {
                    BrowsingSession.status: SessionStatus.deleted,
                    BrowsingSession.ended_at: now,
                    BrowsingSession.deleted_at: now,
                },
                synchronize_session=False,
            )
        )
        db.commit()
        return updated
