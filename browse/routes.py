# src/browse/routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from browse.services import BrowseService
from browse.schemas import ScanRequest, ScanResponse, StartRequest, StartResponse, SessionIdRequest, SessionResponse
from auth.routes import get_current_user
from auth.models import User
from auth.schemas import SuccessResponse
from database import get_db, require_db, mark_unavailable

router = APIRouter(prefix="/browse", tags=["browse"])


@router.post("/scan", response_model=ScanResponse)
def scan(scan_data: ScanRequest, current_user: User = Depends(get_current_user)):
    """Classify a URL without starting a session."""
    return BrowseService.scan(scan_data.url)


@router.post("/start", response_model=StartResponse)
def start(
    start_data: StartRequest,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Scan the URL and open a browsing session."""
    return BrowseService.start(current_user, start_data, require_db(db))


@router.post("/nuke", response_model=SuccessResponse)
def nuke(
    nuke_data: SessionIdRequest,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Destroy a session. Nuking an already closed session succeeds without changes."""
    BrowseService.nuke(nuke_data.session_id, current_user, require_db(db))
    return SuccessResponse()


@router.post("/end", response_model=SuccessResponse)
def end(
    end_data: SessionIdRequest,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Mark a session as completed."""
    BrowseService.end(end_data.session_id, current_user, require_db(db))
    return SuccessResponse()


@router.get("/sessions", response_model=List[SessionResponse])
def get_sessions(
    response: Response,
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Caller's sessions, most recent first."""
    sessions = BrowseService.list_sessions(current_user.id, db)
    if sessions is None:
        mark_unavailable(response)
        return []
    return [SessionResponse.model_validate(session) for session in sessions]
