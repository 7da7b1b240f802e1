# src/chat/routes.py
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from chat.services import ChatService
from chat.schemas import ChatSendRequest, ChatSendResponse, ChatMessageResponse
from chat.llm import LLMClient, get_llm_client
from auth.routes import get_current_user
from auth.models import User
from database import get_db, require_db, mark_unavailable

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/messages", response_model=List[ChatMessageResponse])
def get_messages(
    response: Response,
    session_id: str = Query(..., alias="sessionId"),
    db: Optional[Session] = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Chat transcript of a session, oldest first."""
    messages = ChatService.get_messages(session_id, current_user, db)
    if messages is None:
        mark_unavailable(response)
        return []
    return [ChatMessageResponse.model_validate(message) for message in messages]


@router.post("/send", response_model=ChatSendResponse)
def send(
    send_data: ChatSendRequest,
    db: Optional[Session] = Depends(get_db),
    llm: LLMClient = Depends(get_llm_client),
    current_user: User = Depends(get_current_user)
):
    """Send a message to the in-session assistant."""
    return ChatService.send(send_data.session_id, send_data.message, current_user, llm, require_db(db))
