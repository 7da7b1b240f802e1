# src/chat/schemas.py
from pydantic import Field
from datetime import datetime
from auth.schemas import CamelModel
from chat.models import ChatRole


class ChatSendRequest(CamelModel):
    session_id: str
    message: str = Field(min_length=1, max_length=4000)


class ChatSendResponse(CamelModel):
    user_message: str
    ai_response: str
    fallback: bool = False  # True when the assistant reply is the canned fallback


class ChatMessageResponse(CamelModel):
    id: str
    session_id: str
    user_id: str
    role: ChatRole
    content: str
    created_at: datetime
