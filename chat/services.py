# src/chat/services.py
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
from auth.models import User
from browse.services import BrowseService
from chat.llm import LLMClient
from chat.models import ChatMessage, ChatRole
from chat.schemas import ChatSendResponse
from preferences.services import SettingsService
from config import settings
from errors import ConflictError, FeatureDisabledError

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I'm here to help you browse safely."

SYSTEM_PROMPT = (
    "You are a cybersecurity AI assistant helping users browse safely. "
    "Provide concise, helpful advice about web security, privacy, and safe browsing practices. "
    "Current browsing URL: {url}"
)


class ChatService:
    @staticmethod
    def get_messages(session_id: str, user: User, db: Optional[Session]) -> Optional[List[ChatMessage]]:
        """Transcript of an owned session, oldest first. None if the store is unavailable."""
        if db is None:
            return None
        BrowseService.get_owned_session(session_id, user.id, db)
        return (
            db.query(ChatMessage)
            .filter(ChatMessage.session_id == session_id)
            .order_by(ChatMessage.seq.asc(), ChatMessage.created_at.asc())
            .all()
        )

    @staticmethod
    def build_prompt(url: str, history: List[ChatMessage]) -> List[dict]:
        recent = history[-settings.CHAT_HISTORY_LIMIT:]
        return [{"role": "system", "content": SYSTEM_PROMPT.format(url=url)}] + [
            {"role": message.role.value, "content": message.content} for message in recent
        ]

    @staticmethod
    def _append(session_id: str, user_id: str, role: ChatRole, content: str, db: Session) -> ChatMessage:
        last = db.query(func.max(ChatMessage.seq)).filter(ChatMessage.session_id == session_id).scalar()
        message = ChatMessage(session_id=session_id, user_id=user_id, role=role, content=content, seq=(last or 0) + 1)
        db.add(message)
        db.commit()
        db.refresh(message)
        return message

    @staticmethod
    def send(session_id: str, text: str, user: User, llm: LLMClient, db: Session) -> ChatSendResponse:
        """Store the user's message, ask the assistant, store its reply.

        The user's message is committed before the completion call, so an
        upstream failure never loses it; the reply then falls back to a fixed text.
        """
        session = BrowseService.get_owned_session(session_id, user.id, db)
        if not session.is_active:
            raise ConflictError(f"Session is {session.status.value}")
        if not SettingsService.get_or_create(user.id, db).enable_ai_assistant:
            raise FeatureDisabledError("AI assistant is disabled in settings")

        ChatService._append(session_id, user.id, ChatRole.user, text, db)
        history = ChatService.get_messages(session_id, user, db)

        reply: Optional[str] = None
        if llm.configured:
            try:
                reply = llm.complete(ChatService.build_prompt(session.url, history))
            except Exception as e:
                logger.error(f"Assistant call failed for session {session_id}: {e}", exc_info=True)
        else:
            logger.info("LLM_API_KEY not set, using fallback reply")

        fallback = not reply
        if fallback:
            reply = FALLBACK_REPLY

        ChatService._append(session_id, user.id, ChatRole.assistant, reply, db)
        return ChatSendResponse(user_message=text, ai_response=reply, fallback=fallback)
