# src/chat/models.py
import enum
from uuid import uuid4

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base, utcnow
from datetime import datetime


class ChatRole(str, enum.Enum):
    user = "user"
    assistant = "assistant"


class ChatMessage(Base):
    """One turn of the in-session assistant chat. Append-only."""
    __tablename__ = "chat_messages"

    id: str = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    session_id: str = Column(String(64), ForeignKey("sessions.id"), index=True, nullable=False)
    user_id: str = Column(String(64), ForeignKey("users.id"), nullable=False)
    role: ChatRole = Column(Enum(ChatRole), nullable=False)
    content: str = Column(Text, nullable=False)
    created_at: datetime = Column(DateTime, nullable=False, default=utcnow)
    # position within the session; orders messages written in the same clock tick
    seq: int = Column(Integer, nullable=False, default=0)

    session = relationship("BrowsingSession", back_populates="messages")
