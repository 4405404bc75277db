from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, String, Index
from sqlalchemy.orm import relationship
from database import Base
from models.base import utcnow

class ChatMessage(Base):
    __tablename__ = "chat_messages"
    __table_args__ = (
        Index("ix_chat_messages_trip_created", "trip_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(String(64), nullable=False)
    sender_name = Column(String(100), nullable=False)
    sender_photo = Column(String(500), nullable=False, default="")
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    trip = relationship("Trip", back_populates="chat_messages")
