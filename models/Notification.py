from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SQLEnum, Index
from database import Base
from models.base import utcnow
import enum

class NotificationType(enum.Enum):
    TRIP_JOIN = "TRIP_JOIN"
    MESSAGE = "MESSAGE"
    TRIP_LEAVE = "TRIP_LEAVE"
    SYSTEM = "SYSTEM"
    JOIN_REQUEST = "JOIN_REQUEST"
    REQUEST_ACCEPTED = "REQUEST_ACCEPTED"
    REQUEST_DECLINED = "REQUEST_DECLINED"
    PARTICIPANT_REMOVED = "PARTICIPANT_REMOVED"

class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient_created", "recipient_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(String(64), nullable=False, index=True)
    # Sender snapshot
    sender_id = Column(String(64), nullable=False)
    sender_name = Column(String(100), nullable=False)
    sender_photo = Column(String(500), nullable=True)
    type = Column(SQLEnum(NotificationType), nullable=False)
    trip_id = Column(Integer, nullable=True)  # No FK: notifications outlive trips
    related_id = Column(Integer, nullable=True)  # e.g. JoinRequest id
    message = Column(String(500), nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
