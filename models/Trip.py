from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float
from sqlalchemy.orm import relationship
from database import Base
from models.base import utcnow

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(64), nullable=False, index=True)  # Creator uid
    title = Column(String(150), nullable=False)
    start_location = Column(String(250), nullable=False)
    destination = Column(String(250), nullable=False)
    start_date = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False)  # Days
    max_participants = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    budget = Column(Float, nullable=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    participants = relationship(
        "TripParticipant",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripParticipant.id",
    )
    join_requests = relationship("JoinRequest", back_populates="trip", cascade="all, delete-orphan")
    chat_messages = relationship("ChatMessage", back_populates="trip", cascade="all, delete-orphan")

    def has_participant(self, user_id: str) -> bool:
        return any(p.user_id == user_id for p in self.participants)

    def is_member(self, user_id: str) -> bool:
        """Owner or listed participant."""
        return self.owner_id == user_id or self.has_participant(user_id)

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.max_participants
