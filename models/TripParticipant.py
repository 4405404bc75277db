from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.base import utcnow

class TripParticipant(Base):
    __tablename__ = "trip_participants"
    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_participant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    # Snapshot as of the accepted request
    name = Column(String(100), nullable=True)
    photo_url = Column(String(500), nullable=True)
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    trip = relationship("Trip", back_populates="participants")
