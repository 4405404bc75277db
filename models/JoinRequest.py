from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.base import utcnow
import enum

class JoinRequestStatus(enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

class JoinRequest(Base):
    __tablename__ = "join_requests"
    __table_args__ = (
        # One request per user and trip; concurrent duplicates fail on insert
        UniqueConstraint("trip_id", "user_id", name="uq_join_request"),
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    # Requester snapshot as of request time
    user_name = Column(String(100), nullable=False)
    user_photo = Column(String(500), nullable=True)
    message = Column(String(500), nullable=False)
    status = Column(SQLEnum(JoinRequestStatus), default=JoinRequestStatus.PENDING, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    trip = relationship("Trip", back_populates="join_requests")
